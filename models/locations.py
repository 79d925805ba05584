"""Monitored locations and their storage identifiers."""

from __future__ import annotations

from typing import Dict, Tuple

# Display order used by every multi-location view.
LOCATION_LABELS: Tuple[str, ...] = ("Dow's Lake", "Fifth Avenue", "NAC")

LOCATION_SLUGS: Dict[str, str] = {
    "Dow's Lake": "dows-lake",
    "Fifth Avenue": "fifth-avenue",
    "NAC": "nac",
}


def label_to_slug(label: str) -> str:
    """Return the stored slug for a display label.

    Unrecognised labels are returned unchanged so callers can query by a raw
    slug as well.
    """
    return LOCATION_SLUGS.get(label, label)

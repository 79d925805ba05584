"""Overall safety status across monitored locations."""

from __future__ import annotations

from typing import Any, Iterable

SAFE = "Safe"
CAUTION = "Caution"
UNSAFE = "Unsafe"


def overall_status(statuses: Iterable[Any]) -> str:
    """Worst-case rollup of per-location statuses.

    ``Safe`` only when at least one location reported and all are ``Safe``;
    ``Unsafe`` if any location is ``Unsafe``; otherwise ``Caution``. Values
    are compared exactly and never validated.
    """

    collected = list(statuses)
    if collected and all(status == SAFE for status in collected):
        return SAFE
    if any(status == UNSAFE for status in collected):
        return UNSAFE
    return CAUTION

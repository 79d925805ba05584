"""Helpers for raw sensor window documents read from the store."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, MutableSequence, Tuple

SensorWindowRecord = Dict[str, Any]

WINDOW_END_FIELD = "windowEndTime"
LEGACY_WINDOW_END_FIELD = "windowEnd"


def normalize_timestamps(
    records: MutableSequence[SensorWindowRecord],
) -> MutableSequence[SensorWindowRecord]:
    """Copy legacy ``windowEnd`` values into ``windowEndTime`` in place."""

    for record in records:
        if not record.get(WINDOW_END_FIELD) and record.get(LEGACY_WINDOW_END_FIELD):
            record[WINDOW_END_FIELD] = record[LEGACY_WINDOW_END_FIELD]
    return records


def parse_window_end(value: Any) -> datetime | None:
    """Parse a stored window end into an aware datetime, or ``None``."""

    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(value, str):
        return None

    candidate = value.strip()
    if not candidate:
        return None
    if candidate.endswith(("Z", "z")):
        candidate = f"{candidate[:-1]}+00:00"
    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def window_end_sort_key(record: SensorWindowRecord) -> Tuple[int, float]:
    """Sort key ordering newest first, records without a valid time last."""

    parsed = parse_window_end(record.get(WINDOW_END_FIELD))
    if parsed is None:
        return (1, 0.0)
    return (0, -parsed.timestamp())


def sort_latest_first(records: Iterable[SensorWindowRecord]) -> List[SensorWindowRecord]:
    return sorted(records, key=window_end_sort_key)

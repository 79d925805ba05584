from __future__ import annotations

from typing import Any, Dict


def window(
    location: str,
    end: str,
    status: str = "Safe",
    legacy: bool = False,
    **fields: Any,
) -> Dict[str, Any]:
    """Build a stored sensor window document."""

    record: Dict[str, Any] = {
        "id": f"{location}-{end}",
        "location": location,
        "safetyStatus": status,
        "avgIceThicknessCm": 30.5,
        "avgSurfaceTemperatureC": -4.2,
        "maxSnowAccumulationCm": 2.0,
        "avgExternalTemperatureC": -8.1,
        "readingCount": 30,
    }
    record["windowEnd" if legacy else "windowEndTime"] = end
    record.update(fields)
    return record

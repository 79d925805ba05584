"""Read views assembled from sensor window documents."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from datastore.base import RecordStore
from models.locations import LOCATION_LABELS, label_to_slug
from models.records import SensorWindowRecord, normalize_timestamps, sort_latest_first
from services.status import overall_status

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 12


@dataclass
class LatestReading:
    location: str
    safety_status: Any
    window_end_time: Any
    avg_ice_thickness: Any
    avg_surface_temperature: Any
    max_snow_accumulation: Any
    avg_external_temperature: Any
    reading_count: Any


@dataclass
class HistoryPoint:
    location: str
    window_end_time: Any
    avg_ice_thickness: Any
    avg_surface_temperature: Any
    max_snow_accumulation: Any
    safety_status: Any


@dataclass
class LocationStatus:
    location: str
    safety_status: Any
    window_end_time: Any


@dataclass
class StatusSummary:
    overall_status: str
    locations: List[LocationStatus] = field(default_factory=list)


@dataclass
class RecordListing:
    count: int
    records: List[SensorWindowRecord] = field(default_factory=list)


def parse_limit(raw: Optional[str], default: int = DEFAULT_HISTORY_LIMIT) -> int:
    """Parse a history limit; anything but a positive integer yields ``default``."""
    if raw is None:
        return default
    candidate = raw.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


class DashboardViews:
    """Builds the dashboard read views from an injected record store.

    Multi-location views query locations one after another and let the first
    failure propagate, so a response never mixes fresh and missing locations.
    """

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    async def latest(self) -> List[LatestReading]:
        readings: List[LatestReading] = []
        for label in LOCATION_LABELS:
            record = await self._latest_record(label)
            if record is None:
                continue
            readings.append(
                LatestReading(
                    location=label,
                    safety_status=record.get("safetyStatus"),
                    window_end_time=record.get("windowEndTime"),
                    avg_ice_thickness=record.get("avgIceThicknessCm"),
                    avg_surface_temperature=record.get("avgSurfaceTemperatureC"),
                    max_snow_accumulation=record.get("maxSnowAccumulationCm"),
                    avg_external_temperature=record.get("avgExternalTemperatureC"),
                    reading_count=record.get("readingCount"),
                )
            )
        return readings

    async def history(self, label: str, limit: int = DEFAULT_HISTORY_LIMIT) -> List[HistoryPoint]:
        """Most recent ``limit`` windows for a location, oldest first."""
        slug = label_to_slug(label)
        records = normalize_timestamps(await self.store.query_by_location(slug))
        recent = sort_latest_first(records)[:limit]
        logger.debug(
            "History query for %s",
            label,
            extra={"slug": slug, "limit": limit, "record_count": len(records)},
        )
        return [
            HistoryPoint(
                location=label,
                window_end_time=record.get("windowEndTime"),
                avg_ice_thickness=record.get("avgIceThicknessCm"),
                avg_surface_temperature=record.get("avgSurfaceTemperatureC"),
                max_snow_accumulation=record.get("maxSnowAccumulationCm"),
                safety_status=record.get("safetyStatus"),
            )
            for record in reversed(recent)
        ]

    async def status(self) -> StatusSummary:
        locations: List[LocationStatus] = []
        for label in LOCATION_LABELS:
            record = await self._latest_record(label)
            if record is None:
                continue
            locations.append(
                LocationStatus(
                    location=label,
                    safety_status=record.get("safetyStatus"),
                    window_end_time=record.get("windowEndTime"),
                )
            )
        return StatusSummary(
            overall_status=overall_status(item.safety_status for item in locations),
            locations=locations,
        )

    async def all_records(self) -> RecordListing:
        records = sort_latest_first(normalize_timestamps(await self.store.query_all()))
        return RecordListing(count=len(records), records=records)

    async def _latest_record(self, label: str) -> Optional[SensorWindowRecord]:
        slug = label_to_slug(label)
        records = normalize_timestamps(await self.store.query_by_location(slug))
        if not records:
            logger.debug("No records for location", extra={"location": label, "slug": slug})
            return None
        return sort_latest_first(records)[0]

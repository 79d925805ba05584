"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base model serialised with camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class LatestEntry(ApiModel):
    """Most recent window for one location."""

    location: str
    safety_status: Any = None
    window_end_time: Any = None
    avg_ice_thickness: Any = None
    avg_surface_temperature: Any = None
    max_snow_accumulation: Any = None
    avg_external_temperature: Any = None
    reading_count: Any = None


class HistoryEntry(ApiModel):
    """One point of a location's history chart."""

    location: str
    window_end_time: Any = None
    avg_ice_thickness: Any = None
    avg_surface_temperature: Any = None
    max_snow_accumulation: Any = None
    safety_status: Any = None


class LocationStatusEntry(ApiModel):
    location: str
    safety_status: Any = None
    window_end_time: Any = None


class LatestResponse(ApiModel):
    success: Literal[True] = True
    timestamp: datetime
    data: List[LatestEntry] = Field(default_factory=list)


class HistoryResponse(ApiModel):
    success: Literal[True] = True
    location: str
    data: List[HistoryEntry] = Field(default_factory=list)


class StatusResponse(ApiModel):
    success: Literal[True] = True
    overall_status: str
    locations: List[LocationStatusEntry] = Field(default_factory=list)


class AllRecordsResponse(ApiModel):
    success: Literal[True] = True
    count: int = Field(..., ge=0)
    data: List[Dict[str, Any]] = Field(
        default_factory=list, description="Raw documents, newest first."
    )


class ErrorResponse(ApiModel):
    """Body returned by every API route when the request fails."""

    success: Literal[False] = False
    error: str


class CosmosHealth(ApiModel):
    endpoint: Literal["configured", "missing"]
    database: Optional[str] = None
    container: Optional[str] = None


class HealthResponse(ApiModel):
    status: Literal["healthy"] = "healthy"
    timestamp: datetime
    cosmosdb: CosmosHealth

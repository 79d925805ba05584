"""HTTP route definitions for the service."""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse

from app.schemas import (
    AllRecordsResponse,
    CosmosHealth,
    ErrorResponse,
    HealthResponse,
    HistoryEntry,
    HistoryResponse,
    LatestEntry,
    LatestResponse,
    LocationStatusEntry,
    StatusResponse,
)
from datastore.base import RecordStore
from datastore.factory import build_default_store
from services.views import DashboardViews, parse_limit
from settings import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter()

_ERROR_RESPONSES = {status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse}}


class ViewUnavailable(Exception):
    """A read view failed; ``message`` is safe to show to clients."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


async def view_unavailable_handler(request: Request, exc: ViewUnavailable) -> JSONResponse:
    cause = exc.__cause__ or exc
    logger.error(
        "%s: %s",
        exc.message,
        cause,
        exc_info=(type(cause), cause, cause.__traceback__),
        extra={"route": request.url.path},
    )
    body = ErrorResponse(error=exc.message)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(by_alias=True),
    )


def get_store() -> RecordStore:
    return build_default_store()


def get_views(store: RecordStore = Depends(get_store)) -> DashboardViews:
    return DashboardViews(store)


@router.get(
    "/api/latest",
    response_model=LatestResponse,
    responses=_ERROR_RESPONSES,
    summary="Latest window for every monitored location.",
)
async def latest_readings(views: DashboardViews = Depends(get_views)) -> LatestResponse:
    try:
        readings = await views.latest()
        return LatestResponse(
            timestamp=datetime.now(timezone.utc),
            data=[LatestEntry.model_validate(asdict(reading)) for reading in readings],
        )
    except Exception as exc:
        raise ViewUnavailable("Failed to fetch latest data") from exc


@router.get(
    "/api/history/{location}",
    response_model=HistoryResponse,
    responses=_ERROR_RESPONSES,
    summary="Recent windows for one location, oldest first.",
)
async def location_history(
    location: str,
    limit: Optional[str] = Query(
        None, description="Number of most recent windows to return (default 12)."
    ),
    views: DashboardViews = Depends(get_views),
) -> HistoryResponse:
    try:
        points = await views.history(location, parse_limit(limit))
        return HistoryResponse(
            location=location,
            data=[HistoryEntry.model_validate(asdict(point)) for point in points],
        )
    except Exception as exc:
        raise ViewUnavailable("Failed to fetch historical data") from exc


@router.get(
    "/api/status",
    response_model=StatusResponse,
    responses=_ERROR_RESPONSES,
    summary="Overall safety status and latest status per location.",
)
async def system_status(views: DashboardViews = Depends(get_views)) -> StatusResponse:
    try:
        summary = await views.status()
        return StatusResponse(
            overall_status=summary.overall_status,
            locations=[LocationStatusEntry.model_validate(asdict(item)) for item in summary.locations],
        )
    except Exception as exc:
        raise ViewUnavailable("Failed to fetch system status") from exc


@router.get(
    "/api/all",
    response_model=AllRecordsResponse,
    responses=_ERROR_RESPONSES,
    summary="Every stored window, newest first.",
)
async def all_records(views: DashboardViews = Depends(get_views)) -> AllRecordsResponse:
    try:
        listing = await views.all_records()
        return AllRecordsResponse(count=listing.count, data=listing.records)
    except Exception as exc:
        raise ViewUnavailable("Failed to fetch all data") from exc


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness and store configuration check.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(
        timestamp=datetime.now(timezone.utc),
        cosmosdb=CosmosHealth(
            endpoint="configured" if settings.cosmos_endpoint else "missing",
            database=settings.cosmos_database,
            container=settings.cosmos_container,
        ),
    )

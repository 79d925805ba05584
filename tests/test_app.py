"""Integration tests for the HTTP routes."""

from __future__ import annotations

from typing import Iterator, List

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from datastore.base import RecordStore, StorageUnavailable
from datastore.factory import build_default_store
from datastore.memory import InMemoryRecordStore
from helpers import window
from settings import get_settings

_COSMOS_ENV = ("COSMOS_ENDPOINT", "COSMOS_KEY", "COSMOS_DATABASE", "COSMOS_CONTAINER")


class UnreachableStore(InMemoryRecordStore):
    async def query_by_location(self, slug: str):
        raise StorageUnavailable(f"cannot reach store for {slug}")

    async def query_all(self):
        raise StorageUnavailable("cannot reach store")


def _install_store(monkeypatch, store: RecordStore) -> None:
    def build_test_store() -> RecordStore:
        return store

    build_test_store.cache_clear = lambda: None  # type: ignore[attr-defined]

    monkeypatch.setattr("app.main.build_default_store", build_test_store)
    monkeypatch.setattr("app.api.build_default_store", build_test_store)


@pytest.fixture
def records() -> List[dict]:
    return [
        window("nac", f"2025-01-10T10:0{minute}:00Z", "Safe", readingCount=minute)
        for minute in range(5)
    ] + [
        window("dows-lake", "2025-01-10T10:00:00Z", "Caution", legacy=True),
        window("fifth-avenue", "2025-01-10T09:00:00Z", "Safe"),
    ]


@pytest.fixture
def api_client(monkeypatch, records) -> Iterator[TestClient]:
    _install_store(monkeypatch, InMemoryRecordStore(records))
    app = create_app()
    with TestClient(app) as client:
        yield client


@pytest.fixture
def failing_client(monkeypatch) -> Iterator[TestClient]:
    _install_store(monkeypatch, UnreachableStore())
    app = create_app()
    with TestClient(app) as client:
        yield client


def test_lifespan_closes_store_and_clears_cache(monkeypatch) -> None:
    for name in _COSMOS_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("RECORD_STORE_BACKEND", raising=False)
    get_settings.cache_clear()
    build_default_store.cache_clear()

    try:
        app = create_app()
        with TestClient(app):
            store_during = build_default_store()

        store_after = build_default_store()
        assert store_after is not store_during
    finally:
        build_default_store.cache_clear()
        get_settings.cache_clear()


def test_latest_returns_newest_window_per_location(api_client: TestClient) -> None:
    response = api_client.get("/api/latest")

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert payload["timestamp"]
    locations = [entry["location"] for entry in payload["data"]]
    assert locations == ["Dow's Lake", "Fifth Avenue", "NAC"]

    nac = payload["data"][2]
    assert nac == {
        "location": "NAC",
        "safetyStatus": "Safe",
        "windowEndTime": "2025-01-10T10:04:00Z",
        "avgIceThickness": 30.5,
        "avgSurfaceTemperature": -4.2,
        "maxSnowAccumulation": 2.0,
        "avgExternalTemperature": -8.1,
        "readingCount": 4,
    }
    assert payload["data"][0]["windowEndTime"] == "2025-01-10T10:00:00Z"


def test_history_returns_most_recent_oldest_first(api_client: TestClient) -> None:
    response = api_client.get("/api/history/NAC", params={"limit": "2"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert payload["location"] == "NAC"
    assert [point["windowEndTime"] for point in payload["data"]] == [
        "2025-01-10T10:03:00Z",
        "2025-01-10T10:04:00Z",
    ]
    assert set(payload["data"][0]) == {
        "location",
        "windowEndTime",
        "avgIceThickness",
        "avgSurfaceTemperature",
        "maxSnowAccumulation",
        "safetyStatus",
    }


def test_history_decodes_label_and_defaults_bad_limit(api_client: TestClient) -> None:
    response = api_client.get("/api/history/Dow%27s%20Lake?limit=abc")

    assert response.status_code == 200
    payload = response.json()
    assert payload["location"] == "Dow's Lake"
    assert len(payload["data"]) == 1


def test_history_zero_limit_uses_default(api_client: TestClient) -> None:
    response = api_client.get("/api/history/NAC?limit=0")

    assert response.status_code == 200
    assert len(response.json()["data"]) == 5


def test_history_unknown_location_is_empty(api_client: TestClient) -> None:
    response = api_client.get("/api/history/Nowhere")

    assert response.status_code == 200
    assert response.json() == {"success": True, "location": "Nowhere", "data": []}


def test_status_reports_overall_and_locations(api_client: TestClient) -> None:
    response = api_client.get("/api/status")

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert payload["overallStatus"] == "Caution"
    assert payload["locations"][0] == {
        "location": "Dow's Lake",
        "safetyStatus": "Caution",
        "windowEndTime": "2025-01-10T10:00:00Z",
    }
    assert len(payload["locations"]) == 3


def test_all_returns_raw_records_newest_first(api_client: TestClient, records) -> None:
    response = api_client.get("/api/all")

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert payload["count"] == len(records)
    assert payload["data"][0]["windowEndTime"] == "2025-01-10T10:04:00Z"
    assert payload["data"][-1]["location"] == "fifth-avenue"
    assert "avgIceThicknessCm" in payload["data"][0]


@pytest.mark.parametrize(
    ("path", "message"),
    [
        ("/api/latest", "Failed to fetch latest data"),
        ("/api/history/NAC", "Failed to fetch historical data"),
        ("/api/status", "Failed to fetch system status"),
        ("/api/all", "Failed to fetch all data"),
    ],
)
def test_store_failures_return_generic_error(
    failing_client: TestClient, caplog, path: str, message: str
) -> None:
    with caplog.at_level("ERROR"):
        response = failing_client.get(path)

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": message}
    assert any("cannot reach store" in record.getMessage() for record in caplog.records)


def test_dashboard_page_lists_locations(api_client: TestClient) -> None:
    response = api_client.get("/")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Fifth Avenue" in response.text
    assert "/static/dashboard.js" in response.text


def test_static_assets_are_served(api_client: TestClient) -> None:
    response = api_client.get("/static/dashboard.js")

    assert response.status_code == 200


def test_health_reports_missing_endpoint(monkeypatch, api_client: TestClient) -> None:
    for name in _COSMOS_ENV:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()

    try:
        response = api_client.get("/health")
    finally:
        get_settings.cache_clear()

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "healthy"
    assert payload["timestamp"]
    assert payload["cosmosdb"] == {"endpoint": "missing", "database": None, "container": None}


def test_health_reports_configuration(monkeypatch, api_client: TestClient) -> None:
    monkeypatch.setenv("COSMOS_ENDPOINT", "https://unreachable.invalid:443/")
    monkeypatch.setenv("COSMOS_DATABASE", "RideauCanalDB")
    monkeypatch.setenv("COSMOS_CONTAINER", "SensorAggregations")
    get_settings.cache_clear()

    try:
        response = api_client.get("/health")
    finally:
        get_settings.cache_clear()

    assert response.json()["cosmosdb"] == {
        "endpoint": "configured",
        "database": "RideauCanalDB",
        "container": "SensorAggregations",
    }


def test_unusual_stored_values_pass_through_unchanged(monkeypatch) -> None:
    records = [
        window("dows-lake", "2025-01-10T10:00:00Z", "Safe"),
        window(
            "nac",
            "2025-01-10T10:00:00Z",
            2,
            avgIceThicknessCm="n/a",
            avgSurfaceTemperatureC="25.3",
            readingCount=29.5,
        ),
    ]
    _install_store(monkeypatch, InMemoryRecordStore(records))

    with TestClient(create_app()) as client:
        latest = client.get("/api/latest")
        history = client.get("/api/history/NAC")
        status_response = client.get("/api/status")

    assert latest.status_code == 200
    nac = latest.json()["data"][1]
    assert nac["location"] == "NAC"
    assert nac["safetyStatus"] == 2
    assert nac["avgIceThickness"] == "n/a"
    assert nac["avgSurfaceTemperature"] == "25.3"
    assert nac["readingCount"] == 29.5
    assert latest.json()["data"][0]["avgIceThickness"] == 30.5

    assert history.status_code == 200
    point = history.json()["data"][0]
    assert point["avgIceThickness"] == "n/a"
    assert point["safetyStatus"] == 2

    assert status_response.status_code == 200
    payload = status_response.json()
    assert payload["overallStatus"] == "Caution"
    assert [item["safetyStatus"] for item in payload["locations"]] == ["Safe", 2]


def test_cross_origin_requests_are_allowed(api_client: TestClient) -> None:
    response = api_client.get(
        "/api/latest", headers={"Origin": "https://dashboard.example.com"}
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"

from __future__ import annotations

from typing import Any, Dict, Iterable

import typer

_STATUS_COLORS = {
    "Safe": typer.colors.GREEN,
    "Caution": typer.colors.YELLOW,
    "Unsafe": typer.colors.RED,
}


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {'-' if value is None else value}")


def echo_status(label: str, status: str | None) -> None:
    typer.echo(f"{label}: ", nl=False)
    typer.secho(status or "unknown", fg=_STATUS_COLORS.get(status or ""), bold=True)


def render_latest(payload: Dict[str, Any]) -> None:
    echo_heading(f"Latest readings ({payload.get('timestamp')})")
    entries = payload.get("data") or []
    if not entries:
        typer.echo("No readings available.")
        return
    for entry in entries:
        typer.echo()
        echo_heading(str(entry.get("location")))
        echo_status("safetyStatus", entry.get("safetyStatus"))
        echo_key_values(
            [
                ("windowEndTime", entry.get("windowEndTime")),
                ("avgIceThickness", entry.get("avgIceThickness")),
                ("avgSurfaceTemperature", entry.get("avgSurfaceTemperature")),
                ("maxSnowAccumulation", entry.get("maxSnowAccumulation")),
                ("avgExternalTemperature", entry.get("avgExternalTemperature")),
                ("readingCount", entry.get("readingCount")),
            ]
        )


def render_history(payload: Dict[str, Any]) -> None:
    echo_heading(f"History for {payload.get('location')}")
    points = payload.get("data") or []
    if not points:
        typer.echo("No history available.")
        return
    for point in points:
        typer.echo(
            f"  - {point.get('windowEndTime')}: "
            f"ice={point.get('avgIceThickness')} "
            f"surface={point.get('avgSurfaceTemperature')} "
            f"snow={point.get('maxSnowAccumulation')} "
            f"status={point.get('safetyStatus')}"
        )


def render_status(payload: Dict[str, Any]) -> None:
    echo_status("Overall", payload.get("overallStatus"))
    locations = payload.get("locations") or []
    if not locations:
        typer.echo("No locations reporting.")
        return
    for item in locations:
        echo_status(f"  {item.get('location')}", item.get("safetyStatus"))


def render_health(payload: Dict[str, Any]) -> None:
    echo_heading("Health")
    cosmos = payload.get("cosmosdb") or {}
    echo_key_values(
        [
            ("status", payload.get("status")),
            ("timestamp", payload.get("timestamp")),
            ("cosmosdb.endpoint", cosmos.get("endpoint")),
            ("cosmosdb.database", cosmos.get("database")),
            ("cosmosdb.container", cosmos.get("container")),
        ]
    )

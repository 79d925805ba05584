from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_health, render_history, render_latest, render_status


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for running and querying the canal dashboard API.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Dashboard API base URL (defaults to API_BASE_URL env or http://localhost:3000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for each API response.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("serve")
def serve_command(
    host: Optional[str] = typer.Option(None, "--host", help="Listen host (defaults to HOST env)."),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Listen port (defaults to PORT env or 3000)."),
    env_file: Optional[str] = typer.Option(
        ".env",
        "--env-file",
        help="Dotenv file loaded before reading settings.",
    ),
) -> None:
    """Run the dashboard API server."""
    import uvicorn
    from dotenv import load_dotenv

    from settings import get_settings

    if env_file:
        load_dotenv(env_file)
    get_settings.cache_clear()
    settings = get_settings()
    bind_host = host or settings.host
    bind_port = port or settings.port

    typer.echo(f"Dashboard running on http://{bind_host}:{bind_port}")
    typer.echo(f"API endpoints at http://{bind_host}:{bind_port}/api/...")
    typer.echo(f"Health: http://{bind_host}:{bind_port}/health")
    uvicorn.run("app.main:app", host=bind_host, port=bind_port, log_config=None)


@app.command("latest")
def latest_command(ctx: typer.Context) -> None:
    """Show the latest window for every location."""
    state = _get_state(ctx)
    render_latest(state.client.get_latest())


@app.command("history")
def history_command(
    ctx: typer.Context,
    location: str = typer.Argument(..., help="Location label, e.g. \"Dow's Lake\"."),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-n",
        min=1,
        help="Number of most recent windows (server default 12).",
    ),
) -> None:
    """Show recent windows for one location, oldest first."""
    state = _get_state(ctx)
    render_history(state.client.get_history(location, limit=limit))


@app.command("status")
def status_command(ctx: typer.Context) -> None:
    """Show the overall and per-location safety status."""
    state = _get_state(ctx)
    render_status(state.client.get_status())


@app.command("health")
def health_command(ctx: typer.Context) -> None:
    """Show server health and store configuration."""
    state = _get_state(ctx)
    render_health(state.client.get_health())

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import httpx
import typer

from cli.client import ApiClient
from cli.config import DEFAULT_WATCH_INTERVAL, DEFAULT_WATCH_LIMIT, CLIConfig, load_config
from cli.render import render_cards, render_table, render_trends, render_unavailable


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Terminal dashboard for the structural health monitoring service.",
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
        help="Service base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="HTTP timeout in seconds for each request.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("send")
def send_command(
    ctx: typer.Context,
    strain: float = typer.Argument(..., help="Strain measurement."),
    vibration: float = typer.Argument(..., help="Vibration measurement."),
    displacement: float = typer.Argument(..., help="Displacement measurement."),
    acceleration: float = typer.Argument(..., help="Acceleration measurement."),
) -> None:
    """Submit one reading to the service."""
    state = _get_state(ctx)
    reading = state.client.send_reading(
        {
            "strain": strain,
            "vibration": vibration,
            "displacement": displacement,
            "acceleration": acceleration,
        }
    )
    typer.secho(f"Reading stored. id={reading.get('id')}", fg=typer.colors.GREEN)
    render_cards(reading)


@app.command("list")
def list_command(
    ctx: typer.Context,
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Number of readings to show."),
) -> None:
    """Show the most recent readings."""
    state = _get_state(ctx)
    render_table(state.client.list_readings(limit))


@app.command("latest")
def latest_command(ctx: typer.Context) -> None:
    """Show summary cards for the newest reading."""
    state = _get_state(ctx)
    render_cards(state.client.latest_reading())


@app.command("download")
def download_command(
    ctx: typer.Context,
    output: Path = typer.Option(
        Path("sensor_data.xlsx"),
        "--output",
        "-o",
        dir_okay=False,
        help="Where to write the spreadsheet.",
    ),
) -> None:
    """Save the spreadsheet export of all retained readings."""
    state = _get_state(ctx)
    size = state.client.download_export(output)
    typer.secho(f"Saved {size} bytes to {output}", fg=typer.colors.GREEN)


@app.command("watch")
def watch_command(
    ctx: typer.Context,
    interval: float = typer.Option(
        DEFAULT_WATCH_INTERVAL, "--interval", min=0.0, help="Seconds between polls."
    ),
    limit: int = typer.Option(
        DEFAULT_WATCH_LIMIT, "--limit", "-n", min=1, help="Readings per poll."
    ),
    iterations: Optional[int] = typer.Option(
        None, "--iterations", min=1, help="Stop after this many polls (default: run until interrupted)."
    ),
) -> None:
    """Poll the service and render cards, alerts and trends for each window."""
    state = _get_state(ctx)
    completed = 0
    while iterations is None or completed < iterations:
        if completed:
            time.sleep(interval)
        completed += 1
        try:
            readings = state.client.fetch_window(limit)
        except httpx.HTTPError as exc:
            render_unavailable(str(exc) or exc.__class__.__name__)
            continue
        typer.echo()
        if not readings:
            typer.echo("No readings available.")
            continue
        render_cards(readings[0])
        render_trends(readings)

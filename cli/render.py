from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping

import typer

from cli.config import THRESHOLDS

_SENSORS = tuple(THRESHOLDS)
_SPARK_CHARS = " .:-=+*#%@"


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def exceeded_sensors(reading: Mapping[str, Any]) -> List[str]:
    """Names of the sensors whose value is above its static threshold."""
    flagged = []
    for sensor, threshold in THRESHOLDS.items():
        value = reading.get(sensor)
        if isinstance(value, (int, float)) and value > threshold:
            flagged.append(sensor)
    return flagged


def time_label(timestamp: str) -> str:
    """Time-of-day component of a ``YYYY-MM-DD, HH:MM:SS`` timestamp."""
    _, _, clock = timestamp.rpartition(" ")
    return clock or timestamp


def sparkline(values: Iterable[float]) -> str:
    points = list(values)
    if not points:
        return ""
    low, high = min(points), max(points)
    span = high - low
    last = len(_SPARK_CHARS) - 1
    if span == 0:
        return _SPARK_CHARS[last // 2] * len(points)
    return "".join(_SPARK_CHARS[round((value - low) / span * last)] for value in points)


def render_cards(reading: Mapping[str, Any]) -> None:
    echo_heading("Latest Reading")
    typer.echo(f"timestamp: {reading.get('timestamp')}")
    typer.echo(f"id: {reading.get('id')}")
    flagged = set(exceeded_sensors(reading))
    for sensor in _SENSORS:
        line = f"{sensor}: {reading.get(sensor)}"
        if sensor in flagged:
            typer.secho(
                f"{line}  ALERT exceeds threshold of {THRESHOLDS[sensor]:g}",
                fg=typer.colors.RED,
                bold=True,
            )
        else:
            typer.echo(line)
    if flagged:
        typer.secho(
            "Warning: Some sensor values have exceeded their thresholds!",
            fg=typer.colors.YELLOW,
        )


def render_table(readings: List[Dict[str, Any]]) -> None:
    echo_heading("Readings (newest first)")
    if not readings:
        typer.echo("No readings available.")
        return
    header = ["timestamp", *_SENSORS, "id"]
    typer.echo(" | ".join(header))
    for reading in readings:
        typer.echo(" | ".join(str(reading.get(column)) for column in header))


def render_trends(readings: List[Dict[str, Any]]) -> None:
    """Plot each sensor over the window, oldest on the left."""
    if not readings:
        return
    chronological = list(reversed(readings))
    echo_heading("Trends")
    typer.echo(
        f"window: {time_label(chronological[0].get('timestamp', ''))}"
        f" -> {time_label(chronological[-1].get('timestamp', ''))}"
    )
    for sensor in _SENSORS:
        values = [float(item.get(sensor, 0.0)) for item in chronological]
        typer.echo(f"{sensor:<13}{sparkline(values)}")


def render_unavailable(reason: str) -> None:
    typer.secho(f"Data unavailable (stale): {reason}", fg=typer.colors.YELLOW, err=True)

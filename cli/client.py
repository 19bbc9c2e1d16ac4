from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx
import typer

from cli.config import CLIConfig


class ApiClient:
    """Minimal HTTP client for the sensor reading service."""

    def __init__(
        self, config: CLIConfig, transport: Optional[httpx.BaseTransport] = None
    ) -> None:
        self._config = config
        self._client = httpx.Client(
            base_url=config.base_url, timeout=config.timeout, transport=transport
        )

    def close(self) -> None:
        self._client.close()

    def send_reading(self, values: Dict[str, float]) -> Dict[str, Any]:
        try:
            response = self._client.post("/sensor-data", json=values)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        payload = response.json()
        reading = payload.get("latestData")
        if not isinstance(reading, dict):
            raise typer.BadParameter("Unexpected response payload when sending reading.")
        return reading

    def list_readings(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        params = {"limit": limit} if limit is not None else None
        try:
            response = self._client.get("/sensor-data", params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        return list(response.json().get("data") or [])

    def latest_reading(self) -> Dict[str, Any]:
        try:
            response = self._client.get("/sensor-data/latest")
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        return response.json()["data"]

    def download_export(self, destination: Path) -> int:
        try:
            response = self._client.get("/sensor-data/download")
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        destination.write_bytes(response.content)
        return len(response.content)

    def fetch_window(self, limit: int) -> List[Dict[str, Any]]:
        """Fetch the polling window, letting transport and status errors propagate."""
        response = self._client.get("/sensor-data", params={"limit": limit})
        response.raise_for_status()
        return list(response.json().get("data") or [])

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> None:
        detail: str | None = None
        try:
            data = exc.response.json()
            detail = data.get("message") or data.get("detail")
        except Exception:  # noqa: BLE001 - best effort parsing
            detail = exc.response.text.strip()
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

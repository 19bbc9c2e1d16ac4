from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, Optional

DEFAULT_BASE_URL = "http://localhost:8000"
DEFAULT_HTTP_TIMEOUT = 10.0
DEFAULT_WATCH_INTERVAL = 5.0
DEFAULT_WATCH_LIMIT = 20

# Static alert levels per sensor; a card is flagged when its value exceeds these.
THRESHOLDS: Dict[str, float] = {
    "strain": 1000.0,
    "vibration": 500.0,
    "displacement": 100.0,
    "acceleration": 200.0,
}

_BASE_URL_ENV = "API_BASE_URL"
_TIMEOUT_ENV = "CLI_HTTP_TIMEOUT"


@dataclass(frozen=True)
class CLIConfig:
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_HTTP_TIMEOUT


def _read_float(value: Optional[str], default: float) -> float:
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def load_config(
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> CLIConfig:
    url = base_url or os.getenv(_BASE_URL_ENV) or DEFAULT_BASE_URL
    if timeout is None:
        timeout = _read_float(os.getenv(_TIMEOUT_ENV), DEFAULT_HTTP_TIMEOUT)
    return CLIConfig(base_url=url.rstrip("/"), timeout=timeout)

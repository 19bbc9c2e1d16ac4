from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple


_CAPACITY_ENV = "SHM_STORE_CAPACITY"
_DEFAULT_LIMIT_ENV = "SHM_DEFAULT_LIMIT"
_TIMEZONE_ENV = "SHM_TIMEZONE"
_EXPORT_FILENAME_ENV = "SHM_EXPORT_FILENAME"
_CORS_ORIGINS_ENV = "SHM_CORS_ORIGINS"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    store_capacity: int
    default_limit: int
    timezone: str
    export_filename: str
    cors_origins: Tuple[str, ...]
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_positive_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_origins(default: Tuple[str, ...]) -> Tuple[str, ...]:
    value = os.getenv(_CORS_ORIGINS_ENV)
    if value is None:
        return default
    origins = tuple(part.strip() for part in value.split(",") if part.strip())
    return origins or default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        store_capacity=_read_positive_int(_CAPACITY_ENV, 50),
        default_limit=_read_positive_int(_DEFAULT_LIMIT_ENV, 10),
        timezone=_read_str_env(_TIMEZONE_ENV, "Asia/Kolkata"),
        export_filename=_read_str_env(_EXPORT_FILENAME_ENV, "sensor_data.xlsx"),
        cors_origins=_read_origins(("*",)),
        log_level=_read_log_level("INFO"),
    )

from __future__ import annotations

import logging
from typing import Iterable

from datastore.reading_store import build_default_store
from logging_config import ContextualFormatter
from services.clock import SystemClock
from services.readings import build_default_service
from settings import get_settings


def _clear_caches(caches: Iterable) -> None:
    for cache in caches:
        cache.cache_clear()


def test_environment_overrides_apply(monkeypatch) -> None:
    monkeypatch.setenv("SHM_STORE_CAPACITY", "5")
    monkeypatch.setenv("SHM_DEFAULT_LIMIT", "2")
    monkeypatch.setenv("SHM_TIMEZONE", "UTC")
    monkeypatch.setenv("SHM_EXPORT_FILENAME", "bridge.xlsx")
    monkeypatch.setenv("SHM_CORS_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    caches = (get_settings, build_default_store, build_default_service)
    _clear_caches(caches)

    try:
        settings = get_settings()
        service = build_default_service()

        assert settings.export_filename == "bridge.xlsx"
        assert settings.cors_origins == ("http://a.test", "http://b.test")
        assert settings.log_level == "DEBUG"
        assert service.store.capacity == 5
        assert service.store.default_limit == 2
    finally:
        _clear_caches(caches)


def test_invalid_values_fall_back_to_defaults(monkeypatch) -> None:
    monkeypatch.setenv("SHM_STORE_CAPACITY", "-4")
    monkeypatch.setenv("SHM_DEFAULT_LIMIT", "many")
    monkeypatch.setenv("SHM_CORS_ORIGINS", " , ")
    get_settings.cache_clear()

    try:
        settings = get_settings()
        assert settings.store_capacity == 50
        assert settings.default_limit == 10
        assert settings.cors_origins == ("*",)
    finally:
        get_settings.cache_clear()


def test_unknown_timezone_falls_back_to_utc() -> None:
    clock = SystemClock.for_zone("Not/AZone")

    assert clock.now().utcoffset().total_seconds() == 0


def test_contextual_formatter_appends_extra_keys() -> None:
    formatter = ContextualFormatter(fmt="%(message)s", extra_keys=["reading_id", "fields"])
    record = logging.LogRecord("shm", logging.INFO, __file__, 1, "Stored", None, None)
    record.reading_id = "123"
    record.fields = ["strain", "vibration"]

    assert formatter.format(record) == "Stored | reading_id=123 fields=strain,vibration"

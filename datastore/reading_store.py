from __future__ import annotations

import math
import re
from functools import lru_cache
from threading import Lock
from typing import Any, List, Optional

from models.records import SensorReading
from settings import get_settings

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def coerce_limit(value: Any, default: int) -> int:
    """Return the leading integer of ``value`` if positive, else ``default``.

    Strings are read like a query-string ``parseInt``: ``"20abc"`` is 20 and
    ``"1.5"`` is 1. Floats are truncated.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, float):
        if not math.isfinite(value):
            return default
        parsed = int(value)
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match is None:
            return default
        try:
            parsed = int(match.group(1))
        except ValueError:
            return default
    else:
        return default
    return parsed if parsed > 0 else default


class ReadingStore:
    """Bounded, newest-first sequence of sensor readings held in process memory."""

    def __init__(self, capacity: int = 50, default_limit: int = 10) -> None:
        if capacity <= 0:
            raise ValueError("Store capacity must be positive.")
        self.capacity = capacity
        self.default_limit = default_limit
        self._readings: List[SensorReading] = []
        self._lock = Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._readings)

    def insert(self, reading: SensorReading) -> None:
        with self._lock:
            self._readings.insert(0, reading)
            if len(self._readings) > self.capacity:
                del self._readings[self.capacity :]

    def read_recent(self, limit: Any = None) -> List[SensorReading]:
        count = coerce_limit(limit, self.default_limit)
        with self._lock:
            return self._readings[:count]

    def read_latest(self) -> Optional[SensorReading]:
        with self._lock:
            if not self._readings:
                return None
            return self._readings[0]

    def read_all(self) -> List[SensorReading]:
        """Return a snapshot of every retained reading, newest first."""

        with self._lock:
            return list(self._readings)

    def clear(self) -> None:
        with self._lock:
            self._readings.clear()


@lru_cache
def build_default_store(
    capacity: Optional[int] = None,
    default_limit: Optional[int] = None,
) -> ReadingStore:
    settings = get_settings()
    store_capacity = settings.store_capacity if capacity is None else capacity
    limit = settings.default_limit if default_limit is None else default_limit
    return ReadingStore(capacity=store_capacity, default_limit=limit)

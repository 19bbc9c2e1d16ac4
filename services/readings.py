"""Validated ingest and read access over the shared reading store."""

from __future__ import annotations

import logging
import math
from functools import lru_cache
from threading import Lock
from typing import Any, List, Mapping, Optional

from datastore.reading_store import ReadingStore, build_default_store, coerce_limit
from models.records import SENSOR_FIELDS, SensorReading
from services.clock import Clock, SystemClock, epoch_millis, format_timestamp
from services.errors import NotFoundError, SerializationError, ValidationError
from services.exporter import SpreadsheetExporter
from settings import get_settings

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = (
    "Missing required fields: strain, vibration, displacement, or acceleration"
)


class ReadingService:
    """Accepts new readings and serves paged, latest and exported views of the store."""

    def __init__(
        self,
        store: ReadingStore,
        clock: Clock,
        exporter: Optional[SpreadsheetExporter] = None,
    ) -> None:
        self.store = store
        self.clock = clock
        self.exporter = exporter or SpreadsheetExporter()
        self._last_id = 0
        self._id_lock = Lock()

    def accept(self, payload: Any) -> SensorReading:
        """Validate ``payload``, stamp it with time and id, and insert it."""
        if not isinstance(payload, Mapping):
            raise ValidationError("Request body must be a JSON object.")

        missing = [name for name in SENSOR_FIELDS if payload.get(name) is None]
        if missing:
            logger.warning(
                "Rejected reading with missing fields", extra={"fields": missing}
            )
            raise ValidationError(MISSING_FIELDS_MESSAGE, fields=missing)

        values = {name: self._coerce_number(name, payload[name]) for name in SENSOR_FIELDS}

        moment = self.clock.now()
        reading = SensorReading(
            timestamp=format_timestamp(moment),
            id=str(self._next_id(epoch_millis(moment))),
            **values,
        )
        self.store.insert(reading)
        logger.info(
            "Stored sensor reading",
            extra={"reading_id": reading.id, "store_size": len(self.store)},
        )
        return reading

    def query(self, limit: Any = None) -> List[SensorReading]:
        readings = self.store.read_recent(limit)
        logger.debug(
            "Served recent readings",
            extra={
                "limit": coerce_limit(limit, self.store.default_limit),
                "row_count": len(readings),
            },
        )
        return readings

    def query_latest(self) -> SensorReading:
        reading = self.store.read_latest()
        if reading is None:
            raise NotFoundError("No data available")
        return reading

    def export(self) -> bytes:
        readings = self.store.read_all()
        try:
            document = self.exporter.render(readings)
        except Exception as exc:
            logger.exception("Failed to build spreadsheet export")
            raise SerializationError("Error generating Excel file") from exc
        logger.info("Exported sensor readings", extra={"row_count": len(readings)})
        return document

    def _next_id(self, millis: int) -> int:
        with self._id_lock:
            candidate = millis if millis > self._last_id else self._last_id + 1
            self._last_id = candidate
            return candidate

    @staticmethod
    def _coerce_number(name: str, raw: Any) -> float:
        if isinstance(raw, bool):
            raise ValidationError(f"Field {name!r} must be numeric.", fields=[name])
        if isinstance(raw, (int, float)):
            try:
                value = float(raw)
            except OverflowError as exc:
                raise ValidationError(
                    f"Field {name!r} must be a finite number.", fields=[name]
                ) from exc
        elif isinstance(raw, str):
            try:
                value = float(raw.strip())
            except ValueError as exc:
                raise ValidationError(
                    f"Field {name!r} must be numeric.", fields=[name]
                ) from exc
        else:
            raise ValidationError(f"Field {name!r} must be numeric.", fields=[name])
        if not math.isfinite(value):
            raise ValidationError(f"Field {name!r} must be a finite number.", fields=[name])
        return value


@lru_cache
def build_default_service() -> ReadingService:
    """Factory that wires the service with the process-wide store."""
    settings = get_settings()
    store = build_default_store()
    clock = SystemClock.for_zone(settings.timezone)
    return ReadingService(store=store, clock=clock, exporter=SpreadsheetExporter())

from __future__ import annotations

import logging
from datetime import datetime, timezone, tzinfo
from typing import Optional, Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d, %H:%M:%S"


class Clock(Protocol):
    def now(self) -> datetime:
        """Return the current time as a timezone-aware datetime."""


class SystemClock:
    """Wall-clock time rendered in a fixed timezone."""

    def __init__(self, tz: Optional[tzinfo] = None) -> None:
        self.tz = tz or timezone.utc

    @classmethod
    def for_zone(cls, name: str) -> "SystemClock":
        try:
            zone: tzinfo = ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("Unknown timezone, falling back to UTC", extra={"reason": name})
            zone = timezone.utc
        return cls(zone)

    def now(self) -> datetime:
        return datetime.now(self.tz)


def format_timestamp(moment: datetime) -> str:
    return moment.strftime(TIMESTAMP_FORMAT)


def epoch_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)

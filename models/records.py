"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

SENSOR_FIELDS = ("strain", "vibration", "displacement", "acceleration")


@dataclass(frozen=True, slots=True)
class SensorReading:
    """One timestamped sample of the four monitored quantities."""

    strain: float
    vibration: float
    displacement: float
    acceleration: float
    timestamp: str
    id: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

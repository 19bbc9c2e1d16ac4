"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from models.records import SensorReading


class Reading(BaseModel):
    """A stored sensor reading as exposed over HTTP."""

    strain: float
    vibration: float
    displacement: float
    acceleration: float
    timestamp: str = Field(..., description="Local ingest time, YYYY-MM-DD, HH:MM:SS.")
    id: str = Field(..., description="Opaque identifier derived from ingest time.")

    @classmethod
    def from_record(cls, record: SensorReading) -> "Reading":
        return cls(**record.to_dict())


class IngestResponse(BaseModel):
    """Confirmation returned after a reading is stored."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    latest_data: Reading = Field(..., alias="latestData")


class ReadingListResponse(BaseModel):
    success: bool = True
    data: List[Reading] = Field(default_factory=list)


class ReadingResponse(BaseModel):
    success: bool = True
    data: Reading


class ErrorResponse(BaseModel):
    """Envelope used for every failed request."""

    success: bool = False
    message: str

"""HTTP route definitions for the service."""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, Response, status

from app.schemas import (
    ErrorResponse,
    IngestResponse,
    Reading,
    ReadingListResponse,
    ReadingResponse,
)
from services.exporter import XLSX_MEDIA_TYPE
from services.readings import ReadingService, build_default_service
from settings import get_settings

router = APIRouter()


def get_service() -> ReadingService:
    return build_default_service()


@router.post(
    "/sensor-data",
    response_model=IngestResponse,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
    summary="Store a new sensor reading.",
)
async def post_sensor_data(
    payload: Any = Body(..., description="Object with strain, vibration, displacement and acceleration."),
    service: ReadingService = Depends(get_service),
) -> IngestResponse:
    reading = service.accept(payload)
    return IngestResponse(
        message="Data stored successfully in memory",
        latest_data=Reading.from_record(reading),
    )


@router.get(
    "/sensor-data",
    response_model=ReadingListResponse,
    summary="List the most recent readings, newest first.",
)
async def list_sensor_data(
    limit: Optional[str] = Query(None, description="Maximum number of readings to return."),
    service: ReadingService = Depends(get_service),
) -> ReadingListResponse:
    readings = service.query(limit)
    return ReadingListResponse(data=[Reading.from_record(item) for item in readings])


@router.get(
    "/sensor-data/latest",
    response_model=ReadingResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
    summary="Fetch the newest reading.",
)
async def latest_sensor_data(
    service: ReadingService = Depends(get_service),
) -> ReadingResponse:
    return ReadingResponse(data=Reading.from_record(service.query_latest()))


@router.get(
    "/sensor-data/download",
    response_class=Response,
    responses={
        status.HTTP_200_OK: {"content": {XLSX_MEDIA_TYPE: {}}},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
    summary="Download every retained reading as a spreadsheet.",
)
def download_sensor_data(
    service: ReadingService = Depends(get_service),
) -> Response:
    document = service.export()
    filename = get_settings().export_filename
    return Response(
        content=document,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint with a short service description.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {
        "status": "ok",
        "detail": "Welcome to Structural Health Monitoring System API",
    }

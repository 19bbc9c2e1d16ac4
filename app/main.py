from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import router
from app.schemas import ErrorResponse
from datastore.reading_store import build_default_store
from logging_config import configure_logging
from services.errors import ServiceError
from services.readings import build_default_service
from settings import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    service = build_default_service()
    logger.info(
        "Reading store ready", extra={"store_size": len(service.store)}
    )
    try:
        yield
    finally:
        service.store.clear()
        build_default_service.cache_clear()
        build_default_store.cache_clear()
        logger.info("Reading store released")


def _error_response(status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def _handle_service_error(_request: Request, exc: ServiceError) -> JSONResponse:
    return _error_response(exc.status_code, exc.message)


async def _handle_request_validation(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.warning("Rejected malformed request", extra={"reason": exc.errors()[:1]})
    return _error_response(400, "Request body must be a JSON object.")


async def log_requests(request: Request, call_next):
    response = await call_next(request)
    level = logging.WARNING if response.status_code >= 400 else logging.INFO
    logger.log(
        level,
        "Handled request",
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
        },
    )
    return response


def create_app() -> FastAPI:
    configure_logging()
    settings = get_settings()
    app = FastAPI(
        title="Structural Health Monitor",
        description="In-memory sensor reading store with spreadsheet export.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )
    app.middleware("http")(log_requests)
    app.add_exception_handler(ServiceError, _handle_service_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.include_router(router)
    app.include_router(router, prefix="/api", include_in_schema=False)
    return app


app = create_app()

"""Error taxonomy raised by the ingest/query service."""

from __future__ import annotations

from typing import Sequence


class ServiceError(Exception):
    """Base class for request-scoped failures; ``status_code`` maps onto HTTP."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    status_code = 400

    def __init__(self, message: str, fields: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.fields = tuple(fields)


class NotFoundError(ServiceError):
    status_code = 404


class SerializationError(ServiceError):
    status_code = 500

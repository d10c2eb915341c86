"""
Domain error taxonomy.

Services raise these; app.main maps them onto HTTP responses:

    NotFoundError          -> 404
    ConflictError          -> 409
    ValidationFailedError  -> 400 (lists failed fields)
"""
from typing import Iterable, Optional

from fastapi import status


class WarehouseError(Exception):
    """Base class for errors raised by warehouse services."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(WarehouseError):
    """Requested key is absent."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(WarehouseError):
    """Duplicate unique key or a blocked operation (e.g. deleting the last admin)."""

    status_code = status.HTTP_409_CONFLICT


class ValidationFailedError(WarehouseError):
    """Missing or invalid required field(s)."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, fields: Optional[Iterable[str]] = None):
        super().__init__(message)
        self.fields = list(fields or [])

"""Exception hierarchy rendered by the error handlers into the JSON envelope."""
import enum
from contextlib import contextmanager
from typing import Any

from fastapi import status
from sqlalchemy.exc import SQLAlchemyError


def _text(message) -> str:
    return message.value if isinstance(message, enum.Enum) else str(message)


class APIError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message, stacktrace: dict[str, Any] | None = None):
        self.message = _text(message)
        self.stacktrace = stacktrace or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "error": self.message,
            "http_status_code": self.status_code,
        }
        # Diagnostics are only exposed for server-side failures
        if self.status_code >= 500 and self.stacktrace:
            body["stacktrace"] = self.stacktrace
        return body


class BadRequestError(APIError):
    status_code = status.HTTP_400_BAD_REQUEST


class ValidationError(BadRequestError):
    """Client input failed field validation; carries one message per invalid field."""

    def __init__(self, message, invalid_fields: list[dict[str, str]]):
        super().__init__(message)
        self.invalid_fields = invalid_fields

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        body["invalid_fields"] = self.invalid_fields
        return body


class AuthenticationError(APIError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(APIError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(APIError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(APIError):
    status_code = status.HTTP_409_CONFLICT


class StoreError(APIError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def format_store_error(exc: Exception) -> dict[str, Any]:
    """Describe a database error without leaking the statement or its parameters."""
    orig = getattr(exc, "orig", None)
    return {
        "type": type(orig or exc).__name__,
        "code": getattr(exc, "code", None),
        "message": str(orig) if orig is not None else type(exc).__name__,
    }


@contextmanager
def store_errors(message):
    """Turn a failed database call into a 500 carrying ``message``."""
    try:
        yield
    except SQLAlchemyError as exc:
        raise StoreError(message, {"error_sql": format_store_error(exc)}) from exc

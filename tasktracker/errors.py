"""Error kinds surfaced by the API and how they map to HTTP responses."""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    CONFLICT = "conflict"
    AUTH = "auth"
    NOT_FOUND = "not_found"
    STORE = "store"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.CONFLICT: 400,
    ErrorKind.AUTH: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STORE: 500,
}


class AppError(Exception):
    """Base class for errors the API knows how to classify.

    Attributes:
        kind: The error kind, which decides the HTTP status
        message: Human readable message returned to the client
        details: Extra JSON fields merged into the response body
    """

    kind: ErrorKind = ErrorKind.STORE

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = details

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, **self.details}


class ValidationError(AppError):
    kind = ErrorKind.VALIDATION


class ConflictError(AppError):
    kind = ErrorKind.CONFLICT


class AuthError(AppError):
    kind = ErrorKind.AUTH


class NotFoundError(AppError):
    kind = ErrorKind.NOT_FOUND


class StoreError(AppError):
    """Persistence failure. The underlying exception is kept for logging only."""

    kind = ErrorKind.STORE

    def __init__(self, message: str, cause: Optional[BaseException] = None, **details: Any):
        super().__init__(message, **details)
        self.cause = cause

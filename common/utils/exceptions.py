"""
API error type with error kinds.

A single exception carries an ErrorKind (status code + machine-readable code)
and a human-readable message. Use the helper constructors instead of
subclassing per status.

Example:
    from common.utils import not_found

    @app.get("/users/{id}")
    async def get_user(id: str):
        user = await users.find_by_id(id)
        if not user:
            raise not_found("User not found")
        return user
"""

from enum import Enum
from typing import Optional, Any, Dict

from fastapi import HTTPException


class ErrorKind(Enum):
    """Operational error kinds and the HTTP status each maps to."""

    BAD_REQUEST = (400, "BAD_REQUEST", "Bad request")
    UNAUTHORIZED = (401, "UNAUTHORIZED", "Unauthorized")
    FORBIDDEN = (403, "FORBIDDEN", "Forbidden")
    NOT_FOUND = (404, "NOT_FOUND", "Resource not found")
    CONFLICT = (409, "CONFLICT", "Conflict")
    VALIDATION_ERROR = (422, "VALIDATION_ERROR", "Validation failed")
    INTERNAL_ERROR = (500, "INTERNAL_ERROR", "Internal server error")

    def __init__(self, status_code: int, code: str, default_message: str):
        self.status_code = status_code
        self.code = code
        self.default_message = default_message


class APIException(HTTPException):
    """
    API exception tagged with an ErrorKind.

    Provides consistent error response format across the API.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: Optional[str] = None,
        errors: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Create an API exception.

        Args:
            kind: Error kind (selects status code and error code)
            message: Human-readable error message
            errors: Additional error details (e.g. field errors)
            headers: Optional response headers
        """
        self.kind = kind
        self.message = message or kind.default_message
        self.errors = errors

        detail: Dict[str, Any] = {"message": self.message, "code": kind.code}
        if errors is not None:
            detail["errors"] = errors

        super().__init__(
            status_code=kind.status_code,
            detail=detail,
            headers=headers,
        )

    @property
    def code(self) -> str:
        return self.kind.code

    @property
    def is_operational(self) -> bool:
        """Expected, client-facing errors (everything below 500)."""
        return self.kind.status_code < 500

    def __str__(self) -> str:
        return f"{self.kind.code}: {self.message}"


def bad_request(message: str = "Bad request", errors: Optional[Any] = None) -> APIException:
    """400 - Invalid input or malformed request."""
    return APIException(ErrorKind.BAD_REQUEST, message, errors)


def unauthorized(message: str = "Unauthorized") -> APIException:
    """401 - Missing or invalid authentication."""
    return APIException(ErrorKind.UNAUTHORIZED, message)


def forbidden(message: str = "Forbidden") -> APIException:
    """403 - Valid auth but insufficient permissions."""
    return APIException(ErrorKind.FORBIDDEN, message)


def not_found(message: str = "Resource not found") -> APIException:
    """404 - Resource doesn't exist."""
    return APIException(ErrorKind.NOT_FOUND, message)


def conflict(message: str = "Conflict") -> APIException:
    """409 - Resource already exists or state conflict."""
    return APIException(ErrorKind.CONFLICT, message)


def validation_error(message: str = "Validation failed", errors: Optional[Any] = None) -> APIException:
    """422 - Request validation failed."""
    return APIException(ErrorKind.VALIDATION_ERROR, message, errors)


def internal_error(message: str = "Internal server error") -> APIException:
    """500 - Unexpected server error."""
    return APIException(ErrorKind.INTERNAL_ERROR, message)

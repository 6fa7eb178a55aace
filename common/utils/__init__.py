"""
Utilities module - Common helpers for API responses and errors.
"""

from common.utils.responses import success_response, error_response
from common.utils.exceptions import (
    APIException,
    ErrorKind,
    bad_request,
    unauthorized,
    forbidden,
    not_found,
    conflict,
    validation_error,
    internal_error,
)

__all__ = [
    "success_response",
    "error_response",
    "APIException",
    "ErrorKind",
    "bad_request",
    "unauthorized",
    "forbidden",
    "not_found",
    "conflict",
    "validation_error",
    "internal_error",
]

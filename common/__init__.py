"""
Common library for reusable infrastructure components.

This package provides generic modules that are independent of the
PlaceMate domain:

- database: Async MongoDB connection manager (Motor)
- auth: JWT token issuing/verification, password and token hashing
- utils: Standard responses and the tagged API error type
- config: Base settings class
"""

from common.database import MongoDB
from common.auth import TokenIssuer, TokenPair, PasswordHasher, TokenHasher
from common.utils import (
    success_response,
    error_response,
    APIException,
    ErrorKind,
)
from common.config import BaseAppSettings

__all__ = [
    # Database
    "MongoDB",
    # Auth
    "TokenIssuer",
    "TokenPair",
    "PasswordHasher",
    "TokenHasher",
    # Utils
    "success_response",
    "error_response",
    "APIException",
    "ErrorKind",
    # Config
    "BaseAppSettings",
]

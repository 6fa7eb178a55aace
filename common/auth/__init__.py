"""
Authentication module - JWT token issuing, password and token hashing.
"""

from common.auth.jwt_tokens import (
    TokenIssuer,
    TokenPair,
    TokenError,
    TokenExpiredError,
    InvalidTokenError,
)
from common.auth.password import PasswordHasher
from common.auth.token_hasher import TokenHasher

__all__ = [
    "TokenIssuer",
    "TokenPair",
    "TokenError",
    "TokenExpiredError",
    "InvalidTokenError",
    "PasswordHasher",
    "TokenHasher",
]

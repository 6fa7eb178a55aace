"""
JWT access/refresh token issuing and verification.

Access and refresh tokens are signed with different secrets so a leaked
refresh-signing key cannot mint access tokens and vice versa. Every token
carries a random ``jti`` so two tokens issued in the same second differ.

Example:
    issuer = TokenIssuer(
        access_secret="...32+ chars...",
        refresh_secret="...another 32+ chars...",
        access_ttl=timedelta(minutes=15),
        refresh_ttl=timedelta(days=7),
    )

    pair = issuer.issue_pair(user_id, "user@example.com")
    claims = issuer.decode_access(pair.access_token)
    print(claims["id"])
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Any

from jose import jwt, ExpiredSignatureError, JWTError


ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"

MIN_SECRET_LENGTH = 32


class TokenError(Exception):
    """Token could not be verified."""


class TokenExpiredError(TokenError):
    """Token signature is valid but the token has expired."""


class InvalidTokenError(TokenError):
    """Token is malformed, tampered with, or of the wrong type."""


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


class TokenIssuer:
    """
    Signs and verifies access and refresh tokens.

    Pure: no I/O and no storage. Persisting refresh tokens is the session
    service's job.
    """

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        access_ttl: timedelta = timedelta(minutes=15),
        refresh_ttl: timedelta = timedelta(days=7),
        algorithm: str = "HS256",
    ):
        """
        Initialize the issuer.

        Args:
            access_secret: Secret for signing access tokens (>= 32 chars)
            refresh_secret: Secret for signing refresh tokens (>= 32 chars)
            access_ttl: Access token lifetime
            refresh_ttl: Refresh token lifetime
            algorithm: JWT algorithm (default: HS256)

        Raises:
            ValueError: If a secret is missing, too short, or both are equal
        """
        for name, secret in (("access", access_secret), ("refresh", refresh_secret)):
            if not secret or len(secret) < MIN_SECRET_LENGTH:
                raise ValueError(
                    f"JWT {name} secret must be at least {MIN_SECRET_LENGTH} characters"
                )
        if access_secret == refresh_secret:
            raise ValueError("JWT access and refresh secrets must differ")

        self._access_secret = access_secret
        self._refresh_secret = refresh_secret
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl
        self.algorithm = algorithm

    def _encode(self, user_id: str, email: str, token_type: str, secret: str, ttl: timedelta) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "id": str(user_id),
            "email": email,
            "type": token_type,
            "jti": uuid.uuid4().hex,
            "iat": now,
            "exp": now + ttl,
        }
        return jwt.encode(payload, secret, algorithm=self.algorithm)

    def _decode(self, token: str, token_type: str, secret: str) -> Dict[str, Any]:
        try:
            claims = jwt.decode(token, secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            raise TokenExpiredError("Token expired") from e
        except JWTError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e

        if claims.get("type") != token_type:
            raise InvalidTokenError("Wrong token type")
        if not claims.get("id") or not claims.get("email"):
            raise InvalidTokenError("Token missing identity claims")

        return claims

    def issue_access_token(self, user_id: str, email: str) -> str:
        """Create a short-lived access token."""
        return self._encode(user_id, email, ACCESS_TOKEN_TYPE, self._access_secret, self.access_ttl)

    def issue_refresh_token(self, user_id: str, email: str) -> str:
        """Create a long-lived refresh token."""
        return self._encode(user_id, email, REFRESH_TOKEN_TYPE, self._refresh_secret, self.refresh_ttl)

    def issue_pair(self, user_id: str, email: str) -> TokenPair:
        """Create an access/refresh token pair for the user."""
        return TokenPair(
            access_token=self.issue_access_token(user_id, email),
            refresh_token=self.issue_refresh_token(user_id, email),
        )

    def decode_access(self, token: str) -> Dict[str, Any]:
        """
        Verify an access token and return its claims.

        Raises:
            TokenExpiredError: Token has expired
            InvalidTokenError: Bad signature, malformed, or not an access token
        """
        return self._decode(token, ACCESS_TOKEN_TYPE, self._access_secret)

    def decode_refresh(self, token: str) -> Dict[str, Any]:
        """
        Verify a refresh token and return its claims.

        Raises:
            TokenExpiredError: Token has expired
            InvalidTokenError: Bad signature, malformed, or not a refresh token
        """
        return self._decode(token, REFRESH_TOKEN_TYPE, self._refresh_secret)

"""
Access-token gate for protected routes.

Reads ``Authorization: Bearer <access token>``, verifies it statelessly and
attaches ``{"id", "email"}`` to ``request.state.user``.
"""

import logging
from typing import Optional

from fastapi import Request

from common.utils.exceptions import APIException, unauthorized
from placemate.services.auth.session_service import SessionService

logger = logging.getLogger(__name__)


def bearer_token(request: Request) -> Optional[str]:
    """Token from a well-formed ``Bearer`` Authorization header, else None."""
    header = request.headers.get("Authorization")
    if not header:
        return None

    parts = header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


class AuthMiddleware:
    """
    Validates the access token and attaches the caller's identity to the request.
    """

    def __init__(self, session_service: SessionService):
        """
        Args:
            session_service: Verifies access tokens
        """
        self._session_service = session_service

    async def require_auth(self, request: Request) -> dict:
        """
        Reject the request unless it carries a valid access token.

        Returns:
            ``{"id", "email"}`` of the caller, also set on ``request.state.user``

        Raises:
            APIException (401): "Authentication required" when no token is sent,
                "Token expired", "Invalid token", or "Authentication failed"
                for anything unexpected
        """
        token = bearer_token(request)
        if not token:
            raise unauthorized("Authentication required")

        try:
            identity = self._session_service.verify_access(token)
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Access token verification failed: {e}")
            raise unauthorized("Authentication failed")

        request.state.user = identity
        return identity

    async def optional_auth(self, request: Request) -> Optional[dict]:
        """Like ``require_auth`` but returns None instead of rejecting."""
        token = bearer_token(request)
        if not token:
            return None

        try:
            identity = self._session_service.verify_access(token)
        except Exception as e:
            logger.debug(f"Optional auth failed: {e}")
            return None

        request.state.user = identity
        return identity

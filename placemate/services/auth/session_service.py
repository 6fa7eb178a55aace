"""
Session management for user authentication.

Issues access/refresh token pairs and maintains the refresh-token allow-list
stored on the user document. A refresh token is valid for exactly one
successful exchange: ``refresh`` swaps its digest for the new token's digest
in one conditional update.
"""

import logging
from typing import Optional

from common.auth.jwt_tokens import (
    TokenIssuer,
    TokenPair,
    TokenExpiredError,
    TokenError,
)
from common.auth.token_hasher import TokenHasher
from common.utils.exceptions import bad_request, conflict, unauthorized
from placemate.services.user.user_repository import UserRepository, format_user

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class SessionService:
    """
    Handles signup, login, token refresh and logout.
    The only component that adds to or rotates a user's refresh tokens.
    """

    def __init__(self, user_repository: UserRepository, token_issuer: TokenIssuer):
        """
        Initialize SessionService.

        Args:
            user_repository: Credential store
            token_issuer: Signs and verifies tokens
        """
        self._users = user_repository
        self._issuer = token_issuer

    async def _start_session(self, user: dict) -> TokenPair:
        user_id = str(user["_id"])
        tokens = self._issuer.issue_pair(user_id, user["email"])
        await self._users.add_refresh_token(user_id, TokenHasher.hash_token(tokens.refresh_token))
        return tokens

    async def signup(
        self,
        email: str,
        password: str,
        name: str,
        college: Optional[str] = None,
        graduation_year: Optional[int] = None,
    ) -> dict:
        """
        Register a new user and start a session.

        Returns:
            dict with ``user`` (formatted, no password) and ``tokens``

        Raises:
            ConflictException: Email already registered
        """
        if await self._users.exists(email):
            raise conflict("User with this email already exists")

        user = await self._users.create(
            email=email,
            password=password,
            name=name,
            college=college,
            graduation_year=graduation_year,
        )
        tokens = await self._start_session(user)

        logger.info(f"User signed up: {user['_id']}")
        return {"user": format_user(user), "tokens": tokens}

    async def login(self, email: str, password: str) -> dict:
        """
        Authenticate with email and password and start a session.

        Unknown email and wrong password fail identically.

        Returns:
            dict with ``user`` (formatted, no password) and ``tokens``

        Raises:
            UnauthorizedException: Invalid credentials
        """
        user = await self._users.find_by_email_with_password(email)
        if not user or not self._users.check_password(user, password):
            raise unauthorized(INVALID_CREDENTIALS)

        tokens = await self._start_session(user)

        logger.info(f"User logged in: {user['_id']}")
        return {"user": format_user(user), "tokens": tokens}

    async def refresh(self, refresh_token: Optional[str]) -> TokenPair:
        """
        Exchange a refresh token for a new token pair (rotation).

        Raises:
            BadRequestException: No token supplied
            UnauthorizedException: Token expired, invalid, or no longer in
                the allow-list (already rotated or revoked)
        """
        if not refresh_token:
            raise bad_request("Refresh token is required")

        try:
            claims = self._issuer.decode_refresh(refresh_token)
        except TokenExpiredError:
            raise unauthorized("Refresh token expired")
        except TokenError:
            raise unauthorized("Invalid refresh token")

        token_hash = TokenHasher.hash_token(refresh_token)
        user = await self._users.find_by_refresh_token(token_hash)
        if not user or str(user["_id"]) != claims["id"]:
            logger.warning(f"Refresh rejected: token not in allow-list (claimed user {claims['id']})")
            raise unauthorized("Invalid refresh token")

        user_id = str(user["_id"])
        tokens = self._issuer.issue_pair(user_id, user["email"])

        rotated = await self._users.replace_refresh_token(
            user_id,
            token_hash,
            TokenHasher.hash_token(tokens.refresh_token),
        )
        if not rotated:
            # A concurrent refresh with the same token got there first
            logger.warning(f"Refresh rejected: token already rotated for user {user_id}")
            raise unauthorized("Invalid refresh token")

        logger.info(f"Refresh token rotated for user {user_id}")
        return tokens

    async def logout_device(self, user_id: str, refresh_token: str) -> bool:
        """
        Revoke a single refresh token (logout of one device).

        Returns:
            True if the token was in the user's allow-list
        """
        removed = await self._users.remove_refresh_token(
            user_id,
            TokenHasher.hash_token(refresh_token),
        )
        logger.info(f"User {user_id} logged out of one device (revoked={removed})")
        return removed

    async def logout_all_devices(self, user_id: str) -> None:
        """Revoke every refresh token of the user."""
        await self._users.clear_refresh_tokens(user_id)
        logger.info(f"User {user_id} logged out of all devices")

    def verify_access(self, token: str) -> dict:
        """
        Verify an access token without touching the store.

        Returns:
            dict with ``id`` and ``email``

        Raises:
            UnauthorizedException: Token expired or invalid
        """
        try:
            claims = self._issuer.decode_access(token)
        except TokenExpiredError:
            raise unauthorized("Token expired")
        except TokenError:
            raise unauthorized("Invalid token")

        return {"id": claims["id"], "email": claims["email"]}

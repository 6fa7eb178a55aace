"""Unit tests for AuthMiddleware (Bearer access-token gate)."""

import pytest
from types import SimpleNamespace
from unittest.mock import MagicMock

from common.utils.exceptions import APIException
from placemate.middleware.auth import AuthMiddleware


def _request(authorization=None):
    request = MagicMock()
    request.headers = {"Authorization": authorization} if authorization else {}
    request.state = SimpleNamespace()
    return request


@pytest.fixture
def middleware(session_service):
    return AuthMiddleware(session_service)


@pytest.fixture
def access_token(token_issuer, sample_user_id):
    return token_issuer.issue_access_token(sample_user_id, "a@x.com")


class TestRequireAuth:
    @pytest.mark.asyncio
    async def test_attaches_identity(self, middleware, access_token, sample_user_id):
        request = _request(f"Bearer {access_token}")

        user = await middleware.require_auth(request)

        assert user == {"id": sample_user_id, "email": "a@x.com"}
        assert request.state.user == user

    @pytest.mark.asyncio
    @pytest.mark.parametrize("header", [None, "Basic abc", "Bearer", "Bearer a b"])
    async def test_missing_or_malformed_header(self, middleware, header):
        with pytest.raises(APIException) as exc_info:
            await middleware.require_auth(_request(header))

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Authentication required"

    @pytest.mark.asyncio
    async def test_invalid_token(self, middleware):
        with pytest.raises(APIException) as exc_info:
            await middleware.require_auth(_request("Bearer not-a-jwt"))
        assert exc_info.value.message == "Invalid token"

    @pytest.mark.asyncio
    async def test_refresh_token_is_rejected(self, middleware, token_issuer, sample_user_id):
        refresh = token_issuer.issue_refresh_token(sample_user_id, "a@x.com")

        with pytest.raises(APIException) as exc_info:
            await middleware.require_auth(_request(f"Bearer {refresh}"))
        assert exc_info.value.message == "Invalid token"

    @pytest.mark.asyncio
    async def test_unexpected_failure(self, access_token):
        session_service = MagicMock()
        session_service.verify_access.side_effect = RuntimeError("boom")
        middleware = AuthMiddleware(session_service)

        with pytest.raises(APIException) as exc_info:
            await middleware.require_auth(_request(f"Bearer {access_token}"))

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Authentication failed"


class TestOptionalAuth:
    @pytest.mark.asyncio
    async def test_returns_none_without_token(self, middleware):
        assert await middleware.optional_auth(_request()) is None

    @pytest.mark.asyncio
    async def test_returns_none_for_bad_token(self, middleware):
        assert await middleware.optional_auth(_request("Bearer not-a-jwt")) is None

    @pytest.mark.asyncio
    async def test_returns_identity_for_valid_token(self, middleware, access_token, sample_user_id):
        request = _request(f"Bearer {access_token}")

        user = await middleware.optional_auth(request)

        assert user["id"] == sample_user_id
        assert request.state.user == user

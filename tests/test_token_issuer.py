"""Unit tests for TokenIssuer (access/refresh JWT signing and verification)."""

import pytest
from datetime import timedelta
from jose import jwt

from common.auth.jwt_tokens import (
    TokenIssuer,
    TokenExpiredError,
    InvalidTokenError,
    TokenError,
)


USER_ID = "65a1b2c3d4e5f60718293a4b"
EMAIL = "a@x.io"


class TestConstruction:
    def test_rejects_short_secret(self, refresh_secret):
        with pytest.raises(ValueError, match="at least 32"):
            TokenIssuer(access_secret="short", refresh_secret=refresh_secret)

    def test_rejects_missing_secret(self, access_secret):
        with pytest.raises(ValueError):
            TokenIssuer(access_secret=access_secret, refresh_secret="")

    def test_rejects_identical_secrets(self, access_secret):
        with pytest.raises(ValueError, match="must differ"):
            TokenIssuer(access_secret=access_secret, refresh_secret=access_secret)


class TestIssue:
    def test_pair_round_trips_identity(self, token_issuer):
        pair = token_issuer.issue_pair(USER_ID, EMAIL)

        access = token_issuer.decode_access(pair.access_token)
        refresh = token_issuer.decode_refresh(pair.refresh_token)

        assert access["id"] == USER_ID and access["email"] == EMAIL
        assert access["type"] == "access"
        assert refresh["id"] == USER_ID and refresh["type"] == "refresh"

    def test_tokens_issued_in_same_second_differ(self, token_issuer):
        first = token_issuer.issue_refresh_token(USER_ID, EMAIL)
        second = token_issuer.issue_refresh_token(USER_ID, EMAIL)
        assert first != second

    def test_expiry_follows_ttl(self, access_secret, refresh_secret):
        issuer = TokenIssuer(
            access_secret=access_secret,
            refresh_secret=refresh_secret,
            access_ttl=timedelta(minutes=15),
            refresh_ttl=timedelta(days=7),
        )
        pair = issuer.issue_pair(USER_ID, EMAIL)
        access = issuer.decode_access(pair.access_token)
        refresh = issuer.decode_refresh(pair.refresh_token)

        assert access["exp"] - access["iat"] == 15 * 60
        assert refresh["exp"] - refresh["iat"] == 7 * 24 * 60 * 60


class TestDecode:
    def test_expired_access_token(self, access_secret, refresh_secret):
        issuer = TokenIssuer(
            access_secret=access_secret,
            refresh_secret=refresh_secret,
            access_ttl=timedelta(seconds=-10),
        )
        token = issuer.issue_access_token(USER_ID, EMAIL)

        with pytest.raises(TokenExpiredError):
            issuer.decode_access(token)

    def test_access_token_is_not_a_refresh_token(self, token_issuer):
        pair = token_issuer.issue_pair(USER_ID, EMAIL)

        with pytest.raises(InvalidTokenError):
            token_issuer.decode_refresh(pair.access_token)
        with pytest.raises(InvalidTokenError):
            token_issuer.decode_access(pair.refresh_token)

    def test_wrong_type_claim_with_right_secret(self, token_issuer, access_secret):
        forged = jwt.encode(
            {"id": USER_ID, "email": EMAIL, "type": "refresh"},
            access_secret,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError, match="Wrong token type"):
            token_issuer.decode_access(forged)

    def test_missing_identity_claims(self, token_issuer, access_secret):
        forged = jwt.encode({"type": "access"}, access_secret, algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            token_issuer.decode_access(forged)

    def test_tampered_token(self, token_issuer):
        token = token_issuer.issue_access_token(USER_ID, EMAIL)
        with pytest.raises(InvalidTokenError):
            token_issuer.decode_access(token[:-2] + ("A" if token[-2] != "A" else "B") + token[-1])

    def test_garbage_token(self, token_issuer):
        with pytest.raises(TokenError):
            token_issuer.decode_access("not-a-jwt")

"""Shared test fixtures for PlaceMate backend tests."""

import copy
from datetime import datetime, timezone
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

from common.auth.jwt_tokens import TokenIssuer
from common.auth.password import PasswordHasher
from common.utils.exceptions import conflict, not_found
from placemate.config import Settings
from placemate.services.auth.session_service import SessionService
from placemate.services.user.user_repository import (
    DEFAULT_PREFERENCES,
    PUBLIC_PROJECTION,
    normalize_email,
    to_object_id,
)
from placemate.services.user.user_service import UserService

ACCESS_SECRET = "test-access-secret-0123456789abcdef"
REFRESH_SECRET = "test-refresh-secret-0123456789abcdef"


# ─────────────────────────────────────────────────────────────────
# In-memory credential store
# ─────────────────────────────────────────────────────────────────


class FakeUserRepository:
    """
    In-memory stand-in for UserRepository with the same async interface.

    Used for stateful flows (signup -> refresh -> logout) where mocking each
    Mongo call would hide the behavior under test.
    """

    def __init__(self, password_hasher: PasswordHasher):
        self._password_hasher = password_hasher
        self.users: dict = {}

    def _public(self, user: dict) -> dict:
        return {k: copy.deepcopy(v) for k, v in user.items() if k not in PUBLIC_PROJECTION}

    def _get(self, user_id) -> Optional[dict]:
        oid = to_object_id(user_id)
        return self.users.get(oid) if oid is not None else None

    def _by_email(self, email: str) -> Optional[dict]:
        email = normalize_email(email)
        return next((u for u in self.users.values() if u["email"] == email), None)

    async def ensure_indexes(self) -> None:
        return None

    async def create(self, email, password, name, college=None, graduation_year=None) -> dict:
        if self._by_email(email):
            raise conflict("User with this email already exists")
        now = datetime.now(timezone.utc)
        user = {
            "_id": ObjectId(),
            "email": normalize_email(email),
            "password": self._password_hasher.hash(password),
            "name": name.strip(),
            "avatar": None,
            "college": college,
            "graduationYear": graduation_year,
            "preferences": dict(DEFAULT_PREFERENCES),
            "refreshTokens": [],
            "isEmailVerified": False,
            "createdAt": now,
            "updatedAt": now,
        }
        self.users[user["_id"]] = user
        return self._public(user)

    async def find_by_id(self, user_id):
        user = self._get(user_id)
        return self._public(user) if user else None

    async def find_by_id_with_password(self, user_id):
        user = self._get(user_id)
        if not user:
            return None
        return {k: v for k, v in user.items() if k != "refreshTokens"}

    async def find_by_email(self, email):
        user = self._by_email(email)
        return self._public(user) if user else None

    async def find_by_email_with_password(self, email):
        user = self._by_email(email)
        if not user:
            return None
        return {k: v for k, v in user.items() if k != "refreshTokens"}

    async def exists(self, email) -> bool:
        return self._by_email(email) is not None

    def check_password(self, user, candidate) -> bool:
        return self._password_hasher.verify(candidate, user.get("password") or "")

    async def update_by_id(self, user_id, updates):
        user = self._get(user_id)
        if not user:
            raise not_found("User not found")
        for key, value in updates.items():
            if key.startswith("preferences."):
                user["preferences"][key.split(".", 1)[1]] = value
            else:
                user[key] = value
        user["updatedAt"] = datetime.now(timezone.utc)
        return self._public(user)

    async def update_preferences(self, user_id, preferences):
        return await self.update_by_id(
            user_id, {f"preferences.{k}": v for k, v in preferences.items()}
        )

    async def set_password(self, user_id, new_password):
        user = self._get(user_id)
        if not user:
            raise not_found("User not found")
        user["password"] = self._password_hasher.hash(new_password)

    async def delete_by_id(self, user_id):
        user = self._get(user_id)
        if not user:
            raise not_found("User not found")
        del self.users[user["_id"]]

    async def add_refresh_token(self, user_id, token_hash) -> bool:
        user = self._get(user_id)
        if not user:
            return False
        user["refreshTokens"].append(token_hash)
        return True

    async def remove_refresh_token(self, user_id, token_hash) -> bool:
        user = self._get(user_id)
        if not user or token_hash not in user["refreshTokens"]:
            return False
        user["refreshTokens"] = [t for t in user["refreshTokens"] if t != token_hash]
        return True

    async def replace_refresh_token(self, user_id, old_token_hash, new_token_hash) -> bool:
        user = self._get(user_id)
        if not user or old_token_hash not in user["refreshTokens"]:
            return False
        index = user["refreshTokens"].index(old_token_hash)
        user["refreshTokens"][index] = new_token_hash
        return True

    async def clear_refresh_tokens(self, user_id) -> None:
        user = self._get(user_id)
        if user:
            user["refreshTokens"] = []

    async def find_by_refresh_token(self, token_hash):
        user = next(
            (u for u in self.users.values() if token_hash in u["refreshTokens"]),
            None,
        )
        return self._public(user) if user else None

    def refresh_tokens_of(self, user_id) -> list:
        return list(self._get(user_id)["refreshTokens"])


# ─────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────


@pytest.fixture
def sample_user_id():
    return str(ObjectId())


@pytest.fixture
def mock_collection():
    collection = AsyncMock()
    # Motor's find() returns a cursor synchronously (not a coroutine),
    # so use MagicMock for it. Async methods like find_one, insert_one,
    # count_documents etc. stay as AsyncMock.
    collection.find = MagicMock()
    return collection


@pytest.fixture
def mock_db(mock_collection):
    db = MagicMock()
    db.__getitem__ = MagicMock(return_value=mock_collection)
    return db


@pytest.fixture
def access_secret():
    return ACCESS_SECRET


@pytest.fixture
def refresh_secret():
    return REFRESH_SECRET


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        ENVIRONMENT="test",
        JWT_ACCESS_SECRET=ACCESS_SECRET,
        JWT_REFRESH_SECRET=REFRESH_SECRET,
        BCRYPT_ROUNDS=4,
    )


@pytest.fixture
def password_hasher():
    # Lowest bcrypt cost keeps the suite fast
    return PasswordHasher(rounds=4)


@pytest.fixture
def token_issuer():
    return TokenIssuer(access_secret=ACCESS_SECRET, refresh_secret=REFRESH_SECRET)


@pytest.fixture
def user_repository(password_hasher):
    return FakeUserRepository(password_hasher)


@pytest.fixture
def session_service(user_repository, token_issuer):
    return SessionService(user_repository, token_issuer)


@pytest.fixture
def user_service(user_repository):
    return UserService(user_repository)

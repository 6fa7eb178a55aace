"""
User persistence on the ``users`` collection.

The user document holds the bcrypt password hash and the ``refreshTokens``
allow-list (SHA-256 digests of the refresh tokens currently valid for that
user). Neither field is included in ordinary reads.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from common.auth.password import PasswordHasher
from common.utils.exceptions import conflict, not_found

logger = logging.getLogger(__name__)

# Fields never returned by ordinary reads
PUBLIC_PROJECTION = {"password": 0, "refreshTokens": 0}

DEFAULT_PREFERENCES = {
    "emailReminders": True,
    "reminderDaysBefore": 1,
    "theme": "system",
    "defaultView": "dashboard",
}


def normalize_email(email: str) -> str:
    return email.strip().lower()


def to_object_id(user_id) -> Optional[ObjectId]:
    """Convert to ObjectId, or None when the value is not a valid id."""
    if isinstance(user_id, ObjectId):
        return user_id
    if user_id is None or not ObjectId.is_valid(str(user_id)):
        return None
    return ObjectId(str(user_id))


def format_user(user: dict) -> dict:
    """Format user document for API response."""
    return {
        "id": str(user["_id"]),
        "email": user.get("email"),
        "name": user.get("name"),
        "avatar": user.get("avatar"),
        "college": user.get("college"),
        "graduationYear": user.get("graduationYear"),
        "preferences": {**DEFAULT_PREFERENCES, **(user.get("preferences") or {})},
        "isEmailVerified": user.get("isEmailVerified", False),
        "createdAt": user.get("createdAt"),
        "updatedAt": user.get("updatedAt"),
    }


class UserRepository:
    """
    Data access for user documents, including the refresh-token allow-list.
    """

    def __init__(self, db: AsyncIOMotorDatabase, password_hasher: PasswordHasher):
        """
        Initialize UserRepository.

        Args:
            db: MongoDB database connection
            password_hasher: Used to hash passwords on write and verify them
        """
        self._users_collection = db["users"]
        self._password_hasher = password_hasher

    async def ensure_indexes(self) -> None:
        """Create the unique email index and the refresh-token lookup index."""
        await self._users_collection.create_index("email", unique=True)
        await self._users_collection.create_index("refreshTokens")

    # ─────────────────────────────────────────────────────────────
    # Users
    # ─────────────────────────────────────────────────────────────

    async def create(
        self,
        email: str,
        password: str,
        name: str,
        college: Optional[str] = None,
        graduation_year: Optional[int] = None,
    ) -> dict:
        """
        Insert a new user. The password is hashed before it is stored.

        Returns:
            The created user document without password or refresh tokens

        Raises:
            ConflictException: Email already registered
        """
        now = datetime.now(timezone.utc)
        user = {
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

        try:
            result = await self._users_collection.insert_one(user)
        except DuplicateKeyError:
            raise conflict("User with this email already exists")

        user["_id"] = result.inserted_id
        logger.info(f"User created: {result.inserted_id}")
        return {k: v for k, v in user.items() if k not in PUBLIC_PROJECTION}

    async def find_by_id(self, user_id: str) -> Optional[dict]:
        oid = to_object_id(user_id)
        if oid is None:
            return None
        return await self._users_collection.find_one({"_id": oid}, PUBLIC_PROJECTION)

    async def find_by_id_with_password(self, user_id: str) -> Optional[dict]:
        oid = to_object_id(user_id)
        if oid is None:
            return None
        return await self._users_collection.find_one({"_id": oid}, {"refreshTokens": 0})

    async def find_by_email(self, email: str) -> Optional[dict]:
        return await self._users_collection.find_one(
            {"email": normalize_email(email)},
            PUBLIC_PROJECTION,
        )

    async def find_by_email_with_password(self, email: str) -> Optional[dict]:
        return await self._users_collection.find_one(
            {"email": normalize_email(email)},
            {"refreshTokens": 0},
        )

    async def exists(self, email: str) -> bool:
        count = await self._users_collection.count_documents(
            {"email": normalize_email(email)},
            limit=1,
        )
        return count > 0

    def check_password(self, user: dict, candidate: str) -> bool:
        """Verify a candidate password against a user loaded with its hash."""
        return self._password_hasher.verify(candidate, user.get("password") or "")

    async def update_by_id(self, user_id: str, updates: dict) -> dict:
        """
        Set top-level fields on a user.

        Raises:
            NotFoundException: No such user
        """
        oid = to_object_id(user_id)
        user = None
        if oid is not None:
            user = await self._users_collection.find_one_and_update(
                {"_id": oid},
                {"$set": {**updates, "updatedAt": datetime.now(timezone.utc)}},
                projection=PUBLIC_PROJECTION,
                return_document=ReturnDocument.AFTER,
            )

        if not user:
            raise not_found("User not found")
        return user

    async def update_preferences(self, user_id: str, preferences: dict) -> dict:
        """
        Merge the given keys into the user's preference bag.

        Raises:
            NotFoundException: No such user
        """
        updates = {f"preferences.{key}": value for key, value in preferences.items()}
        return await self.update_by_id(user_id, updates)

    async def set_password(self, user_id: str, new_password: str) -> None:
        """
        Hash and store a new password.

        Raises:
            NotFoundException: No such user
        """
        oid = to_object_id(user_id)
        matched = 0
        if oid is not None:
            result = await self._users_collection.update_one(
                {"_id": oid},
                {"$set": {
                    "password": self._password_hasher.hash(new_password),
                    "updatedAt": datetime.now(timezone.utc),
                }},
            )
            matched = result.matched_count

        if matched == 0:
            raise not_found("User not found")

    async def delete_by_id(self, user_id: str) -> None:
        """
        Raises:
            NotFoundException: No such user
        """
        oid = to_object_id(user_id)
        deleted = 0
        if oid is not None:
            result = await self._users_collection.delete_one({"_id": oid})
            deleted = result.deleted_count

        if deleted == 0:
            raise not_found("User not found")
        logger.info(f"User deleted: {user_id}")

    # ─────────────────────────────────────────────────────────────
    # Refresh-token allow-list
    # ─────────────────────────────────────────────────────────────

    async def add_refresh_token(self, user_id: str, token_hash: str) -> bool:
        """Append a token digest to the user's allow-list."""
        oid = to_object_id(user_id)
        if oid is None:
            return False
        result = await self._users_collection.update_one(
            {"_id": oid},
            {"$push": {"refreshTokens": token_hash}},
        )
        return result.modified_count > 0

    async def remove_refresh_token(self, user_id: str, token_hash: str) -> bool:
        """
        Remove a single token digest from the user's allow-list.

        Returns:
            True if the digest was present and removed
        """
        oid = to_object_id(user_id)
        if oid is None:
            return False
        result = await self._users_collection.update_one(
            {"_id": oid},
            {"$pull": {"refreshTokens": token_hash}},
        )
        return result.modified_count > 0

    async def replace_refresh_token(
        self,
        user_id: str,
        old_token_hash: str,
        new_token_hash: str,
    ) -> bool:
        """
        Swap one digest for another in a single conditional update.

        The filter requires the old digest to still be in the list, so when
        two callers rotate the same token only one of them matches.

        Returns:
            True if the old digest was found and replaced
        """
        oid = to_object_id(user_id)
        if oid is None:
            return False
        result = await self._users_collection.update_one(
            {"_id": oid, "refreshTokens": old_token_hash},
            {"$set": {"refreshTokens.$": new_token_hash}},
        )
        return result.modified_count == 1

    async def clear_refresh_tokens(self, user_id: str) -> None:
        """Empty the user's allow-list (logs out every device)."""
        oid = to_object_id(user_id)
        if oid is None:
            return
        await self._users_collection.update_one(
            {"_id": oid},
            {"$set": {"refreshTokens": []}},
        )

    async def find_by_refresh_token(self, token_hash: str) -> Optional[dict]:
        """Find the user whose allow-list contains this digest."""
        return await self._users_collection.find_one(
            {"refreshTokens": token_hash},
            PUBLIC_PROJECTION,
        )

"""
User account service.

Profile, preferences, password change and account deletion.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from common.utils.exceptions import bad_request, not_found
from placemate.services.user.user_repository import UserRepository, format_user

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "avatar", "college", "graduationYear")
PREFERENCE_FIELDS = ("emailReminders", "reminderDaysBefore", "theme", "defaultView")

MIN_GRADUATION_YEAR = 1900
MIN_PASSWORD_LENGTH = 6


class UserService:
    """Service for managing the signed-in user's account."""

    def __init__(self, user_repository: UserRepository):
        """
        Initialize UserService.

        Args:
            user_repository: Credential store
        """
        self._users = user_repository

    async def get_profile(self, user_id: str) -> dict:
        """
        Get the formatted profile of a user.

        Raises:
            NotFoundException: No such user
        """
        user = await self._users.find_by_id(user_id)
        if not user:
            raise not_found("User not found")
        return format_user(user)

    async def update_profile(self, user_id: str, updates: dict[str, Any]) -> dict:
        """
        Update profile fields. Keys outside the profile fields are ignored.

        Args:
            user_id: User's ID
            updates: Subset of name, avatar, college, graduationYear

        Returns:
            Updated formatted user

        Raises:
            BadRequestException: Graduation year out of range
            NotFoundException: No such user
        """
        changes = {k: v for k, v in updates.items() if k in PROFILE_FIELDS}

        year = changes.get("graduationYear")
        if year is not None:
            max_year = datetime.now(timezone.utc).year + 10
            if year < MIN_GRADUATION_YEAR or year > max_year:
                raise bad_request("Invalid graduation year")

        if "name" in changes and changes["name"] is not None:
            changes["name"] = changes["name"].strip()

        if not changes:
            return await self.get_profile(user_id)

        user = await self._users.update_by_id(user_id, changes)
        logger.info(f"Profile updated for user {user_id}")
        return format_user(user)

    async def update_preferences(self, user_id: str, preferences: dict[str, Any]) -> dict:
        """
        Partially update the preference bag.

        Raises:
            BadRequestException: reminderDaysBefore outside 0..30
            NotFoundException: No such user
        """
        changes = {
            k: v for k, v in preferences.items()
            if k in PREFERENCE_FIELDS and v is not None
        }

        days = changes.get("reminderDaysBefore")
        if days is not None and not 0 <= days <= 30:
            raise bad_request("Reminder days must be between 0 and 30")

        if not changes:
            return await self.get_profile(user_id)

        user = await self._users.update_preferences(user_id, changes)
        logger.info(f"Preferences updated for user {user_id}")
        return format_user(user)

    async def change_password(
        self,
        user_id: str,
        current_password: str,
        new_password: str,
    ) -> None:
        """
        Change the password and revoke every refresh token of the user.

        Raises:
            NotFoundException: No such user
            BadRequestException: Wrong current password or new password too short
        """
        user = await self._users.find_by_id_with_password(user_id)
        if not user:
            raise not_found("User not found")

        if not self._users.check_password(user, current_password):
            raise bad_request("Current password is incorrect")

        if not new_password or len(new_password) < MIN_PASSWORD_LENGTH:
            raise bad_request(f"New password must be at least {MIN_PASSWORD_LENGTH} characters")

        await self._users.set_password(user_id, new_password)
        await self._users.clear_refresh_tokens(user_id)

        logger.info(f"Password changed for user {user_id}, all sessions revoked")

    async def delete_account(self, user_id: str) -> None:
        """
        Raises:
            NotFoundException: No such user
        """
        await self._users.delete_by_id(user_id)
        logger.info(f"Account deleted: {user_id}")

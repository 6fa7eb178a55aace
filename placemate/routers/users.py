"""
FastAPI router for User endpoints.

Profile, preferences, password change and account deletion for the
signed-in user.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response

from placemate.config import Settings
from placemate.dependencies import get_settings, get_user_service, require_auth
from placemate.routers.cookies import clear_refresh_cookie
from placemate.schemas.user import (
    ChangePasswordRequest,
    UpdatePreferencesRequest,
    UpdateProfileRequest,
)
from placemate.services.user.user_service import UserService
from common.utils import success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/profile")
async def get_profile(
    user: Annotated[dict, Depends(require_auth)],
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    """Get the current user's profile."""
    profile = await user_service.get_profile(user["id"])
    return success_response(profile, message="Profile retrieved successfully")


@router.put("/profile")
async def update_profile(
    body: UpdateProfileRequest,
    user: Annotated[dict, Depends(require_auth)],
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    """Update name, avatar, college or graduation year."""
    updates = body.model_dump(exclude_none=True, mode="json")
    profile = await user_service.update_profile(user["id"], updates)
    return success_response(profile, message="Profile updated successfully")


@router.put("/preferences")
async def update_preferences(
    body: UpdatePreferencesRequest,
    user: Annotated[dict, Depends(require_auth)],
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    """Partially update notification and display preferences."""
    profile = await user_service.update_preferences(
        user["id"],
        body.model_dump(exclude_none=True),
    )
    return success_response(profile, message="Preferences updated successfully")


@router.post("/change-password")
async def change_password(
    body: ChangePasswordRequest,
    response: Response,
    user: Annotated[dict, Depends(require_auth)],
    user_service: Annotated[UserService, Depends(get_user_service)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """
    Change the password.

    Every refresh token of the user is revoked, so all devices must log in again.
    """
    await user_service.change_password(user["id"], body.currentPassword, body.newPassword)

    clear_refresh_cookie(response, settings)
    return success_response(None, message="Password changed successfully")


@router.delete("/account")
async def delete_account(
    response: Response,
    user: Annotated[dict, Depends(require_auth)],
    user_service: Annotated[UserService, Depends(get_user_service)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Permanently delete the current user's account."""
    await user_service.delete_account(user["id"])

    clear_refresh_cookie(response, settings)
    return success_response(None, message="Account deleted successfully")

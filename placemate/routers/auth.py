"""
FastAPI router for Auth endpoints.

Provides signup, login, token refresh, logout and the current-user lookup.
The refresh token travels in an httpOnly cookie; the access token is
returned in the body and sent back as ``Authorization: Bearer``.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Request, Response, status

from placemate.config import Settings
from placemate.dependencies import (
    get_session_service,
    get_settings,
    require_auth,
)
from placemate.routers.cookies import (
    clear_refresh_cookie,
    read_refresh_token,
    set_refresh_cookie,
)
from placemate.schemas.auth import (
    LoginRequest,
    LogoutRequest,
    RefreshRequest,
    SignupRequest,
)
from placemate.services.auth.session_service import SessionService
from common.utils import success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    body: SignupRequest,
    response: Response,
    session_service: Annotated[SessionService, Depends(get_session_service)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """
    Register a new user account.

    Returns the user and an access token; sets the refresh-token cookie.
    """
    result = await session_service.signup(
        email=body.email,
        password=body.password,
        name=body.name,
        college=body.college,
        graduation_year=body.graduationYear,
    )
    tokens = result["tokens"]
    set_refresh_cookie(response, settings, tokens.refresh_token)

    return success_response(
        {"user": result["user"], "accessToken": tokens.access_token},
        message="User registered successfully",
    )


@router.post("/login")
async def login(
    body: LoginRequest,
    response: Response,
    session_service: Annotated[SessionService, Depends(get_session_service)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Login with email and password."""
    result = await session_service.login(body.email, body.password)
    tokens = result["tokens"]
    set_refresh_cookie(response, settings, tokens.refresh_token)

    return success_response(
        {"user": result["user"], "accessToken": tokens.access_token},
        message="Login successful",
    )


@router.post("/refresh")
async def refresh(
    request: Request,
    response: Response,
    session_service: Annotated[SessionService, Depends(get_session_service)],
    settings: Annotated[Settings, Depends(get_settings)],
    body: Optional[RefreshRequest] = None,
):
    """
    Exchange the refresh token for a new access token.

    The presented refresh token is consumed and replaced by a new one.
    """
    refresh_token = read_refresh_token(request, settings, body.refreshToken if body else None)

    tokens = await session_service.refresh(refresh_token)
    set_refresh_cookie(response, settings, tokens.refresh_token)

    return success_response(
        {"accessToken": tokens.access_token},
        message="Token refreshed successfully",
    )


@router.post("/logout")
async def logout(
    request: Request,
    response: Response,
    user: Annotated[dict, Depends(require_auth)],
    session_service: Annotated[SessionService, Depends(get_session_service)],
    settings: Annotated[Settings, Depends(get_settings)],
    body: Optional[LogoutRequest] = None,
):
    """
    Logout from the current device.

    Revokes the presented refresh token, if any, and clears the cookie.
    """
    refresh_token = read_refresh_token(request, settings, body.refreshToken if body else None)
    if refresh_token:
        await session_service.logout_device(user["id"], refresh_token)

    clear_refresh_cookie(response, settings)
    return success_response(None, message="Logout successful")


@router.post("/logout-all")
async def logout_all(
    response: Response,
    user: Annotated[dict, Depends(require_auth)],
    session_service: Annotated[SessionService, Depends(get_session_service)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Logout from every device."""
    await session_service.logout_all_devices(user["id"])

    clear_refresh_cookie(response, settings)
    return success_response(None, message="Logged out from all devices")


@router.get("/me")
async def get_current_user(
    user: Annotated[dict, Depends(require_auth)],
):
    """Get the identity carried by the access token."""
    return success_response(
        {"id": user["id"], "email": user["email"]},
        message="User retrieved successfully",
    )

"""Refresh-token cookie helpers shared by the auth and user routers."""

from typing import Optional

from fastapi import Request, Response

from placemate.config import Settings


def set_refresh_cookie(response: Response, settings: Settings, refresh_token: str) -> None:
    """Attach the refresh token as an httpOnly, SameSite=Strict cookie."""
    response.set_cookie(
        key=settings.REFRESH_COOKIE_NAME,
        value=refresh_token,
        max_age=int(settings.refresh_token_ttl.total_seconds()),
        path="/",
        httponly=True,
        secure=settings.is_production(),
        samesite="strict",
    )


def clear_refresh_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.REFRESH_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.is_production(),
        samesite="strict",
    )


def read_refresh_token(
    request: Request,
    settings: Settings,
    body_token: Optional[str] = None,
) -> Optional[str]:
    """Refresh token from the cookie, falling back to the request body."""
    return request.cookies.get(settings.REFRESH_COOKIE_NAME) or body_token

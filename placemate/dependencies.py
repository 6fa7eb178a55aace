"""
FastAPI dependencies for PlaceMate.

Services are built once by ``init_services`` and kept on ``app.state``;
the getters below read them back from the request's application.
"""

from typing import Annotated, Optional

from fastapi import Depends, FastAPI, Request

from common.auth.jwt_tokens import TokenIssuer
from placemate.config import Settings
from placemate.middleware.auth import AuthMiddleware
from placemate.services.auth.session_service import SessionService
from placemate.services.user.user_repository import UserRepository
from placemate.services.user.user_service import UserService


def init_services(app: FastAPI, settings: Settings, user_repository: UserRepository) -> None:
    """
    Build the service graph and attach it to the application.

    Args:
        app: FastAPI application
        settings: Application settings
        user_repository: Credential store bound to the connected database
    """
    token_issuer = TokenIssuer(
        access_secret=settings.JWT_ACCESS_SECRET,
        refresh_secret=settings.JWT_REFRESH_SECRET,
        access_ttl=settings.access_token_ttl,
        refresh_ttl=settings.refresh_token_ttl,
        algorithm=settings.JWT_ALGORITHM,
    )
    session_service = SessionService(user_repository, token_issuer)

    app.state.settings = settings
    app.state.user_repository = user_repository
    app.state.token_issuer = token_issuer
    app.state.session_service = session_service
    app.state.user_service = UserService(user_repository)
    app.state.auth_middleware = AuthMiddleware(session_service)


def _get_state(request: Request, name: str):
    service = getattr(request.app.state, name, None)
    if service is None:
        raise RuntimeError(f"Service '{name}' not initialized. Call init_services() first.")
    return service


# =============================================================================
# Dependency Functions
# =============================================================================

def get_settings(request: Request) -> Settings:
    """Get application settings."""
    return _get_state(request, "settings")


def get_session_service(request: Request) -> SessionService:
    """Get session service instance."""
    return _get_state(request, "session_service")


def get_user_service(request: Request) -> UserService:
    """Get user service instance."""
    return _get_state(request, "user_service")


def get_auth_middleware(request: Request) -> AuthMiddleware:
    """Get auth middleware instance."""
    return _get_state(request, "auth_middleware")


async def require_auth(
    request: Request,
    auth_middleware: Annotated[AuthMiddleware, Depends(get_auth_middleware)]
) -> dict:
    """Dependency that requires authentication."""
    return await auth_middleware.require_auth(request)


async def optional_auth(
    request: Request,
    auth_middleware: Annotated[AuthMiddleware, Depends(get_auth_middleware)]
) -> Optional[dict]:
    """Dependency that optionally authenticates."""
    return await auth_middleware.optional_auth(request)

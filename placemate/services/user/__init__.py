"""User services."""

from placemate.services.user.user_repository import UserRepository, format_user
from placemate.services.user.user_service import UserService

__all__ = ["UserRepository", "UserService", "format_user"]

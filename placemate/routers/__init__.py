"""
PlaceMate API Routers.
"""

from placemate.routers.auth import router as auth_router
from placemate.routers.users import router as user_router

__all__ = [
    "auth_router",
    "user_router",
]

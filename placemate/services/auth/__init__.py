"""Auth services: token-pair sessions with refresh-token rotation."""

from placemate.services.auth.session_service import SessionService

__all__ = ["SessionService"]

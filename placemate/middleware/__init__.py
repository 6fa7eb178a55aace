"""HTTP middleware for PlaceMate."""

from placemate.middleware.auth import AuthMiddleware
from placemate.middleware.request_logging import log_requests

__all__ = ["AuthMiddleware", "log_requests"]

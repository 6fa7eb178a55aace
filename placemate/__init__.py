"""
PlaceMate API.

Authentication, session and account backend for the PlaceMate job
application tracker.
"""

from placemate.main import create_app

__all__ = ["create_app"]

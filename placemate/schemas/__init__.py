"""
PlaceMate Schemas.

Pydantic models for request validation.
"""

from placemate.schemas.auth import *
from placemate.schemas.user import *

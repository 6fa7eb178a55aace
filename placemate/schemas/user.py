"""
Pydantic models for User request validation.
"""

from typing import Literal, Optional
from pydantic import BaseModel, Field, HttpUrl


class UpdateProfileRequest(BaseModel):
    """Request body for updating profile."""
    name: Optional[str] = Field(None, min_length=2, max_length=50)
    avatar: Optional[HttpUrl] = None
    college: Optional[str] = Field(None, max_length=100)
    graduationYear: Optional[int] = Field(None, ge=1900, le=2100)


class UpdatePreferencesRequest(BaseModel):
    """Request body for updating preferences. Omitted keys are left unchanged."""
    emailReminders: Optional[bool] = None
    reminderDaysBefore: Optional[int] = Field(None, ge=0, le=30)
    theme: Optional[Literal["light", "dark", "system"]] = None
    defaultView: Optional[Literal["dashboard", "pipeline"]] = None


class ChangePasswordRequest(BaseModel):
    """Request body for changing password."""
    currentPassword: str = Field(..., min_length=1)
    newPassword: str = Field(..., min_length=6, max_length=128)

"""
Pydantic models for Auth request validation.
"""

from typing import Optional
from pydantic import BaseModel, Field, EmailStr, field_validator


class SignupRequest(BaseModel):
    """Request body for user registration."""
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    name: str = Field(..., min_length=2, max_length=50)
    college: Optional[str] = Field(None, max_length=100)
    graduationYear: Optional[int] = Field(None, ge=1900, le=2100)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.strip().lower()


class LoginRequest(BaseModel):
    """Request body for user login."""
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.strip().lower()


class RefreshRequest(BaseModel):
    """Request body for token refresh. The refresh cookie takes precedence."""
    refreshToken: Optional[str] = None


class LogoutRequest(BaseModel):
    """Request body for single-device logout. The refresh cookie takes precedence."""
    refreshToken: Optional[str] = None

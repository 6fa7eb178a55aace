"""
PlaceMate application settings.

Extends the base settings with authentication and cookie configuration.
Settings are constructed once at start-up and passed to ``create_app``;
a missing or weak signing secret fails construction, so misconfiguration
is caught before the server accepts requests.
"""

from datetime import timedelta

from pydantic import Field, field_validator, model_validator

from common.config import BaseAppSettings, parse_duration


class Settings(BaseAppSettings):
    """PlaceMate-specific settings."""

    API_VERSION: str = "v1"

    # ==========================================================================
    # JWT Settings
    # ==========================================================================
    JWT_ACCESS_SECRET: str = Field(..., min_length=32)
    JWT_REFRESH_SECRET: str = Field(..., min_length=32)
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_EXPIRES_IN: str = "15m"
    JWT_REFRESH_EXPIRES_IN: str = "7d"

    # ==========================================================================
    # Password hashing
    # ==========================================================================
    BCRYPT_ROUNDS: int = Field(default=12, ge=4, le=31)

    # ==========================================================================
    # Refresh token cookie
    # ==========================================================================
    REFRESH_COOKIE_NAME: str = "refreshToken"

    @field_validator("JWT_ACCESS_EXPIRES_IN", "JWT_REFRESH_EXPIRES_IN")
    @classmethod
    def _validate_duration(cls, value: str) -> str:
        parse_duration(value)
        return value

    @field_validator("ENVIRONMENT")
    @classmethod
    def _validate_environment(cls, value: str) -> str:
        if value.lower() not in ("development", "production", "test"):
            raise ValueError("ENVIRONMENT must be one of: development, production, test")
        return value.lower()

    @model_validator(mode="after")
    def _validate_distinct_secrets(self) -> "Settings":
        if self.JWT_ACCESS_SECRET == self.JWT_REFRESH_SECRET:
            raise ValueError("JWT_ACCESS_SECRET and JWT_REFRESH_SECRET must differ")
        return self

    @property
    def access_token_ttl(self) -> timedelta:
        return parse_duration(self.JWT_ACCESS_EXPIRES_IN)

    @property
    def refresh_token_ttl(self) -> timedelta:
        return parse_duration(self.JWT_REFRESH_EXPIRES_IN)

    @property
    def api_prefix(self) -> str:
        return f"/{self.API_VERSION.strip('/')}"

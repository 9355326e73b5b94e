"""
Application configuration using Pydantic Settings.
"""
from functools import lru_cache
from typing import List

import pytz
from pydantic import field_validator
from pydantic_settings import BaseSettings


# List of known insecure default secrets that should never be used
INSECURE_DEFAULTS = {
    "your-super-secret-key-change-in-production",
    "secret",
    "changeme",
    "test",
    "dev",
    "development",
    "password",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Shopfront API"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # Database
    DATABASE_URL: str = "sqlite:///./shopfront.db"

    # Business hours
    BUSINESS_TIMEZONE: str = "America/New_York"
    OVERRIDE_WINDOW_DAYS: int = 7

    # JWT Configuration
    JWT_SECRET_KEY: str = "dev-only-shopfront-signing-key-replace-me-0123456789"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    @field_validator("JWT_SECRET_KEY")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        """
        Validate JWT secret key is secure.

        Requirements:
        - At least 32 characters
        - Not a known insecure default
        """
        if v.lower() in INSECURE_DEFAULTS:
            raise ValueError(
                "JWT_SECRET_KEY is set to an insecure default value. "
                "Please set a strong secret key via environment variable. "
                "Generate one with: python -c 'import secrets; print(secrets.token_urlsafe(32))'"
            )

        if len(v) < 32:
            raise ValueError(
                f"JWT_SECRET_KEY must be at least 32 characters long (got {len(v)}). "
                "Generate a secure key with: python -c 'import secrets; print(secrets.token_urlsafe(32))'"
            )

        return v

    @field_validator("BUSINESS_TIMEZONE")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Reject zone names pytz does not know."""
        if v not in pytz.all_timezones_set:
            raise ValueError(f"Unknown BUSINESS_TIMEZONE: {v}")
        return v

    @field_validator("OVERRIDE_WINDOW_DAYS")
    @classmethod
    def validate_window(cls, v: int) -> int:
        if v < 1:
            raise ValueError("OVERRIDE_WINDOW_DAYS must be at least 1")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

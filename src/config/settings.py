"""
Application settings - pydantic-settings configuration.

This module defines application configuration using pydantic-settings
for environment variable loading with validation and defaults.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    # Adapter selection
    identity_backend: Literal["firebase", "memory"] = "memory"
    profile_backend: Literal["firestore", "memory"] = "memory"
    email_backend: Literal["resend", "console"] = "console"

    # Firebase (identity provider + Firestore profile store)
    firebase_service_account_json: str | None = None
    profile_collection: str = "users"

    # Resend transactional email
    resend_api_key: str | None = None
    email_from: str | None = None  # e.g. 'School Chow <no-reply@schoolchow.com>'
    reply_to: str = "support@schoolchow.com"

    # Continuation targets embedded in action links
    verification_continue_url: str = "https://schoolchow.com/verifyemail"
    password_reset_continue_url: str = "https://schoolchow.com/resetpassword"

    # Admin gate
    admin_pin: str | None = None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

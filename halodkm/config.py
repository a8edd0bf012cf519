"""Application configuration settings."""
from __future__ import annotations

import os
from functools import lru_cache

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Runtime toggles -----------------------------------------------------
# Deployment environment: "dev" | "staging" | "prod"
ENV = os.getenv("APP_ENV", "dev").lower()

# Roles recognised by the identity gate
ROLES = {"admin", "jamaah"}


class Settings(BaseSettings):
    """Environment configuration for the HaloDKM backend."""

    app_env: str = Field(default=ENV, validation_alias=AliasChoices("APP_ENV", "app_env"))
    database_url: str = "sqlite:///halodkm.db"
    LOG_LEVEL: str = "INFO"
    CORS_ALLOW_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]
    SENTRY_DSN: str | None = None
    PROMETHEUS_ENABLED: bool = True
    ALLOW_DB_CREATE_ALL: bool = False

    # --- Identity gate ---------------------------------------------------
    IDENTITY_HEADER: str = "X-User-Info"

    # --- Event lifecycle -------------------------------------------------
    # "Today" for completion dates is taken in the organisation's timezone.
    APP_TIMEZONE: str = "Asia/Jakarta"
    # Reject metadata edits on completed events.
    LOCK_COMPLETED_EVENTS: bool = True

    # --- Audit -----------------------------------------------------------
    AUDIT_LOG_DEFAULT_LIMIT: int = 100
    AUDIT_LOG_MAX_LIMIT: int = 500

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("SENTRY_DSN")
    @classmethod
    def _strip_empty_dsn(cls, value: str | None) -> str | None:
        """Normalise an empty DSN to ``None`` so Sentry stays disabled."""

        if value is None:
            return None
        cleaned = value.strip()
        return cleaned or None


class AppInfo(BaseModel):
    name: str = "halodkm-backend"
    version: str = "0.1.0"


settings = Settings()


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""

    return settings


__all__ = [
    "ENV",
    "ROLES",
    "Settings",
    "AppInfo",
    "settings",
    "get_settings",
]

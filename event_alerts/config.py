"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    app_timezone: str = Field(
        default="Asia/Manila",
        description="IANA timezone name (or UTC+HH:MM offset) used for calendar dates",
    )
    notification_horizon_days: int = Field(
        default=3,
        description="Days ahead of today that make an event a notification candidate",
        gt=0,
    )
    upcoming_events_days: int = Field(
        default=30,
        description="Days ahead of today listed by the upcoming events endpoint",
        gt=0,
    )
    notification_max_workers: int = Field(
        default=1,
        description="Worker threads used to process (event, user) pairs in one run",
        ge=1,
    )
    district_map_path: str | None = Field(
        default=None,
        description="Optional JSON file mapping district names to locality lists",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]

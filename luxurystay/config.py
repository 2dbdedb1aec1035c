"""Settings for the notification service, read from the environment."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Values read from environment variables or a local ``.env`` file."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="SQLAlchemy URL of the notification database",
        min_length=1,
    )
    secret_key: str = Field(
        description="HS256 key used to sign and verify bearer tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Lifetime of issued bearer tokens in minutes",
        gt=0,
    )
    app_timezone: str | None = Field(
        default="UTC",
        description="Timezone used for notification timestamps",
    )
    frontend_url: str = Field(
        default="http://localhost:3000",
        description="Origin of the dashboard allowed by CORS",
    )
    notification_page_size: int = Field(
        default=10,
        description="Default number of notifications returned per page",
        gt=0,
    )
    notification_page_max: int = Field(
        default=100,
        description="Maximum number of notifications a client may request per page",
        gt=0,
    )
    log_level: str = Field(default="INFO", description="Root logger level")


@lru_cache
def get_settings() -> Settings:
    """Return the settings, loading them on first use."""

    return Settings()


def reset_settings_cache() -> None:
    """Forget the cached settings so the next call re-reads the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]

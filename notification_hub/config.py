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
        description="IANA timezone name (or UTC offset) used for notification timestamps",
    )
    admin_role_alias: str = Field(
        default="admin",
        description="Role alias identifying the users that receive admin notifications",
        min_length=1,
    )
    notification_list_limit: int | None = Field(
        default=None,
        description="Maximum number of notifications returned per recipient (unbounded when unset)",
        gt=0,
    )
    system_actor_name: str = Field(
        default="System",
        description="Actor name attached to notifications sent without an explicit actor",
    )
    system_actor_avatar: str = Field(
        default="/images/notify-icon.png",
        description="Avatar attached to notifications sent without an explicit actor",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]

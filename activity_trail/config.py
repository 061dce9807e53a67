"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key used to verify the JWT tokens identifying the actor",
        min_length=1,
    )
    app_timezone: str | None = Field(
        default=None,
        description="IANA timezone name or UTC offset used for event timestamps",
    )
    comment_create_max_length: int = Field(
        default=2000,
        description="Maximum number of characters accepted when a comment is created",
        gt=0,
    )
    comment_edit_max_length: int = Field(
        default=10000,
        description="Maximum number of characters accepted when a comment is edited",
        gt=0,
    )
    feed_default_limit: int = Field(
        default=50,
        description="Number of activity entries returned when no limit is requested",
        gt=0,
    )
    feed_max_limit: int = Field(
        default=100,
        description="Upper bound for the number of entries returned by the feed",
        gt=0,
    )

    cors_allow_origins: list[str] = Field(
        default_factory=list,
        description="Origins allowed to call the API from a browser (JSON list)",
    )

    @model_validator(mode="after")
    def _validate_feed_limits(self) -> "Settings":
        if self.feed_default_limit > self.feed_max_limit:
            raise ValueError(
                "FEED_DEFAULT_LIMIT must not be greater than FEED_MAX_LIMIT"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]

"""Application configuration loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration.

    Routes are mounted under ``API_PREFIX`` (default ``/api``, e.g.
    ``/api/movies``). Set it to an empty string to serve bare ``/movies`` and
    ``/feedback``.
    """

    app_title: str = Field(default="Movie Feedback Service", alias="APP_TITLE")
    database_url: str = Field(default="sqlite:///./movie_feedback.db", alias="DATABASE_URL")
    sql_echo: bool = Field(default=False, alias="SQL_ECHO")
    api_prefix: str = Field(default="/api", alias="API_PREFIX")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"], alias="CORS_ORIGINS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    enforce_movie_reference: bool = Field(default=False, alias="ENFORCE_MOVIE_REFERENCE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()

"""Client configuration models and utilities."""

from functools import lru_cache

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    base_url: HttpUrl = Field(..., alias="JSON_CLIENT_BASE_URL")
    connect_timeout: float = Field(default=10.0, gt=0, alias="JSON_CLIENT_CONNECT_TIMEOUT")
    read_timeout: float = Field(default=30.0, gt=0, alias="JSON_CLIENT_READ_TIMEOUT")

    model_config = SettingsConfigDict(
        env_file=(".env.local", ".env"), env_file_encoding="utf-8", extra="ignore"
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached client settings instance."""
    return Settings()

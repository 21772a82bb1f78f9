"""Runtime configuration loaded from environment variables or ``.env``."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Converter settings.

    Every field can be overridden with a ``FILE_CONVERTER_`` prefixed
    environment variable, e.g. ``FILE_CONVERTER_HTTP_PORT=9000``.
    """

    model_config = SettingsConfigDict(
        env_prefix="FILE_CONVERTER_",
        env_file=".env",
        extra="ignore",
    )

    default_jpeg_quality: int = Field(default=90, ge=0, le=100)
    max_upload_bytes: int = Field(default=50 * 1024 * 1024, gt=0)
    http_host: str = "0.0.0.0"
    http_port: int = Field(default=8090, gt=0, lt=65536)
    log_level: str = "INFO"
    log_json: bool = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()

"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

MAX_UPLOAD_BYTES = 10 * 1024 * 1024


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # External validation service
    validation_service_url: str = "http://localhost:5000/hackathon/validate-docs"
    validation_service_timeout_seconds: float = 30.0

    # Uploads
    max_upload_bytes: int = MAX_UPLOAD_BYTES

    # Health checks
    enable_upstream_healthcheck: bool = True
    healthcheck_timeout_seconds: float = 2.0

    # UI
    backend_url: str = "http://localhost:8000"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

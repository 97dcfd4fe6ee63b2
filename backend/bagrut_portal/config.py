"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Bagrut Portal"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False

    # Database (async driver URL, e.g. sqlite+aiosqlite:///./bagrut.db)
    # Migrations (alembic/env.py) use the same async URL
    database_url: str = "sqlite+aiosqlite:///./bagrut.db"

    # Auth / JWT
    jwt_secret_key: str  # Required - no default, must be set in .env
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60 * 24 * 7  # 7 days

    # CORS
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Cookies
    # Set to true when frontend and backend are on different domains
    cookie_cross_domain: bool = False

    # Local storage medium
    # Capacity in stored characters across every key (collections + file blobs)
    storage_quota_chars: int = 50 * 1024 * 1024
    # Share of stored files evicted when a file upload hits the quota
    file_eviction_fraction: float = Field(0.2, gt=0, le=1)
    max_upload_size_bytes: int = 20 * 1024 * 1024  # 20MB

    # Seed fixture users/subjects/exams when collections are missing
    seed_on_startup: bool = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def sanitize_error(error: Exception | str, *, generic_message: str = "An internal error occurred.") -> str:
    """
    Return a user-safe error message.

    In development, returns the full error text for debugging.
    In staging/production, returns a generic message to avoid leaking internals.
    """
    settings = get_settings()
    if settings.environment == "development":
        return str(error)
    return generic_message

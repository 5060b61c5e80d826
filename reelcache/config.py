"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_env: Literal["development", "production", "test"] = "development"
    app_name: str = "reelcache"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] | None = None

    # Local cache database
    cache_database_url: str = "sqlite+aiosqlite:///./reelcache.db"

    # TMDB (API Read Access Token or v3 API key)
    tmdb_access_token: str = ""
    tmdb_language: str = "en-US"

    # Connectivity probing
    connectivity_probe_url: str = "https://api.themoviedb.org"
    connectivity_check_interval: float = 10.0

    @field_validator("cache_database_url")
    @classmethod
    def validate_cache_database_url(cls, v: str) -> str:
        """Require async SQLite, the cache layer writes with SQLite upserts."""
        if not v.startswith("sqlite+aiosqlite://"):
            raise ValueError("CACHE_DATABASE_URL must use sqlite+aiosqlite://")
        return v

    @field_validator("connectivity_check_interval")
    @classmethod
    def validate_check_interval(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("CONNECTIVITY_CHECK_INTERVAL must be positive")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def database_url_sync(self) -> str:
        """Get the synchronous database URL (used by Alembic offline mode)."""
        driver, rest = self.cache_database_url.split("://", 1)
        return f"{driver.split('+', 1)[0]}://{rest}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

"""
Service configuration loaded from environment variables (and an optional
.env file) using pydantic-settings.

Usage:
    from user_crud_svc.config import get_settings

    settings = get_settings()
    settings.DATABASE_URL
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings. Only DATABASE_URL is required."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Database
    DATABASE_URL: str
    DB_POOL_SIZE: int = Field(default=5, ge=1)
    DB_POOL_TIMEOUT: float = Field(default=30.0, gt=0)

    # HTTP server
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=3000)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    DEBUG: bool = Field(default=False)

    @field_validator("DATABASE_URL")
    @classmethod
    def use_async_driver(cls, value: str) -> str:
        """
        Point plain PostgreSQL URLs at the asyncpg driver.

        postgres://... and postgresql://... become postgresql+asyncpg://...;
        URLs that already name a driver are left alone.
        """
        for scheme in ("postgres://", "postgresql://"):
            if value.startswith(scheme):
                return "postgresql+asyncpg://" + value[len(scheme):]
        return value


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

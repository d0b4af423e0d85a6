"""Application settings loaded from the environment.

Values can be overridden with ``BENCHCACHE_``-prefixed environment variables
or a local ``.env`` file, e.g. ``BENCHCACHE_DATABASE_URL=postgresql://...``.
"""

import os
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# SQLite WAL mode conflicts with cloud-synced folders, so the default
# database lives in the user's home directory.
DEFAULT_DB_PATH = os.path.join(os.path.expanduser("~"), ".myportfolio", "portfolio.db")


class Settings(BaseSettings):
    """Settings for the benchmark cache and exchange-rate cache."""

    model_config = SettingsConfigDict(
        env_prefix="BENCHCACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        default=f"sqlite:///{DEFAULT_DB_PATH}",
        description="SQLAlchemy database URL (SQLite or PostgreSQL)",
    )
    db_echo: bool = Field(default=False, description="Echo SQL statements")

    # Benchmark cache
    chunk_years: int = Field(
        default=5, ge=1, description="Years per upstream request window"
    )
    fetch_timeout_seconds: float = Field(
        default=20.0, gt=0, description="Timeout for one upstream request"
    )
    fetch_max_attempts: int = Field(
        default=3, ge=1, description="Attempts per upstream request before giving up"
    )
    fetch_backoff_seconds: float = Field(
        default=1.0, ge=0, description="Base delay for exponential backoff"
    )

    # Exchange rate
    fx_symbol: str = Field(default="USDKRW=X", description="Yahoo symbol for USD/KRW")
    fx_ttl_seconds: int = Field(
        default=3600, ge=0, description="How long an in-memory rate stays valid"
    )
    fx_default_rate: float = Field(
        default=1350.0, gt=0, description="Rate used when nothing else is available"
    )

    log_level: str = Field(default="INFO", description="Root log level for scripts")


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()

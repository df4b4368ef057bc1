"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - default_timezone is a valid IANA zone name (checked at load time)

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
    - store_backend picks the persistence strategy once, at startup
"""

from functools import lru_cache
from typing import Literal

import pytz
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Persistence strategy
    store_backend: Literal["sql", "mongo"] = "sql"

    # Relational backend
    database_url: str = (
        "postgresql+asyncpg://horoscope:horoscope@db:5432/horoscope"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Document backend
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_database: str = "astrologer"

    # Zone that decides what "today" means when a request omits ?date=
    default_timezone: str = "UTC"

    @field_validator("default_timezone")
    @classmethod
    def check_timezone(cls, v: str) -> str:
        if v not in pytz.all_timezones_set:
            raise ValueError(f"unknown time zone: {v}")
        return v

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()

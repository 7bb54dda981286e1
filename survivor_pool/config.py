"""
Typed settings for the survivor pool service.

Uses Pydantic Settings to load configuration from environment variables
with validation and type safety. Local development may keep them in a
root .env file.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .validate_env import validate_env


class ProviderConfig(BaseModel):
    host: str = Field(default="api-american-football.p.rapidapi.com")
    league_id: int = 1
    timezone: str = "America/Los_Angeles"
    # Natural-key source recorded on every synced game row
    source_name: str = "api-american-football"
    request_timeout_seconds: int = 20


class ScheduleConfig(BaseModel):
    sync_interval_minutes: int = 30
    settle_hour_minute: int = 5  # settle at :05 past every hour
    settle_lock_timeout_seconds: int = 600
    # Also re-sync the previous week of the phase to catch late corrections
    sync_previous_week: bool = True


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    In containers the variables are passed directly; for local development
    the root .env file is read when present. All settings are validated by
    Pydantic.
    """
    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[1] / ".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="allow",
    )

    database_url: str = Field(..., alias="DATABASE_URL")

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_async_to_sync(cls, v: str) -> str:
        """Rewrite asyncpg URLs to psycopg; the pool core uses a synchronous engine."""
        if isinstance(v, str) and "asyncpg" in v:
            return v.replace("asyncpg", "psycopg")
        return v

    redis_url: str = Field("redis://localhost:6379/3", alias="REDIS_URL")
    rapidapi_key: str | None = Field(None, alias="RAPIDAPI_KEY")
    environment: str = Field("development", alias="ENVIRONMENT")
    log_level: str | None = Field(None, alias="LOG_LEVEL")
    sql_echo: bool = Field(False, alias="SQL_ECHO")
    provider_config: ProviderConfig = Field(default_factory=ProviderConfig)
    schedule_config: ScheduleConfig = Field(default_factory=ScheduleConfig)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return cached settings instance.

    Environment validation runs first so a misconfigured worker fails
    before any connection is attempted.
    """
    validate_env()
    return Settings()


settings = get_settings()

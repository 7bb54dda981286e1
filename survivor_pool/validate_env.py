"""Fail-fast environment validation for the pool worker and scripts."""

from __future__ import annotations

import os
from functools import lru_cache
from urllib.parse import urlparse

from .errors import ConfigurationError

ALLOWED_ENVIRONMENTS = {"development", "staging", "production"}
ALLOWED_POOL_ROLES = {"worker", "beat", "script"}


def require_env(name: str) -> str:
    """Fetch an environment variable or raise ConfigurationError if missing."""
    value = os.getenv(name)
    if value is None or not value.strip():
        raise ConfigurationError(f"{name} is required and must be set before startup.")
    return value.strip()


def validate_environment_value(environment: str) -> None:
    """Ensure ENVIRONMENT is one of the allowed values."""
    if environment not in ALLOWED_ENVIRONMENTS:
        allowed = ", ".join(sorted(ALLOWED_ENVIRONMENTS))
        raise ConfigurationError(f"ENVIRONMENT must be one of: {allowed}.")


def validate_non_local_url(name: str, value: str) -> None:
    """Ensure a URL does not point to localhost in production."""
    parsed = urlparse(value)
    host = parsed.hostname
    if not host:
        raise ConfigurationError(f"{name} must be a valid URL (missing hostname).")
    if host in {"localhost", "127.0.0.1"}:
        raise ConfigurationError(f"{name} must not point to localhost in production.")


def validate_database_credentials(value: str) -> None:
    """Ensure DATABASE_URL does not use default credentials in production."""
    parsed = urlparse(value)
    if parsed.username == "postgres" and parsed.password == "postgres":
        raise ConfigurationError(
            "DATABASE_URL must not use default postgres credentials in production."
        )


@lru_cache(maxsize=1)
def validate_env() -> None:
    """Validate required environment variables before the worker starts.

    POOL_ROLE decides which credentials are demanded in production:
        worker, beat: sync and settlement, needs RAPIDAPI_KEY.
        script:       operator scripts; the provider client rejects a missing key on sync.
    """
    environment = require_env("ENVIRONMENT")
    validate_environment_value(environment)

    database_url = require_env("DATABASE_URL")

    if environment == "production":
        validate_non_local_url("DATABASE_URL", database_url)
        validate_database_credentials(database_url)

        redis_url = os.getenv("REDIS_URL")
        if redis_url:
            validate_non_local_url("REDIS_URL", redis_url)

        role = os.getenv("POOL_ROLE", "worker")
        if role not in ALLOWED_POOL_ROLES:
            allowed = ", ".join(sorted(ALLOWED_POOL_ROLES))
            raise ConfigurationError(f"POOL_ROLE must be one of: {allowed}.")

        if role in ("worker", "beat"):
            require_env("RAPIDAPI_KEY")

"""Error taxonomy shared by every pool component."""

from __future__ import annotations


class SurvivorPoolError(Exception):
    """Base class for all pool errors."""


class ConfigurationError(SurvivorPoolError, RuntimeError):
    """Required configuration (credentials, endpoints) is missing or invalid."""


class ValidationError(SurvivorPoolError, ValueError):
    """Caller input rejected before any I/O (week labels, identifiers, phases)."""


class UpstreamFetchError(SurvivorPoolError):
    """The score provider answered with a non-success response."""

    def __init__(self, status_code: int, body: str | None = None) -> None:
        self.status_code = status_code
        self.body = body
        message = f"Provider responded {status_code}"
        if body:
            message = f"{message}: {body}"
        super().__init__(message)


class StoreError(SurvivorPoolError):
    """A read or write against the game store failed."""


class UnknownTeamError(SurvivorPoolError):
    """No team matches the submitted team code."""


class GameNotAvailableError(SurvivorPoolError):
    """No unstarted game exists for the team in the requested week."""


class DuplicatePickError(SurvivorPoolError):
    """The user already has a pick for the requested week."""


__all__ = [
    "SurvivorPoolError",
    "ConfigurationError",
    "ValidationError",
    "UpstreamFetchError",
    "StoreError",
    "UnknownTeamError",
    "GameNotAvailableError",
    "DuplicatePickError",
]

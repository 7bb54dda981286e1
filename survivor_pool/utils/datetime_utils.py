"""
Low-level timezone and timestamp utilities.

Everything returned here is timezone-aware UTC.
"""

from __future__ import annotations

from datetime import datetime, timezone

from ..errors import ValidationError


def now_utc() -> datetime:
    """Return the current timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def current_season() -> int:
    """Season defaults to the current UTC calendar year."""
    return now_utc().year


def season_window(season: int) -> tuple[datetime, datetime]:
    """Return [Jan 1 season, Jan 1 season+1) in UTC.

    Games are attributed to a season by the calendar year of their start time.
    """
    start = datetime(season, 1, 1, tzinfo=timezone.utc)
    end = datetime(season + 1, 1, 1, tzinfo=timezone.utc)
    return start, end


def epoch_to_utc(epoch: int | float | None) -> datetime | None:
    """Convert a unix timestamp in seconds to UTC. Zero or None means unknown.

    Raises ValidationError when the timestamp is outside the datetime range
    (a millisecond epoch, for example).
    """
    if not epoch:
        return None
    try:
        return datetime.fromtimestamp(epoch, tz=timezone.utc)
    except (ValueError, OverflowError, OSError) as exc:
        raise ValidationError(f"Kickoff timestamp out of range: {epoch!r}") from exc


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC; convert aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

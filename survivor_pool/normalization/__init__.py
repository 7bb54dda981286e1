"""Provider payload normalization.

The score provider returns game events in several shapes depending on the
endpoint version. Every field is read through an ordered tuple of
extractors; the first one that yields a value wins. Shapes seen so far:

- game-centric:    {"game": {"id", "week", "date": {"timestamp"}, "status"},
                    "teams": {"home": {"name"}}, "scores": {"home": {"total"}}}
- flat:            {"id", "week", "date": {"timestamp"}, "home": {"name"},
                    "score": {"home": {"total"}}, "status"}
- fixture-centric: {"fixture": {"id", "week", "timestamp"}, "goals": {"home"}}
- participant:     {"id", "round", "time": {"starting_at_timestamp"},
                    "participants": [{"name"}, {"name"}]}
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Iterable

from ..db.pool import GameStatus
from ..models import NormalizedEvent
from ..utils.datetime_utils import now_utc
from ..utils.parsing import leading_int, parse_int

Extractor = Callable[[Any], Any]

FINISHED_STATUSES = frozenset({"final", "finished", "ft", "ended", "completed"})
LIVE_STATUSES = frozenset(
    {"in progress", "live", "halftime", "ot", "q1", "q2", "q3", "q4"}
)


def path(*keys: str | int) -> Extractor:
    """Build an extractor that walks nested dicts/lists and returns None on any gap."""

    def extract(payload: Any) -> Any:
        current = payload
        for key in keys:
            if isinstance(key, int):
                if not isinstance(current, (list, tuple)) or len(current) <= key:
                    return None
                current = current[key]
            else:
                if not isinstance(current, dict):
                    return None
                current = current.get(key)
            if current is None:
                return None
        return current

    extract.__name__ = "path_" + "_".join(str(k) for k in keys)
    return extract


def first_present(payload: Any, extractors: Iterable[Extractor]) -> Any:
    for extractor in extractors:
        value = extractor(payload)
        if value is not None:
            return value
    return None


PROVIDER_ID_EXTRACTORS: tuple[Extractor, ...] = (
    path("game", "id"),
    path("id"),
    path("fixture", "id"),
    path("game", "game_id"),
)
WEEK_EXTRACTORS: tuple[Extractor, ...] = (
    path("game", "week"),
    path("week"),
    path("fixture", "week"),
    path("round"),
)
EPOCH_EXTRACTORS: tuple[Extractor, ...] = (
    path("date", "timestamp"),
    path("game", "date", "timestamp"),
    path("fixture", "timestamp"),
    path("time", "starting_at_timestamp"),
)
HOME_NAME_EXTRACTORS: tuple[Extractor, ...] = (
    path("teams", "home", "name"),
    path("home", "name"),
    path("participants", 0, "name"),
)
AWAY_NAME_EXTRACTORS: tuple[Extractor, ...] = (
    path("teams", "away", "name"),
    path("away", "name"),
    path("participants", 1, "name"),
)
HOME_SCORE_EXTRACTORS: tuple[Extractor, ...] = (
    path("scores", "home", "total"),
    path("score", "home", "total"),
    path("scores", "home"),
    path("goals", "home"),
)
AWAY_SCORE_EXTRACTORS: tuple[Extractor, ...] = (
    path("scores", "away", "total"),
    path("score", "away", "total"),
    path("scores", "away"),
    path("goals", "away"),
)
STATUS_EXTRACTORS: tuple[Extractor, ...] = (
    path("status"),
    path("game", "status"),
)


def _score(value: Any) -> int | None:
    # "scores.home" may itself be an object whose total is still null
    if isinstance(value, dict):
        value = value.get("total")
    return parse_int(value)


def _status_token(value: Any) -> str:
    if isinstance(value, dict):
        value = value.get("short") or value.get("state") or ""
    if value is None:
        return ""
    return str(value).strip().lower()


def normalize_team_name(name: str | None) -> str:
    """Key used for case-insensitive exact team name matching."""
    return (name or "").strip().lower()


def normalize_event(payload: dict[str, Any]) -> NormalizedEvent:
    """Flatten one provider event. Missing fields come back as None/0/""."""
    provider_id = first_present(payload, PROVIDER_ID_EXTRACTORS)
    week_raw = first_present(payload, WEEK_EXTRACTORS)
    home_name = first_present(payload, HOME_NAME_EXTRACTORS)
    away_name = first_present(payload, AWAY_NAME_EXTRACTORS)
    return NormalizedEvent(
        provider_id="" if provider_id is None else str(provider_id).strip(),
        week_raw=week_raw if isinstance(week_raw, (str, int)) else None,
        week=leading_int(week_raw),
        epoch=parse_int(first_present(payload, EPOCH_EXTRACTORS)) or 0,
        home_name=str(home_name) if home_name is not None else None,
        away_name=str(away_name) if away_name is not None else None,
        home_score=_score(first_present(payload, HOME_SCORE_EXTRACTORS)),
        away_score=_score(first_present(payload, AWAY_SCORE_EXTRACTORS)),
        raw_status=_status_token(first_present(payload, STATUS_EXTRACTORS)),
    )


def derive_status(
    raw_status: str,
    epoch: int,
    home_score: int | None,
    away_score: int | None,
    now: datetime | None = None,
) -> str:
    """Derive the stored status label.

    Provider text wins when it is recognised. Otherwise two scores mean
    final, an unknown or future kickoff means scheduled, and anything else
    is treated as in progress.
    """
    token = (raw_status or "").strip().lower()
    if token in FINISHED_STATUSES:
        return GameStatus.final.value
    if token in LIVE_STATUSES:
        return GameStatus.in_progress.value
    if home_score is not None and away_score is not None:
        return GameStatus.final.value
    if not epoch:
        return GameStatus.scheduled.value
    current = now or now_utc()
    if current.timestamp() < epoch:
        return GameStatus.scheduled.value
    return GameStatus.in_progress.value


__all__ = [
    "AWAY_NAME_EXTRACTORS",
    "AWAY_SCORE_EXTRACTORS",
    "EPOCH_EXTRACTORS",
    "FINISHED_STATUSES",
    "HOME_NAME_EXTRACTORS",
    "HOME_SCORE_EXTRACTORS",
    "LIVE_STATUSES",
    "PROVIDER_ID_EXTRACTORS",
    "STATUS_EXTRACTORS",
    "WEEK_EXTRACTORS",
    "derive_status",
    "first_present",
    "normalize_event",
    "normalize_team_name",
    "path",
]

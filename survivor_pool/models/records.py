"""Plain rows returned by the game store.

The SQL store builds these from query results; test fakes build them directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TeamRecord:
    id: int
    code: str
    name: str


@dataclass(frozen=True)
class UserRecord:
    id: int
    name: str | None


@dataclass(frozen=True)
class GameRecord:
    id: int
    season: int
    phase: str
    week: int
    start_time: datetime
    home_team_id: int
    away_team_id: int
    home_score: int | None = None
    away_score: int | None = None
    status: str | None = None

    @property
    def is_final(self) -> bool:
        return self.home_score is not None and self.away_score is not None


@dataclass(frozen=True)
class PickRecord:
    id: int
    user_id: int
    week: int
    team_id: int
    game_id: int
    status: str | None = None


@dataclass(frozen=True)
class PickDetail:
    """A pick joined with its team and game, as shown in histories and the leaderboard."""

    id: int
    user_id: int
    week: int
    status: str | None
    team_code: str | None
    team_name: str | None
    game_id: int | None
    starts_at: datetime | None
    game_status: str | None = None


@dataclass(frozen=True)
class ScheduledGame:
    """A game joined with both teams for schedule listings."""

    id: int
    phase: str
    week: int
    start_time: datetime
    status: str | None
    home_score: int | None
    away_score: int | None
    home: TeamRecord
    away: TeamRecord

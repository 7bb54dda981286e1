"""The read/write contract every pool component consumes.

Components receive a store at construction time. Production code passes a
SqlGameStore bound to a session; tests pass an in-memory fake.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Protocol, Sequence

from ..db.pool import Phase
from ..models import (
    GameRecord,
    GameUpsert,
    PickDetail,
    PickRecord,
    ScheduledGame,
    TeamRecord,
    UserRecord,
)


class GameStore(Protocol):
    # -- games ---------------------------------------------------------------
    def earliest_future_game(self, phase: Phase, now: datetime) -> GameRecord | None:
        """Game of `phase` with the smallest start_time strictly after `now`."""
        ...

    def max_week(self, phase: Phase) -> int | None:
        """Highest week number recorded for `phase`, or None without rows."""
        ...

    def final_games(
        self, phase: Phase, week: int, start: datetime, end: datetime
    ) -> list[GameRecord]:
        """Games of (phase, week) starting in [start, end) with both scores set."""
        ...

    def upsert_games(self, rows: Sequence[GameUpsert]) -> int:
        """Insert or overwrite games keyed on (source, provider_game_id)."""
        ...

    def open_game_for_team(
        self, team_id: int, week: int, phase: Phase | None, now: datetime
    ) -> GameRecord | None:
        """A not-yet-started game of that week involving the team."""
        ...

    def started_team_ids(self, phase: Phase, week: int, now: datetime) -> set[int]:
        """Teams whose (phase, week) game has already kicked off."""
        ...

    def games_for_week(
        self, week: int, start: datetime | None = None, end: datetime | None = None
    ) -> list[ScheduledGame]:
        ...

    # -- teams ---------------------------------------------------------------
    def list_teams(self) -> list[TeamRecord]:
        """All teams ordered by code."""
        ...

    def team_by_code(self, code: str) -> TeamRecord | None:
        ...

    # -- users ---------------------------------------------------------------
    def users_ordered_by_name(self) -> list[UserRecord]:
        ...

    # -- picks ---------------------------------------------------------------
    def pending_picks_for_games(self, game_ids: Iterable[int]) -> list[PickRecord]:
        """Picks on those games whose status is pending or NULL."""
        ...

    def update_pick_status(self, pick_ids: Sequence[int], status: str) -> int:
        """Set status on the listed picks that are still pending. Returns rows changed."""
        ...

    def pick_details(self, user_id: int | None = None) -> list[PickDetail]:
        """Picks joined with team code and game start, ordered by week."""
        ...

    def pick_for_user_week(self, user_id: int, week: int) -> PickRecord | None:
        ...

    def picked_team_ids(self, user_id: int) -> set[int]:
        ...

    def create_pick(
        self, user_id: int, week: int, team_id: int, game_id: int
    ) -> PickDetail:
        """Insert a pending pick. Raises DuplicatePickError for a taken (user, week)."""
        ...

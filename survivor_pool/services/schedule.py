"""Weekly schedule listing."""

from __future__ import annotations

from ..models import ScheduledGame
from ..persistence import GameStore
from ..utils.datetime_utils import season_window
from ..utils.parsing import parse_identifier, parse_season


class ScheduleService:
    def __init__(self, store: GameStore) -> None:
        self.store = store

    def games_for_week(
        self, week: int | str, year: int | str | None = None
    ) -> list[ScheduledGame]:
        """Games of a week ordered by kickoff, optionally limited to one calendar year."""
        week = parse_identifier(week, "week")
        if year is None:
            return self.store.games_for_week(week)
        start, end = season_window(parse_season(year))
        return self.store.games_for_week(week, start=start, end=end)

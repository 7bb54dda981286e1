"""Pick submission, history and team availability."""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from ..db.pool import Phase
from ..errors import (
    DuplicatePickError,
    GameNotAvailableError,
    UnknownTeamError,
    ValidationError,
)
from ..logging import logger
from ..models import AvailableTeams, PickDetail
from ..persistence import GameStore
from ..utils.datetime_utils import now_utc
from ..utils.parsing import parse_identifier, parse_phase
from .phase_week import PhaseWeekResolver


class PickService:
    def __init__(
        self,
        store: GameStore,
        resolver: PhaseWeekResolver | None = None,
        clock: Callable[[], datetime] = now_utc,
    ) -> None:
        self.store = store
        self.clock = clock
        self.resolver = resolver or PhaseWeekResolver(store, clock=clock)

    def submit_pick(
        self,
        user_id: int | str,
        week: int | str,
        team_code: str,
        phase: Phase | str | None = None,
    ) -> PickDetail:
        """Record a user's team for a week.

        The team must have a game that week which has not kicked off yet, and
        the user must not already hold a pick for the week.
        """
        user_id = parse_identifier(user_id, "user_id")
        week = parse_identifier(week, "week")
        code = str(team_code or "").strip().upper()
        if not code:
            raise ValidationError("team code is required.")
        phase = parse_phase(phase) if phase else None

        team = self.store.team_by_code(code)
        if team is None:
            raise UnknownTeamError(f"Unknown team code: {code}")

        game = self.store.open_game_for_team(team.id, week, phase, self.clock())
        if game is None:
            raise GameNotAvailableError(
                f"No unstarted game for {code} in week {week}."
            )

        # Checked up front for a clear error; the (user, week) constraint still guards races
        if self.store.pick_for_user_week(user_id, week) is not None:
            raise DuplicatePickError(f"Pick already submitted for week {week}")

        pick = self.store.create_pick(user_id, week, team.id, game.id)
        logger.info(
            "pick_submitted",
            user_id=user_id,
            week=week,
            team=code,
            game_id=game.id,
        )
        return pick

    def pick_history(self, user_id: int | str) -> list[PickDetail]:
        user_id = parse_identifier(user_id, "user_id")
        return sorted(self.store.pick_details(user_id), key=lambda p: (p.week, p.id))

    def available_teams(
        self,
        user_id: int | str,
        phase: Phase | str | None = None,
        week: int | str | None = None,
        ignore_lock: bool = False,
    ) -> AvailableTeams:
        """Team codes the user may still pick for the resolved (phase, week).

        Excludes every team the user has picked in any week and, unless
        ignore_lock is set, teams whose game that week has already started.
        """
        user_id = parse_identifier(user_id, "user_id")
        explicit_week = parse_identifier(week, "week") if week is not None else None

        if phase:
            resolved_phase = parse_phase(phase)
            resolved_week = explicit_week or self.resolver.resolve_for(resolved_phase)
        else:
            resolved_phase, auto_week = self.resolver.resolve_current()
            resolved_week = explicit_week or auto_week

        excluded = set(self.store.picked_team_ids(user_id))
        if not ignore_lock:
            excluded |= self.store.started_team_ids(resolved_phase, resolved_week, self.clock())

        codes = sorted(
            team.code
            for team in self.store.list_teams()
            if team.code and team.id not in excluded
        )
        return AvailableTeams(phase=resolved_phase, week=resolved_week, available_teams=codes)

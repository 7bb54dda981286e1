"""PhaseWeekResolver: infer the active (phase, week) from stored games.

Nothing stores a "current week"; it is re-derived from the schedule on every
call so it follows ingestion automatically.

Priority (first match wins):
1. For each phase in preference order (reg, pre, post), the week of its
   earliest game starting strictly in the future.
2. Otherwise, in the same order, the highest week recorded for the phase.
3. With no games at all, (reg, 1).
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from ..db.pool import PHASE_PREFERENCE, Phase
from ..logging import logger
from ..persistence import GameStore
from ..utils.datetime_utils import now_utc

DEFAULT_PHASE = Phase.reg
DEFAULT_WEEK = 1


class PhaseWeekResolver:
    """Resolves "current" weeks. Store read failures propagate unchanged."""

    def __init__(
        self,
        store: GameStore,
        clock: Callable[[], datetime] = now_utc,
        preference: tuple[Phase, ...] = PHASE_PREFERENCE,
    ) -> None:
        self.store = store
        self.clock = clock
        self.preference = preference

    def resolve_current(self) -> tuple[Phase, int]:
        now = self.clock()

        for phase in self.preference:
            game = self.store.earliest_future_game(phase, now)
            if game is not None:
                logger.debug("phase_week_resolved", phase=phase.value, week=game.week, rule="next_kickoff")
                return phase, game.week

        for phase in self.preference:
            week = self.store.max_week(phase)
            if week is not None:
                logger.debug("phase_week_resolved", phase=phase.value, week=week, rule="max_week")
                return phase, week

        logger.debug("phase_week_resolved", phase=DEFAULT_PHASE.value, week=DEFAULT_WEEK, rule="default")
        return DEFAULT_PHASE, DEFAULT_WEEK

    def resolve_for(self, phase: Phase) -> int:
        game = self.store.earliest_future_game(phase, self.clock())
        if game is not None:
            return game.week
        week = self.store.max_week(phase)
        return week if week is not None else DEFAULT_WEEK

    def resolve_settle_week(self) -> tuple[Phase, int] | None:
        """Week before the current one in the same phase, or None in week 1."""
        phase, week = self.resolve_current()
        if week <= 1:
            return None
        return phase, week - 1

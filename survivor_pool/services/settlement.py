"""SettlementEngine: turn final scores into pick outcomes for one (phase, week).

A game is final when both scores are present; the status label is ignored.
Only picks still pending (or NULL) are read and updated, so settling a week
twice changes nothing the second time.

The three outcome buckets are written as three separate bulk updates. They
share the caller's session, so they commit together when the caller wraps
the call in one transaction (jobs and scripts do). A store that commits each
update on its own can leave a week partially settled after a mid-sequence
failure; re-running settlement finishes the remaining pending picks.
"""

from __future__ import annotations

from typing import Iterable

from ..db.pool import Phase, PickStatus
from ..logging import logger
from ..models import GameOutcome, GameRecord, PickRecord, SettlementResult
from ..persistence import GameStore
from ..utils.datetime_utils import season_window
from ..utils.parsing import parse_phase


def game_outcome(game: GameRecord) -> GameOutcome:
    """Winner by score; equal scores are a push with no winner."""
    if game.home_score > game.away_score:
        return GameOutcome(game_id=game.id, winner_team_id=game.home_team_id)
    if game.away_score > game.home_score:
        return GameOutcome(game_id=game.id, winner_team_id=game.away_team_id)
    return GameOutcome(game_id=game.id, tie=True)


def classify_pick(pick: PickRecord, outcome: GameOutcome) -> PickStatus:
    if outcome.tie:
        return PickStatus.push
    if outcome.winner_team_id is not None and pick.team_id == outcome.winner_team_id:
        return PickStatus.win
    return PickStatus.loss


def bucket_picks(
    picks: Iterable[PickRecord], outcomes: dict[int, GameOutcome]
) -> dict[PickStatus, list[int]]:
    buckets: dict[PickStatus, list[int]] = {
        PickStatus.win: [],
        PickStatus.loss: [],
        PickStatus.push: [],
    }
    for pick in picks:
        outcome = outcomes.get(pick.game_id)
        if outcome is None:
            continue
        buckets[classify_pick(pick, outcome)].append(pick.id)
    return buckets


class SettlementEngine:
    def __init__(self, store: GameStore) -> None:
        self.store = store

    def settle(self, season: int, phase: Phase | str, week: int) -> int:
        """Settle one (phase, week) and return the number of picks updated."""
        return self.settle_week(season, phase, week).updated

    def settle_week(self, season: int, phase: Phase | str, week: int) -> SettlementResult:
        phase = parse_phase(phase)
        label = f"{phase.value.upper()}{week}"
        result = SettlementResult(season=season, phase=phase, week=week)
        logger.info("settle_started", season=season, week_label=label)

        start, end = season_window(season)
        finals = [
            game
            for game in self.store.final_games(phase, week, start, end)
            if game.is_final
        ]
        if not finals:
            logger.info("settle_no_final_games", season=season, week_label=label)
            return result
        result.final_games = len(finals)

        outcomes = {game.id: game_outcome(game) for game in finals}
        picks = self.store.pending_picks_for_games(outcomes.keys())
        if not picks:
            logger.info("settle_no_pending_picks", season=season, week_label=label, final_games=len(finals))
            return result

        buckets = bucket_picks(picks, outcomes)
        result.wins = self.store.update_pick_status(
            buckets[PickStatus.win], PickStatus.win.value
        )
        result.losses = self.store.update_pick_status(
            buckets[PickStatus.loss], PickStatus.loss.value
        )
        result.pushes = self.store.update_pick_status(
            buckets[PickStatus.push], PickStatus.push.value
        )

        logger.info(
            "settle_completed",
            season=season,
            week_label=label,
            final_games=result.final_games,
            wins=result.wins,
            losses=result.losses,
            pushes=result.pushes,
        )
        return result

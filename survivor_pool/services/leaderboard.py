"""LeaderboardAggregator: partition users into still-in and eliminated.

House rule: a user is eliminated once ANY of their picks is a win. This is
the reverse of the usual last-team-standing convention and is kept as is
pending a product decision.

Recomputed from the store on every call; no caching, no pagination.
"""

from __future__ import annotations

from collections import defaultdict

from ..db.pool import PickStatus
from ..models import Leaderboard, LeaderboardPick, LeaderboardRow, PickDetail
from ..persistence import GameStore

UNNAMED_USER = "—"


def is_eliminated(picks: list[LeaderboardPick]) -> bool:
    return any(pick.status == PickStatus.win.value for pick in picks)


def _history(details: list[PickDetail]) -> list[LeaderboardPick]:
    ordered = sorted(details, key=lambda detail: (detail.week, detail.id))
    return [
        LeaderboardPick(
            week=detail.week,
            team_code=detail.team_code,
            status=(detail.status or PickStatus.pending.value).lower(),
            starts_at=detail.starts_at,
        )
        for detail in ordered
    ]


class LeaderboardAggregator:
    def __init__(self, store: GameStore) -> None:
        self.store = store

    def compute_leaderboard(self) -> Leaderboard:
        users = self.store.users_ordered_by_name()
        by_user: dict[int, list[PickDetail]] = defaultdict(list)
        for detail in self.store.pick_details():
            by_user[detail.user_id].append(detail)

        board = Leaderboard()
        for user in users:
            picks = _history(by_user.get(user.id, []))
            eliminated = is_eliminated(picks)
            row = LeaderboardRow(
                id=user.id,
                name=user.name or UNNAMED_USER,
                eliminated=eliminated,
                picks=picks,
            )
            if eliminated:
                board.eliminated.append(row)
            else:
                board.still_in.append(row)
        return board

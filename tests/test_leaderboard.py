"""Tests for LeaderboardAggregator."""

from __future__ import annotations

from survivor_pool.models import LeaderboardPick
from survivor_pool.services.leaderboard import UNNAMED_USER, LeaderboardAggregator, is_eliminated


def _ids(rows):
    return [row.id for row in rows]


class TestEliminationRule:
    def test_any_win_eliminates(self):
        picks = [LeaderboardPick(week=1, status="loss"), LeaderboardPick(week=2, status="win")]
        assert is_eliminated(picks) is True

    def test_losses_and_pushes_keep_user_in(self):
        picks = [LeaderboardPick(week=1, status="loss"), LeaderboardPick(week=2, status="push")]
        assert is_eliminated(picks) is False

    def test_loss_then_pending_keeps_user_in(self):
        picks = [LeaderboardPick(week=1, status="loss"), LeaderboardPick(week=2, status="pending")]
        assert is_eliminated(picks) is False

    def test_no_picks(self):
        assert is_eliminated([]) is False


class TestComputeLeaderboard:
    def test_partitions_every_user_once(self, seeded_store):
        seeded_store.add_pick(1, 1, 5, 1, 10, status="win")
        seeded_store.add_pick(2, 2, 5, 2, 10, status="loss")

        board = LeaderboardAggregator(seeded_store).compute_leaderboard()

        assert _ids(board.eliminated) == [1]
        assert sorted(_ids(board.still_in)) == [2, 3]
        assert sorted(_ids(board.still_in) + _ids(board.eliminated)) == [1, 2, 3]

    def test_users_ordered_by_name(self, seeded_store):
        seeded_store.add_user(4, "aaron")
        board = LeaderboardAggregator(seeded_store).compute_leaderboard()
        assert _ids(board.still_in) == [4, 1, 2, 3]

    def test_history_sorted_by_week_with_pending_default(self, seeded_store):
        seeded_store.add_pick(5, 2, 6, 4, 21, status=None)
        seeded_store.add_pick(6, 2, 5, 3, 11, status="push")

        board = LeaderboardAggregator(seeded_store).compute_leaderboard()
        bob = next(row for row in board.still_in if row.id == 2)

        assert [pick.week for pick in bob.picks] == [5, 6]
        assert [pick.status for pick in bob.picks] == ["push", "pending"]
        assert [pick.team_code for pick in bob.picks] == ["DAL", "PHI"]
        assert bob.picks[1].starts_at == seeded_store.games[21].start_time

    def test_unnamed_user_placeholder(self, seeded_store):
        board = LeaderboardAggregator(seeded_store).compute_leaderboard()
        unnamed = next(row for row in board.still_in if row.id == 3)
        assert unnamed.name == UNNAMED_USER

    def test_payload_uses_still_in_alias(self, seeded_store):
        seeded_store.add_pick(1, 1, 5, 1, 10, status="win")
        payload = LeaderboardAggregator(seeded_store).compute_leaderboard().as_payload()

        assert set(payload) == {"stillIn", "eliminated"}
        row = payload["eliminated"][0]
        assert row["eliminated"] is True
        assert row["picks"][0]["team_code"] == "KC"
        assert row["picks"][0]["status"] == "win"

    def test_empty_store(self, store):
        board = LeaderboardAggregator(store).compute_leaderboard()
        assert board.still_in == []
        assert board.eliminated == []

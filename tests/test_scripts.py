"""Tests for the operator scripts."""

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from survivor_pool.db.pool import Phase
from survivor_pool.errors import UpstreamFetchError
from survivor_pool.models import SettlementResult, SyncResult

SCRIPTS_DIR = Path(__file__).resolve().parents[1] / "scripts"


def _load(name):
    spec = importlib.util.spec_from_file_location(name, SCRIPTS_DIR / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestSyncGamesScript:
    def test_syncs_label(self, capsys):
        module = _load("sync_games")
        result = SyncResult(season=2025, phase=Phase.reg, week=3, fetched=10, in_week=2, upserted=2)
        with patch.object(module, "run_sync", return_value=result) as run_sync, \
                patch.object(sys, "argv", ["sync_games.py", "2025", "reg3"]):
            assert module.main() == 0

        run_sync.assert_called_once_with(2025, Phase.reg, 3)
        assert "upserted=2" in capsys.readouterr().out

    def test_bad_label_exits_nonzero(self):
        module = _load("sync_games")
        with patch.object(module, "run_sync") as run_sync, \
                patch.object(sys, "argv", ["sync_games.py", "2025", "WEEK3"]):
            assert module.main() == 1
        run_sync.assert_not_called()

    def test_provider_failure_exits_nonzero(self):
        module = _load("sync_games")
        with patch.object(module, "run_sync", side_effect=UpstreamFetchError(500)), \
                patch.object(sys, "argv", ["sync_games.py", "2025", "REG3"]):
            assert module.main() == 1


class TestSettlePicksScript:
    @pytest.mark.parametrize(
        "argv,expected",
        [
            (["2025", "REG4"], (Phase.reg, 4)),
            (["2025", "4"], (Phase.reg, 4)),
            (["2025", "2", "post"], (Phase.post, 2)),
        ],
    )
    def test_week_arguments(self, argv, expected):
        module = _load("settle_picks")
        phase, week = expected
        result = SettlementResult(season=2025, phase=phase, week=week, final_games=1, wins=1)
        with patch.object(module, "run_settlement", return_value=result) as run_settlement, \
                patch.object(sys, "argv", ["settle_picks.py", *argv]):
            assert module.main() == 0

        run_settlement.assert_called_once_with(2025, phase, week)

    def test_locked(self, capsys):
        module = _load("settle_picks")
        with patch.object(module, "run_settlement", return_value=None), \
                patch.object(sys, "argv", ["settle_picks.py", "2025", "REG4"]):
            assert module.main() == 0
        assert "skipped" in capsys.readouterr().out

    def test_non_ascii_digit_week_exits_nonzero(self):
        module = _load("settle_picks")
        with patch.object(module, "run_settlement") as run_settlement, \
                patch.object(sys, "argv", ["settle_picks.py", "2025", "²"]):
            assert module.main() == 1
        run_settlement.assert_not_called()

#!/usr/bin/env python3
"""Settle pending picks for one week from final scores.

Only pending picks are touched, so running it twice is harmless.

Usage:
    python scripts/settle_picks.py 2025 REG3
    python scripts/settle_picks.py 2025 3          # regular season week 3
    python scripts/settle_picks.py 2025 2 post
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

repo_dir = Path(__file__).resolve().parent.parent
if str(repo_dir) not in sys.path:
    sys.path.insert(0, str(repo_dir))

os.environ.setdefault("POOL_ROLE", "script")

from survivor_pool.errors import SurvivorPoolError
from survivor_pool.jobs.runs import run_settlement
from survivor_pool.logging import logger
from survivor_pool.utils.parsing import format_week_label, parse_season, parse_week_argument


def settle_picks(season: str, week: str, phase: str | None = None) -> int:
    season_value = parse_season(season)
    resolved_phase, resolved_week = parse_week_argument(week, phase)
    label = format_week_label(resolved_phase, resolved_week)

    result = run_settlement(season_value, resolved_phase, resolved_week)
    if result is None:
        print(f"{label} {season_value}: settlement already running, skipped")
        return 0
    print(
        f"{label} {season_value}: final_games={result.final_games} "
        f"wins={result.wins} losses={result.losses} pushes={result.pushes}"
    )
    return result.updated


def main() -> int:
    parser = argparse.ArgumentParser(description="Settle pending picks for one week")
    parser.add_argument("season", help="Season year, e.g. 2025")
    parser.add_argument("week", help="Week label (REG3) or week number (3)")
    parser.add_argument(
        "phase",
        nargs="?",
        choices=["pre", "reg", "post"],
        help="Phase for a bare week number (default: reg)",
    )
    args = parser.parse_args()

    try:
        settle_picks(args.season, args.week, args.phase)
    except SurvivorPoolError as exc:
        logger.error("settle_picks_failed", season=args.season, week=args.week, error=str(exc))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

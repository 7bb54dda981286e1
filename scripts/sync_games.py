#!/usr/bin/env python3
"""Sync one week of provider results into the games table.

Fetches the whole season from the provider, keeps the requested week and
upserts it keyed on (source, provider game id). Safe to re-run.

Usage:
    python scripts/sync_games.py 2025 REG3
    python scripts/sync_games.py 2025 PRE1
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

# Make the package importable when run from a checkout
repo_dir = Path(__file__).resolve().parent.parent
if str(repo_dir) not in sys.path:
    sys.path.insert(0, str(repo_dir))

os.environ.setdefault("POOL_ROLE", "script")

from survivor_pool.errors import SurvivorPoolError
from survivor_pool.jobs.runs import run_sync
from survivor_pool.logging import logger
from survivor_pool.utils.parsing import format_week_label, parse_season, parse_week_label


def sync_games(season: str, label: str) -> int:
    """Sync one (phase, week) and return the number of games upserted."""
    season_value = parse_season(season)
    phase, week = parse_week_label(label)
    result = run_sync(season_value, phase, week)
    for miss in result.misses:
        print(
            f"skipped {miss.provider_id or '?'}: "
            f"{miss.home_name or '?'} vs {miss.away_name or '?'} ({miss.reason})"
        )
    print(
        f"{format_week_label(phase, week)} {season_value}: "
        f"fetched={result.fetched} in_week={result.in_week} "
        f"upserted={result.upserted} skipped={result.skipped}"
    )
    return result.upserted


def main() -> int:
    parser = argparse.ArgumentParser(description="Sync one week of games from the score provider")
    parser.add_argument("season", help="Season year, e.g. 2025")
    parser.add_argument("label", help="Week label: PRE1, REG3, POST1 ...")
    args = parser.parse_args()

    try:
        sync_games(args.season, args.label)
    except SurvivorPoolError as exc:
        logger.error("sync_games_failed", season=args.season, label=args.label, error=str(exc))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

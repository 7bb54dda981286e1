"""Game persistence helpers."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy.dialects.postgresql import Insert, insert

from ..db import db_models
from ..models import GameUpsert
from ..utils.datetime_utils import now_utc

NATURAL_KEY_CONSTRAINT = "uq_games_source_provider_id"

# Columns overwritten when a provider event is seen again
_MUTABLE_COLUMNS = (
    "season",
    "phase",
    "week",
    "start_time",
    "home_team_id",
    "away_team_id",
    "home_score",
    "away_score",
    "status",
)


def dedupe_by_natural_key(rows: Sequence[GameUpsert]) -> list[GameUpsert]:
    """Keep the last row per (source, provider_game_id), preserving first-seen order.

    PostgreSQL refuses an ON CONFLICT statement that touches the same row twice.
    """
    latest: dict[tuple[str, str], GameUpsert] = {}
    for row in rows:
        latest[(row.source, row.provider_game_id)] = row
    return list(latest.values())


def build_game_upsert(rows: Sequence[GameUpsert]) -> Insert:
    """Batch INSERT ... ON CONFLICT (source, provider_game_id) DO UPDATE."""
    base_stmt = insert(db_models.Game).values([row.as_row() for row in rows])
    excluded = base_stmt.excluded
    conflict_updates = {column: getattr(excluded, column) for column in _MUTABLE_COLUMNS}
    conflict_updates["updated_at"] = now_utc()
    return base_stmt.on_conflict_do_update(
        constraint=NATURAL_KEY_CONSTRAINT,
        set_=conflict_updates,
    )

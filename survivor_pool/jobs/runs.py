"""Session-scoped sync and settlement runs shared by tasks and scripts.

Each run opens its own transaction with get_session(), so a failure rolls
back everything the run wrote.
"""

from __future__ import annotations

from ..config import settings
from ..db import get_session
from ..db.pool import Phase
from ..logging import logger
from ..models import SettlementResult, SyncResult
from ..persistence import SqlGameStore
from ..provider import ProviderClient
from ..services import PhaseWeekResolver, ResultIngester, SettlementEngine
from ..utils.parsing import format_week_label, parse_phase
from ..utils.redis_lock import acquire_redis_lock, release_redis_lock, settle_lock_name


def resolve_current_week() -> tuple[Phase, int]:
    with get_session() as session:
        return PhaseWeekResolver(SqlGameStore(session)).resolve_current()


def resolve_settle_week() -> tuple[Phase, int] | None:
    with get_session() as session:
        return PhaseWeekResolver(SqlGameStore(session)).resolve_settle_week()


def run_sync(
    season: int,
    phase: Phase | str,
    week: int,
    provider: ProviderClient | None = None,
) -> SyncResult:
    """Sync one (phase, week). A provider passed in is left open for the caller."""
    owns_provider = provider is None
    provider = provider or ProviderClient()
    try:
        with get_session() as session:
            ingester = ResultIngester(SqlGameStore(session), provider)
            return ingester.sync_week(season, phase, week)
    finally:
        if owns_provider:
            provider.close()


def run_settlement(season: int, phase: Phase | str, week: int) -> SettlementResult | None:
    """Settle one (phase, week) under its redis lock.

    Returns None when another run holds the lock for the same key.
    """
    phase = parse_phase(phase)
    lock_name = settle_lock_name(phase.value, week)
    timeout = settings.schedule_config.settle_lock_timeout_seconds
    if not acquire_redis_lock(lock_name, timeout=timeout):
        logger.warning(
            "settle_skipped_locked",
            season=season,
            week_label=format_week_label(phase, week),
        )
        return None
    try:
        with get_session() as session:
            return SettlementEngine(SqlGameStore(session)).settle_week(season, phase, week)
    finally:
        release_redis_lock(lock_name)

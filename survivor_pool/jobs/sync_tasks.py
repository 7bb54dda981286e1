"""Celery tasks that pull scores from the provider."""

from __future__ import annotations

from celery import shared_task

from ..config import settings
from ..logging import logger
from ..provider import ProviderClient
from ..utils.datetime_utils import current_season
from ..utils.parsing import format_week_label
from .runs import resolve_current_week, run_sync


@shared_task(name="sync_week")
def sync_week_task(season: int, phase: str, week: int) -> dict:
    """Sync one explicit (phase, week)."""
    result = run_sync(season, phase, week)
    return result.model_dump(mode="json", exclude={"misses"}) | {"skipped": result.skipped}


@shared_task(
    name="sync_current_week",
    autoretry_for=(Exception,),
    retry_backoff=True,
    retry_kwargs={"max_retries": 2},
)
def sync_current_week(season: int | None = None) -> dict:
    """Sync the current week and, from week 2 on, the week before it.

    The previous week is re-synced to pick up late score corrections. The
    provider client is built first so a missing API key fails before any
    database read.
    """
    season = season or current_season()
    provider = ProviderClient()
    try:
        phase, week = resolve_current_week()

        weeks = [week]
        if week > 1 and settings.schedule_config.sync_previous_week:
            weeks.append(week - 1)

        results: dict[str, int] = {}
        for target_week in weeks:
            result = run_sync(season, phase, target_week, provider=provider)
            results[format_week_label(phase, target_week)] = result.upserted
    finally:
        provider.close()

    logger.info("sync_current_week_complete", season=season, upserted=results)
    return {"season": season, "upserted": results}

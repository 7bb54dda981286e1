"""Celery tasks that settle pending picks."""

from __future__ import annotations

from celery import shared_task

from ..logging import logger
from ..utils.datetime_utils import current_season
from .runs import resolve_settle_week, run_settlement


def _summary(result) -> dict:
    if result is None:
        return {"skipped": True, "reason": "locked"}
    return result.model_dump(mode="json") | {"updated": result.updated}


@shared_task(name="settle_week")
def settle_week_task(season: int, phase: str, week: int) -> dict:
    """Settle one explicit (phase, week)."""
    return _summary(run_settlement(season, phase, week))


@shared_task(
    name="settle_previous_week",
    autoretry_for=(Exception,),
    retry_backoff=True,
    retry_kwargs={"max_retries": 2},
)
def settle_previous_week(season: int | None = None) -> dict:
    """Settle the week before the current one within the same phase."""
    season = season or current_season()
    target = resolve_settle_week()
    if target is None:
        logger.info("settle_previous_week_nothing_to_do", season=season)
        return {"skipped": True, "reason": "first_week"}
    phase, week = target
    return _summary(run_settlement(season, phase, week))

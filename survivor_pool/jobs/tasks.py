"""Celery tasks re-exported for discovery."""

from __future__ import annotations

from .settle_tasks import settle_previous_week, settle_week_task
from .sync_tasks import sync_current_week, sync_week_task

__all__ = [
    "settle_previous_week",
    "settle_week_task",
    "sync_current_week",
    "sync_week_task",
]

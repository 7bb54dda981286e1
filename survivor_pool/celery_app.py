"""Celery app configuration for the survivor pool worker."""

from __future__ import annotations

from celery import Celery, signals
from celery.schedules import crontab

from .config import settings
from .db import dispose_engine
from .logging import logger

QUEUE = "survivor-pool"

celery_config = {
    "task_serializer": "json",
    "accept_content": ["json"],
    "result_serializer": "json",
    "timezone": "UTC",
    "enable_utc": True,
    "task_track_started": True,
    "worker_prefetch_multiplier": 1,
    "task_time_limit": 900,
    "task_soft_time_limit": 840,
    "task_default_queue": QUEUE,
}

app = Celery(
    "survivor-pool",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["survivor_pool.jobs.tasks"],
)
app.conf.update(**celery_config)
app.conf.task_routes = {
    "sync_current_week": {"queue": QUEUE, "routing_key": QUEUE},
    "sync_week": {"queue": QUEUE, "routing_key": QUEUE},
    "settle_previous_week": {"queue": QUEUE, "routing_key": QUEUE},
    "settle_week": {"queue": QUEUE, "routing_key": QUEUE},
}

_schedule = settings.schedule_config

# Sync keeps scores fresh through game days; settlement runs once an hour
# and only touches picks that are still pending.
app.conf.beat_schedule = {
    "sync-current-week": {
        "task": "sync_current_week",
        "schedule": crontab(minute=f"*/{_schedule.sync_interval_minutes}"),
        "options": {"queue": QUEUE, "routing_key": QUEUE},
    },
    "settle-previous-week-hourly": {
        "task": "settle_previous_week",
        "schedule": crontab(minute=_schedule.settle_hour_minute),
        "options": {"queue": QUEUE, "routing_key": QUEUE},
    },
}


@signals.worker_ready.connect
def on_worker_ready(sender=None, **kwargs):
    worker_name = getattr(sender, "hostname", None) or (str(sender) if sender else "unknown")
    logger.info("celery_worker_ready", worker=worker_name)


@signals.worker_shutting_down.connect
def on_worker_shutting_down(sender=None, **kwargs):
    # sender for this signal is the hostname string
    logger.info("celery_worker_shutting_down", worker=str(sender) if sender else "unknown")
    dispose_engine()

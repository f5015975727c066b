"""
Celery configuration for async score calculation.
"""

from celery import Celery

from tournament_scoring.core.config import (
    REDIS_URL, TASK_TIME_LIMIT, TASK_SOFT_TIME_LIMIT, TASK_RESULT_EXPIRES
)

# Create Celery app
celery_app = Celery(
    "tournament_scoring",
    broker=REDIS_URL,
    backend=REDIS_URL,
    include=["tournament_scoring.tasks.scoring_tasks"]
)

# Celery configuration
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=TASK_TIME_LIMIT,
    task_soft_time_limit=TASK_SOFT_TIME_LIMIT,
    result_expires=TASK_RESULT_EXPIRES,
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=50,
)

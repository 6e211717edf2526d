"""Celery worker configuration."""

from celery import Celery

from video_critic.config import settings
from video_critic.logging import setup_logging

# Setup logging before anything else
setup_logging()

# Create Celery app
celery_app = Celery(
    "video_critic",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
)

# Celery configuration
celery_app.conf.update(
    # Task settings
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    # Task execution
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    task_time_limit=300,  # 5 minutes max
    task_soft_time_limit=240,
    # Worker settings (bounds concurrent pipelines per worker)
    worker_hijack_root_logger=False,
    worker_prefetch_multiplier=1,
    worker_concurrency=4,
    # Result backend
    result_expires=86400,  # 24 hours
    # Task routing
    task_routes={
        "analysis.run_pipeline": {"queue": "analysis"},
    },
)

# Auto-discover tasks
celery_app.autodiscover_tasks(["video_critic.jobs"])

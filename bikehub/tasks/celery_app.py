import os
from datetime import timedelta

from celery import Celery

from bikehub.core.config import settings

broker_url = os.getenv("CELERY_BROKER_URL", "redis://redis:6379/0")
result_backend = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/1")

celery_app = Celery(
    "bikehub",
    broker=broker_url,
    backend=result_backend,
    include=["bikehub.tasks.reminders"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    beat_schedule={
        "remind-upcoming-test-rides": {
            "task": "bookings.remind_upcoming_test_rides",
            "schedule": timedelta(minutes=settings.celery_reminder_interval_minutes),
        },
    },
)

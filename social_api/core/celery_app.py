"""Celery application for background tasks (email notifications)."""
from celery import Celery

from social_api.core.config import Settings, settings

SEND_EMAIL_TASK = "social_api.workers.email.send_email"


def build_celery_app(settings: Settings) -> Celery:
    app = Celery(
        "social_api",
        broker=settings.CELERY_BROKER_URL,
        include=["social_api.workers.email"],
    )
    app.conf.update(
        task_serializer="json",
        accept_content=["json"],
        result_serializer="json",
        timezone="UTC",
        enable_utc=True,
        task_ignore_result=True,
    )
    return app


# Worker entry point: celery -A social_api.core.celery_app worker
celery_app = build_celery_app(settings)

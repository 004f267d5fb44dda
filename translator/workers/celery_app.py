"""
Celery application configuration.

Runs the periodic retention purge of the translation cache.
"""

from celery import Celery
from celery.schedules import crontab
from celery.signals import setup_logging

from translator.core.config import settings
from translator.core.logging import configure_logging, get_logger

logger = get_logger(__name__)


# =============================================================================
# Celery Application
# =============================================================================

celery_app = Celery(
    "translator",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=["translator.workers.tasks"],
)


# =============================================================================
# Beat Schedule
# =============================================================================

beat_schedule = {}
if settings.retention_enabled:
    beat_schedule["purge-stale-translations"] = {
        "task": "translator.workers.tasks.purge_stale_translations",
        "schedule": crontab(hour=3, minute=0),  # Daily at 03:00 UTC
    }


# =============================================================================
# Celery Configuration
# =============================================================================

celery_app.conf.update(
    # Task execution
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,

    # Task retry behavior
    task_acks_late=True,
    task_reject_on_worker_lost=True,

    # Result backend
    result_expires=86400,  # 24 hours

    # Broker connection
    broker_connection_retry_on_startup=True,

    beat_schedule=beat_schedule,
)


# =============================================================================
# Logging Configuration
# =============================================================================

@setup_logging.connect
def setup_celery_logging(**kwargs):
    """
    Configure logging for Celery.

    This overrides Celery's default logging configuration to use our
    structured logging setup.
    """
    configure_logging()
    logger.info("Celery logging configured")

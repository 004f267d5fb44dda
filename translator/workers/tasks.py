"""
Celery tasks.
"""

from translator.core.config import settings
from translator.core.logging import get_logger
from translator.services.history_store import HistoryStore
from translator.workers.celery_app import celery_app

logger = get_logger(__name__)


@celery_app.task(name="translator.workers.tasks.purge_stale_translations")
def purge_stale_translations(max_age_days: int | None = None) -> dict:
    """
    Delete single-use cache entries older than the retention window.

    Args:
        max_age_days: Override for ``settings.retention_days``

    Returns:
        dict: Purge results
    """
    days = max_age_days or settings.retention_days
    logger.info(f"Starting retention purge (max_age_days={days})")

    store = HistoryStore(settings.database_url)
    store.initialize()
    try:
        deleted = store.purge_stale(days)
    finally:
        store.close()

    return {"status": "success", "deleted_count": deleted, "max_age_days": days}

"""
Health check endpoint.
"""

import asyncio
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, status
from redis import asyncio as aioredis

from translator import __version__
from translator.api.deps import get_store
from translator.core.config import settings
from translator.core.logging import get_logger
from translator.schemas.health import HealthResponse
from translator.services.history_store import HistoryStore

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Health"])


async def _redis_health_check() -> bool:
    redis = None
    try:
        redis = aioredis.from_url(settings.redis_url)
        await redis.ping()
        return True
    except Exception as exc:
        logger.error(f"Redis health check failed: {exc}")
        return False
    finally:
        if redis:
            try:
                await redis.aclose()
            except Exception as close_exc:
                logger.debug(f"Failed to close Redis client: {close_exc}")


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
)
async def health_check(store: HistoryStore = Depends(get_store)) -> HealthResponse:
    """
    Report database and Redis status.

    The database is required for caching; Redis only backs the retention
    worker, so losing it degrades rather than downs the service.
    """
    db_status = "ok" if await asyncio.to_thread(store.ping) else "down"
    redis_status = "ok" if await _redis_health_check() else "down"

    services = {
        "database": db_status,
        "redis": redis_status,
    }

    if all(s == "ok" for s in services.values()):
        overall_status = "ok"
    elif db_status == "down":
        overall_status = "down"
    else:
        overall_status = "degraded"

    return HealthResponse(
        status=overall_status,
        timestamp=datetime.now(UTC).isoformat(),
        services=services,
        version=__version__,
    )

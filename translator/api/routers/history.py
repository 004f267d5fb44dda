"""
Translation history administration endpoints.

Statistics, per-user history, privacy deletion and manual retention purges.
All endpoints require the admin API key.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from translator.api.deps import get_store, require_admin_key
from translator.core.logging import get_logger
from translator.schemas.history import (
    DeleteUserDataResult,
    GlobalStats,
    PurgeResult,
    UserHistoryItem,
    UserStats,
)
from translator.services.history_store import HistoryStore

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/history",
    tags=["History"],
    dependencies=[Depends(require_admin_key)],
)


@router.get(
    "/stats",
    response_model=GlobalStats,
    summary="Get translation cache statistics",
)
def get_global_stats(store: HistoryStore = Depends(get_store)):
    try:
        return store.global_stats()
    except Exception as e:
        logger.error(f"Failed to get cache stats: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get translation statistics",
        )


@router.get(
    "/users/{user_id}/stats",
    response_model=UserStats,
    summary="Get statistics for one user",
)
def get_user_stats(user_id: str, store: HistoryStore = Depends(get_store)):
    try:
        return store.user_stats(user_id)
    except Exception as e:
        logger.error(f"Failed to get stats for user {user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get user statistics",
        )


@router.get(
    "/users/{user_id}/translations",
    response_model=list[UserHistoryItem],
    summary="Get a user's translation history",
)
def get_user_history(
    user_id: str,
    limit: int = Query(default=50, ge=1, le=200, description="Number of entries to return"),
    store: HistoryStore = Depends(get_store),
):
    try:
        return store.user_history(user_id, limit=limit)
    except Exception as e:
        logger.error(f"Failed to get history for user {user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get user history",
        )


@router.delete(
    "/users/{user_id}",
    response_model=DeleteUserDataResult,
    summary="Delete all data held about a user",
)
def delete_user_data(user_id: str, store: HistoryStore = Depends(get_store)):
    """
    Remove the user's profile and usage links.

    Cached translations stay, since other users may share them.
    """
    try:
        return store.delete_user_data(user_id)
    except Exception as e:
        logger.error(f"Failed to delete data for user {user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete user data",
        )


@router.delete(
    "/stale",
    response_model=PurgeResult,
    summary="Purge old single-use cache entries",
)
def purge_stale_entries(
    days: int = Query(default=90, ge=1, description="Minimum entry age in days"),
    store: HistoryStore = Depends(get_store),
):
    try:
        deleted_count = store.purge_stale(days)
    except Exception as e:
        logger.error(f"Failed to purge stale entries: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to purge stale entries",
        )
    return PurgeResult(deleted_count=deleted_count, max_age_days=days)

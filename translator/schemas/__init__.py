"""
Pydantic schemas for API request/response validation.
"""

from translator.schemas.health import HealthResponse
from translator.schemas.history import (
    AttributionResult,
    CacheEntryRecord,
    DeleteUserDataResult,
    GlobalStats,
    PurgeResult,
    UserHistoryItem,
    UserStats,
)
from translator.schemas.translation import ModelTranslation, TranslationResult

__all__ = [
    "HealthResponse",
    "AttributionResult",
    "CacheEntryRecord",
    "DeleteUserDataResult",
    "GlobalStats",
    "PurgeResult",
    "UserHistoryItem",
    "UserStats",
    "ModelTranslation",
    "TranslationResult",
]

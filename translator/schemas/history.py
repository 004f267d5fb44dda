"""
Pydantic schemas for translation history and statistics.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CacheEntryRecord(BaseModel):
    """Snapshot of a translation cache row."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    original_message: str
    fingerprint: str
    target_language: str
    detected_language: str | None = None
    translated_message: str
    created_at: datetime
    updated_at: datetime
    use_count: int
    created: bool = Field(default=False, description="True when the row was inserted by this call")


class UserHistoryItem(CacheEntryRecord):
    """Cache row attributed to a user, with the attribution time."""

    linked_at: datetime


class AttributionResult(BaseModel):
    user_id: str
    cache_entry_id: int
    link_created: bool


class DeleteUserDataResult(BaseModel):
    links_deleted: int = Field(description="Number of usage links removed")
    user_deleted: bool = Field(description="Whether a user profile existed and was removed")


class GlobalStats(BaseModel):
    total_translations: int = Field(description="Total cache rows")
    unique_messages: int = Field(description="Distinct message fingerprints")
    languages_used: int = Field(description="Distinct target languages")


class UserStats(BaseModel):
    total_translations: int = Field(description="Usage links for the user")
    unique_messages: int = Field(description="Distinct fingerprints the user translated")
    languages_used: int = Field(description="Distinct target languages the user requested")
    oldest_translation: datetime | None = None
    newest_translation: datetime | None = None


class PurgeResult(BaseModel):
    deleted_count: int
    max_age_days: int

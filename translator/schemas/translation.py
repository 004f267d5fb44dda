"""
Translation result schemas.
"""

from pydantic import BaseModel, Field


class ModelTranslation(BaseModel):
    """Normalized reply from the translation model."""

    original: str = Field(description="Original text as echoed by the model")
    translated: str = Field(description="Translated text")
    detected_language: str = Field(description="Source language detected by the model")


class TranslationResult(BaseModel):
    """Outcome of one translate request."""

    original_message: str = Field(description="Message as first submitted for this cache key")
    translated_message: str = Field(description="Translated message")
    detected_language: str = Field(description="Detected source language, or 'unknown'")
    from_cache: bool = Field(description="Whether the translation came from the cache")
    cache_entry_id: int | None = Field(
        default=None, description="Cache row backing this result (None if it could not be stored)"
    )
    use_count: int | None = Field(default=None, description="Cache row use count after this request")

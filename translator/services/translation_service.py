"""
Translation Service

Cache-first translation: look the message up by fingerprint and target
language, call the model only on a miss, then store the result and attribute it
to the requesting user.
"""

import asyncio

from sqlalchemy.exc import SQLAlchemyError

from translator.core.config import settings
from translator.core.errors import MissingInputError
from translator.core.logging import get_logger, preview, short_fingerprint
from translator.schemas.history import CacheEntryRecord
from translator.schemas.translation import TranslationResult
from translator.services.fingerprint import fingerprint as compute_fingerprint
from translator.services.fingerprint import normalize_language
from translator.services.history_store import HistoryStore
from translator.services.model_client import TranslationModelClient
from translator.services.response_parser import UNKNOWN_LANGUAGE

logger = get_logger(__name__)


class TranslationService:
    """
    Orchestrates the history store and the model client.

    Store calls are blocking and run in worker threads; concurrent requests
    share the store's bounded connection pool.
    """

    def __init__(self, store: HistoryStore, model_client: TranslationModelClient):
        self.store = store
        self.model_client = model_client

    async def translate(
        self,
        message: str,
        language: str | None = None,
        user_id: str | None = None,
        display_name: str | None = None,
    ) -> TranslationResult:
        """
        Translate ``message`` into ``language``.

        Args:
            message: Text to translate
            language: Target language (defaults to the configured default)
            user_id: Discord user to attribute the translation to
            display_name: That user's current display name

        Returns:
            TranslationResult with ``from_cache`` set on hits

        Raises:
            MissingInputError: If the message or language is empty
            TranslationFailedError: If the model call fails or its reply cannot be parsed.
                Nothing is written to the store in that case.
        """
        if not message or not message.strip():
            raise MissingInputError("message")
        if language is None:
            language = settings.default_target_language
        target_language = normalize_language(language)
        if not target_language:
            raise MissingInputError("language")

        key = compute_fingerprint(message)

        cached = await self._lookup(key, target_language, message)
        if cached is not None:
            await self._attribute(user_id, display_name, cached.id)
            return TranslationResult(
                original_message=cached.original_message,
                translated_message=cached.translated_message,
                detected_language=cached.detected_language or UNKNOWN_LANGUAGE,
                from_cache=True,
                cache_entry_id=cached.id,
                use_count=cached.use_count,
            )

        translation = await self.model_client.translate(message, target_language)

        result = TranslationResult(
            original_message=message,
            translated_message=translation.translated,
            detected_language=translation.detected_language,
            from_cache=False,
        )

        stored = await self._store(key, target_language, message, result)
        if stored is not None:
            result.cache_entry_id = stored.id
            result.use_count = stored.use_count
            await self._attribute(user_id, display_name, stored.id)

        return result

    async def _lookup(self, key: str, language: str, message: str) -> CacheEntryRecord | None:
        try:
            return await asyncio.to_thread(self.store.lookup, key, language)
        except SQLAlchemyError as e:
            logger.warning(
                f"Cache lookup failed, treating as miss "
                f"(fingerprint={short_fingerprint(key)}, lang={language}, message={preview(message)!r}): {e}"
            )
            return None

    async def _store(
        self, key: str, language: str, message: str, result: TranslationResult
    ) -> CacheEntryRecord | None:
        try:
            return await asyncio.to_thread(
                self.store.upsert,
                key,
                message,
                language,
                result.detected_language,
                result.translated_message,
            )
        except SQLAlchemyError as e:
            logger.error(
                f"Failed to cache translation "
                f"(fingerprint={short_fingerprint(key)}, lang={language}, message={preview(message)!r}): {e}"
            )
            return None

    async def _attribute(self, user_id: str | None, display_name: str | None, cache_entry_id: int) -> None:
        """Link the entry to the user; only when both id and name are known."""
        if not user_id or not display_name:
            return
        try:
            await asyncio.to_thread(self.store.attribute_user, str(user_id), display_name, cache_entry_id)
        except Exception as e:
            logger.warning(
                f"Failed to attribute cache entry {cache_entry_id} to user {user_id}: {e}",
                exc_info=True,
            )

"""
Tests for the cache-first translation service.
"""

import pytest
import sqlalchemy as sa
from sqlalchemy.exc import OperationalError

from translator.core.errors import MissingInputError, TranslationFailedError
from translator.models import UsageLink, UserProfile
from translator.services.fingerprint import fingerprint


def _link_count(store) -> int:
    with store.session_scope() as session:
        return session.scalar(sa.select(sa.func.count(UsageLink.id)))


def _db_error(*args, **kwargs):
    raise OperationalError("SELECT 1", {}, Exception("database is locked"))


class TestTranslate:
    @pytest.mark.asyncio
    async def test_miss_then_hit(self, translation_service, fake_provider):
        first = await translation_service.translate("Hello", "spanish")
        second = await translation_service.translate("Hello", "spanish")

        assert first.from_cache is False
        assert first.translated_message == "Hola"
        assert first.use_count == 1
        assert second.from_cache is True
        assert second.translated_message == "Hola"
        assert second.cache_entry_id == first.cache_entry_id
        assert second.use_count == 2
        assert len(fake_provider.calls) == 1

    @pytest.mark.asyncio
    async def test_normalized_variants_share_a_cache_entry(self, translation_service, store, fake_provider):
        await translation_service.translate("Hello", "spanish")
        assert _link_count(store) == 0

        result = await translation_service.translate("HELLO  ", "Spanish", user_id="42", display_name="alice")

        assert result.from_cache is True
        assert result.original_message == "Hello"
        assert len(fake_provider.calls) == 1
        assert _link_count(store) == 1
        assert store.user_stats("42").total_translations == 1
        assert store.lookup(fingerprint("hello"), "spanish").use_count == 3

    @pytest.mark.asyncio
    async def test_non_latin_language_is_translated_and_cached_under_its_own_key(
        self, translation_service, store, fake_provider
    ):
        fake_provider.reply = lambda prompt: (
            '{"translated_message": "こんにちは", "detected_language": "english"}'
            if "into 日本語:" in prompt
            else '{"translated_message": "WRONG", "detected_language": "english"}'
        )

        first = await translation_service.translate("Hello", "日本語")
        second = await translation_service.translate("Hello", "日本語")

        assert first.translated_message == "こんにちは"
        assert second.from_cache is True
        assert second.translated_message == "こんにちは"
        assert store.lookup(fingerprint("hello"), "english") is None

    @pytest.mark.asyncio
    async def test_language_without_letters_caches_nothing(self, translation_service, store, fake_provider):
        with pytest.raises(MissingInputError) as exc_info:
            await translation_service.translate("Hello", "1234!")

        assert exc_info.value.field == "language"
        assert fake_provider.calls == []
        assert store.global_stats().total_translations == 0

    @pytest.mark.asyncio
    async def test_default_language(self, translation_service, fake_provider):
        await translation_service.translate("Hola")
        assert "into english:" in fake_provider.calls[0]["prompt"]

    @pytest.mark.asyncio
    async def test_miss_keeps_submitted_text_and_detected_language(self, translation_service, fake_provider):
        fake_provider.reply = '{"original_message": "Bonjour!!", "translated_message": "Hello", "detected_language": "french"}'

        result = await translation_service.translate("Bonjour", "english")

        assert result.original_message == "Bonjour"
        assert result.detected_language == "french"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("message", ["", "   "])
    async def test_missing_message(self, translation_service, fake_provider, message):
        with pytest.raises(MissingInputError) as exc_info:
            await translation_service.translate(message, "spanish")
        assert exc_info.value.field == "message"
        assert fake_provider.calls == []

    @pytest.mark.asyncio
    async def test_missing_language(self, translation_service):
        with pytest.raises(MissingInputError) as exc_info:
            await translation_service.translate("Hello", "  ")
        assert exc_info.value.field == "language"


class TestAttribution:
    @pytest.mark.asyncio
    async def test_anonymous_requests_are_not_attributed(self, translation_service, store):
        await translation_service.translate("Hello", "spanish")
        await translation_service.translate("Hello", "spanish", user_id="42")

        assert _link_count(store) == 0
        with store.session_scope() as session:
            assert session.get(UserProfile, "42") is None

    @pytest.mark.asyncio
    async def test_cache_hit_is_attributed(self, translation_service, store):
        await translation_service.translate("Hello", "spanish", user_id="1", display_name="alice")
        await translation_service.translate("Hello", "spanish", user_id="2", display_name="bob")

        assert _link_count(store) == 2
        assert store.user_stats("2").total_translations == 1

    @pytest.mark.asyncio
    async def test_attribution_failure_is_swallowed(self, translation_service, store, monkeypatch):
        monkeypatch.setattr(store, "attribute_user", _db_error)

        result = await translation_service.translate("Hello", "spanish", user_id="1", display_name="alice")

        assert result.translated_message == "Hola"
        assert result.cache_entry_id is not None


class TestFailures:
    @pytest.mark.asyncio
    async def test_unparseable_reply_writes_nothing(self, translation_service, store, fake_provider):
        fake_provider.reply = "not json at all"

        with pytest.raises(TranslationFailedError):
            await translation_service.translate("Hello", "spanish", user_id="1", display_name="alice")

        assert store.global_stats().total_translations == 0
        assert _link_count(store) == 0

    @pytest.mark.asyncio
    async def test_store_write_failure_still_returns_translation(self, translation_service, store, monkeypatch):
        monkeypatch.setattr(store, "upsert", _db_error)

        result = await translation_service.translate("Hello", "spanish", user_id="1", display_name="alice")

        assert result.translated_message == "Hola"
        assert result.from_cache is False
        assert result.cache_entry_id is None
        assert _link_count(store) == 0

    @pytest.mark.asyncio
    async def test_lookup_failure_is_a_miss(self, translation_service, store, fake_provider, monkeypatch):
        monkeypatch.setattr(store, "lookup", _db_error)

        result = await translation_service.translate("Hello", "spanish")

        assert result.from_cache is False
        assert len(fake_provider.calls) == 1

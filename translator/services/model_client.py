"""
Translation model client.

Wraps a single call to the translation model: sanitizes the inputs, pins the
sampling temperature, and turns the loosely structured reply into a
``ModelTranslation``.
"""

import re

from translator.core.config import settings
from translator.core.errors import MissingInputError, TranslationFailedError
from translator.core.logging import get_logger, preview
from translator.schemas.translation import ModelTranslation
from translator.services.ai_providers.base import BaseAIProvider
from translator.services.ai_providers.gemini_provider import GeminiProvider
from translator.services.prompts import build_translation_prompt
from translator.services.response_parser import normalize_reply, parse_reply

logger = get_logger(__name__)

# Cached translations assume the same input yields the same output
DETERMINISTIC_TEMPERATURE = 0.0

# Anything but letters (any script), whitespace and hyphens
_LANGUAGE_DISALLOWED = re.compile(r"[^\w\s-]|[\d_]")


def sanitize_message(text: str, max_length: int) -> str:
    """
    Escape backslashes and double quotes, then cap the length.

    A cut that splits an escape sequence drops the dangling backslash, so the
    result never escapes the quote that closes it in the prompt.
    """
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')[:max_length]
    trailing = len(escaped) - len(escaped.rstrip("\\"))
    if trailing % 2:
        escaped = escaped[:-1]
    return escaped


def sanitize_language(language: str, max_length: int) -> str:
    """Keep only letters, whitespace and hyphens, then cap the length."""
    return _LANGUAGE_DISALLOWED.sub("", language)[:max_length]


class TranslationModelClient:
    """
    Client for the external translation model.

    Example:
        client = TranslationModelClient(GeminiProvider(api_key="..."), model="gemini-2.5-flash")
        result = await client.translate("Hola", "english")
    """

    def __init__(
        self,
        provider: BaseAIProvider,
        model: str,
        max_message_length: int = 2000,
        max_language_length: int = 50,
    ):
        self.provider = provider
        self.model = model
        self.max_message_length = max_message_length
        self.max_language_length = max_language_length

    def build_prompt(self, text: str, target_language: str) -> str:
        message = sanitize_message(text, self.max_message_length)
        language = sanitize_language(target_language, self.max_language_length).strip()
        if not language:
            raise MissingInputError("language")
        return build_translation_prompt(message, language)

    async def translate(self, text: str, target_language: str) -> ModelTranslation:
        """
        Translate ``text`` into ``target_language``.

        Raises:
            MissingInputError: If no letters are left in the target language
            TranslationFailedError: If the model call fails or its reply is not
                parseable JSON. ``raw_text`` holds the reply when there was one.
        """
        prompt = self.build_prompt(text, target_language)

        logger.info(
            f"Requesting translation from {self.provider.provider_name}:{self.model} "
            f"(lang={target_language!r}, text_len={len(text)})"
        )

        try:
            response = await self.provider.generate(
                model=self.model,
                prompt=prompt,
                temperature=DETERMINISTIC_TEMPERATURE,
            )
        except Exception as e:
            logger.error(
                f"Translation request failed with {self.provider.provider_name}:{self.model}: {e}",
                exc_info=True,
            )
            raise TranslationFailedError(
                f"Translation request failed using {self.provider.provider_name}:{self.model}"
            ) from e

        raw_text = (response.text or "").strip()

        try:
            data = parse_reply(raw_text)
        except TranslationFailedError:
            logger.warning(
                f"Unparseable reply from {self.provider.provider_name}:{self.model} "
                f"for message {preview(text)!r}: {preview(raw_text)!r}"
            )
            raise

        return normalize_reply(data, text)


def create_model_client() -> TranslationModelClient:
    """Build the Gemini-backed client from settings."""
    provider = GeminiProvider(
        api_key=settings.gemini_api_key,
        base_url=settings.gemini_base_url,
        timeout=settings.gemini_timeout,
    )
    return TranslationModelClient(
        provider,
        model=settings.gemini_model,
        max_message_length=settings.max_message_length,
        max_language_length=settings.max_language_length,
    )

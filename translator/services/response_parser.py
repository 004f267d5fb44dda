"""
Parsing of the model's JSON-shaped translation replies.

Models are asked for a bare JSON object but often wrap it in markdown fences or
leave keys unquoted. Parsing runs in two stages, each returning ``None`` on
failure:

1. strict JSON parsing of the fence-stripped text
2. JSON parsing after quoting bare or single-quoted keys
"""

import json
import re

from translator.core.errors import TranslationFailedError
from translator.core.logging import get_logger
from translator.schemas.translation import ModelTranslation

logger = get_logger(__name__)

UNKNOWN_LANGUAGE = "unknown"

_CODE_FENCE_PATTERN = re.compile(r"```(?:json)?", re.IGNORECASE)
# key, 'key' or "key" followed by a colon, right after "{" or ","
_KEY_PATTERN = re.compile(r"""(?<=[{,])(\s*)(['"])?(\w+)\2?\s*:""")


def strip_code_fences(text: str) -> str:
    """Remove ```json / ``` markers anywhere in the reply."""
    return _CODE_FENCE_PATTERN.sub("", text).strip()


def parse_strict(text: str) -> dict | None:
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, ValueError):
        return None
    return data if isinstance(data, dict) else None


def quote_keys(text: str) -> str:
    """Rewrite every object key ``key:`` / ``'key':`` as ``"key":``."""
    return _KEY_PATTERN.sub(r'\1"\3":', text)


def parse_repaired(text: str) -> dict | None:
    return parse_strict(quote_keys(text))


def parse_reply(raw_text: str) -> dict:
    """
    Parse a raw model reply into a dict.

    Raises:
        TranslationFailedError: If neither the strict nor the repaired text parses.
            The error carries ``raw_text`` for diagnostics.
    """
    cleaned = strip_code_fences(raw_text or "")

    data = parse_strict(cleaned)
    if data is not None:
        return data

    data = parse_repaired(cleaned)
    if data is not None:
        logger.debug("Parsed model reply after quoting keys")
        return data

    raise TranslationFailedError(
        "Failed to parse AI response as JSON", raw_text=raw_text
    )


def _text_field(data: dict, key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def normalize_reply(data: dict, original_text: str) -> ModelTranslation:
    """
    Fill fields the model left out.

    A missing translation degrades to the original text and a missing language
    to ``"unknown"``.
    """
    original = _text_field(data, "original_message")
    translated = _text_field(data, "translated_message")
    detected = _text_field(data, "detected_language")

    return ModelTranslation(
        original=original if original is not None else original_text,
        translated=translated if translated is not None else original_text,
        detected_language=detected if detected is not None else UNKNOWN_LANGUAGE,
    )

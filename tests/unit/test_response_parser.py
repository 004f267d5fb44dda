"""
Tests for model reply parsing.
"""

import pytest

from translator.core.errors import TranslationFailedError
from translator.services.response_parser import (
    UNKNOWN_LANGUAGE,
    normalize_reply,
    parse_reply,
    quote_keys,
    strip_code_fences,
)


class TestParseReply:
    def test_plain_json(self):
        data = parse_reply('{"translated_message": "Hola", "detected_language": "english"}')
        assert data == {"translated_message": "Hola", "detected_language": "english"}

    def test_fenced_json(self):
        raw = '```json\n{"translated_message": "Hola"}\n```'
        assert parse_reply(raw) == {"translated_message": "Hola"}

    def test_fence_marker_is_case_insensitive(self):
        assert parse_reply('```JSON\n{"a": 1}\n```') == {"a": 1}

    def test_unquoted_keys_are_repaired(self):
        raw = '```json\n{original_message: "Hello", translated_message: "Hola", detected_language: "english"}\n```'
        assert parse_reply(raw) == {
            "original_message": "Hello",
            "translated_message": "Hola",
            "detected_language": "english",
        }

    def test_single_quoted_keys_are_repaired(self):
        assert parse_reply("{'translated_message': \"Hola\"}") == {"translated_message": "Hola"}

    def test_colons_inside_values_survive_the_repair(self):
        raw = '{original_message: "Note: hi", translated_message: "Nota: hola", detected_language: "english"}'
        assert parse_reply(raw) == {
            "original_message": "Note: hi",
            "translated_message": "Nota: hola",
            "detected_language": "english",
        }

    @pytest.mark.parametrize("raw", ["I cannot translate that.", "", "[1, 2, 3]", '"just a string"'])
    def test_unparseable_reply_raises_with_raw_text(self, raw):
        with pytest.raises(TranslationFailedError) as exc_info:
            parse_reply(raw)
        assert exc_info.value.raw_text == raw


def test_strip_code_fences():
    assert strip_code_fences('```json{"a": 1}```') == '{"a": 1}'


def test_quote_keys():
    assert quote_keys("{a: 1, 'b': 2}") == '{"a": 1, "b": 2}'
    assert quote_keys('{a: "time: 10"}') == '{"a": "time: 10"}'


class TestNormalizeReply:
    def test_complete_reply(self):
        result = normalize_reply(
            {"original_message": "Hello", "translated_message": "Hola", "detected_language": "english"},
            "Hello",
        )
        assert result.translated == "Hola"
        assert result.detected_language == "english"

    def test_missing_fields_fall_back(self):
        result = normalize_reply({}, "Bonjour")
        assert result.original == "Bonjour"
        assert result.translated == "Bonjour"
        assert result.detected_language == UNKNOWN_LANGUAGE

    def test_non_string_values_are_stringified(self):
        result = normalize_reply({"translated_message": 42, "detected_language": None}, "42")
        assert result.translated == "42"
        assert result.detected_language == UNKNOWN_LANGUAGE

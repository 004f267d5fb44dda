"""
Discord command handling.

Commands are answered in two phases: the HTTP handler returns a deferred
acknowledgment right away, and ``InteractionHandler.run`` does the translation
in the background and delivers the outcome through the follow-up webhook.
"""

from dataclasses import dataclass

from translator.core.config import settings
from translator.core.errors import MissingInputError, TranslationFailedError
from translator.core.logging import InteractionLogContext, get_logger, preview
from translator.schemas.translation import TranslationResult
from translator.services.discord_client import DiscordClient
from translator.services.discord_commands import (
    CALLBACK_DEFERRED_CHANNEL_MESSAGE,
    EPHEMERAL_FLAG,
    TRANSLATE_COMMAND,
    TRANSLATE_MESSAGE_COMMAND,
)
from translator.services.translation_service import TranslationService

logger = get_logger(__name__)

EMBED_COLOR = 0x1ABC9C
EMBED_FIELD_LIMIT = 1024
CONTENT_LIMIT = 2000

FAILURE_NOTICE = "❌ Translation failed. Please try again later."
MESSAGE_NOT_FOUND_NOTICE = "Message not found ❌"
MISSING_INPUT_NOTICES = {
    "message": "No message provided ❌",
    "language": "No language provided ❌",
}


@dataclass
class CommandRequest:
    """Plain values extracted from an application command interaction."""

    command: str
    interaction_id: str | None
    token: str
    message: str | None
    language: str | None
    user_id: str | None = None
    display_name: str | None = None
    message_found: bool = True

    @property
    def is_slash_command(self) -> bool:
        return self.command == TRANSLATE_COMMAND


def deferred_response(ephemeral: bool = True) -> dict:
    """Immediate acknowledgment telling Discord a follow-up is coming."""
    return {
        "type": CALLBACK_DEFERRED_CHANNEL_MESSAGE,
        "data": {"flags": EPHEMERAL_FLAG if ephemeral else 0},
    }


def _option_value(data: dict, name: str) -> str | None:
    for option in data.get("options") or []:
        if option.get("name") == name:
            return option.get("value")
    return None


def _caller(interaction: dict) -> tuple[str | None, str | None]:
    """Invoking user's id and display name (guild ``member.user`` or DM ``user``)."""
    user = (interaction.get("member") or {}).get("user") or interaction.get("user") or {}
    user_id = user.get("id")
    display_name = user.get("global_name") or user.get("username")
    return (str(user_id) if user_id else None), display_name


def parse_command(interaction: dict) -> CommandRequest | None:
    """
    Extract a ``CommandRequest`` from an application command payload.

    Returns:
        None if the command is not one this bot handles
    """
    data = interaction.get("data") or {}
    name = data.get("name")
    user_id, display_name = _caller(interaction)

    common = {
        "command": name,
        "interaction_id": interaction.get("id"),
        "token": interaction.get("token", ""),
        "user_id": user_id,
        "display_name": display_name,
    }

    if name == TRANSLATE_COMMAND:
        return CommandRequest(
            message=_option_value(data, "message"),
            language=_option_value(data, "language"),
            **common,
        )

    if name == TRANSLATE_MESSAGE_COMMAND:
        messages = (data.get("resolved") or {}).get("messages") or {}
        target = messages.get(str(data.get("target_id")))
        return CommandRequest(
            message=target.get("content") if target else None,
            language=settings.default_target_language,
            message_found=target is not None,
            **common,
        )

    return None


def _clamp(text: str | None, limit: int) -> str:
    if not text:
        return "N/A"
    return text if len(text) <= limit else text[: limit - 3] + "..."


def build_translation_embed(result: TranslationResult, language: str | None = None) -> dict:
    return {
        "title": f"Translation ({language})" if language else "Translation",
        "color": EMBED_COLOR,
        "fields": [
            {"name": "Original Message", "value": _clamp(result.original_message, EMBED_FIELD_LIMIT)},
            {"name": "Detected Language", "value": _clamp(result.detected_language, EMBED_FIELD_LIMIT)},
            {"name": "Translated Message", "value": _clamp(result.translated_message, EMBED_FIELD_LIMIT)},
        ],
    }


class InteractionHandler:
    """Runs translation commands and reports back through follow-up messages."""

    def __init__(self, translation_service: TranslationService, discord_client: DiscordClient):
        self.translation_service = translation_service
        self.discord_client = discord_client

    async def _notify(self, request: CommandRequest, content: str) -> None:
        await self.discord_client.send_followup(
            request.token, {"content": content, "flags": EPHEMERAL_FLAG}
        )

    async def run(self, request: CommandRequest) -> None:
        """
        Background job for one command.

        Never raises: every failure ends in an ephemeral notice to the user.
        """
        with InteractionLogContext(interaction_id=request.interaction_id, command=request.command):
            try:
                await self._run(request)
            except MissingInputError as e:
                await self._notify(request, MISSING_INPUT_NOTICES.get(e.field, FAILURE_NOTICE))
            except TranslationFailedError as e:
                logger.error(f"Translation failed: {e} (raw reply: {preview(e.raw_text)!r})")
                await self._notify(request, FAILURE_NOTICE)
            except Exception as e:
                logger.error(f"Error in {request.command} command: {e}", exc_info=True)
                await self._notify(request, FAILURE_NOTICE)

    async def _run(self, request: CommandRequest) -> None:
        if not request.message_found:
            await self._notify(request, MESSAGE_NOT_FOUND_NOTICE)
            return
        if not request.message:
            raise MissingInputError("message")
        if not request.language:
            raise MissingInputError("language")

        logger.info(f"Processing {request.command} for message {preview(request.message)!r}")

        result = await self.translation_service.translate(
            request.message,
            request.language,
            user_id=request.user_id,
            display_name=request.display_name,
        )

        payload: dict = {"flags": EPHEMERAL_FLAG}
        if request.is_slash_command:
            payload["content"] = _clamp(result.translated_message, CONTENT_LIMIT)
            payload["embeds"] = [build_translation_embed(result, request.language)]
        else:
            payload["embeds"] = [build_translation_embed(result)]

        await self.discord_client.send_followup(request.token, payload)

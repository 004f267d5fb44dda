"""
Discord REST client.

Sends interaction follow-up messages and registers application commands.
"""

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from translator.core.config import settings
from translator.core.logging import get_logger
from translator.services.discord_commands import COMMANDS

logger = get_logger(__name__)


class DiscordClient:
    """
    Minimal async client for the Discord REST API.
    """

    def __init__(
        self,
        app_id: str,
        token: str,
        base_url: str = "https://discord.com/api/v10",
        timeout: int = 15,
        dev_guild_id: str | None = None,
    ):
        self.app_id = app_id
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.dev_guild_id = dev_guild_id

    @property
    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bot {self.token}"}

    async def send_followup(self, interaction_token: str, payload: dict) -> bool:
        """
        Post a follow-up message for a deferred interaction.

        Failures are logged and reported through the return value only.

        Returns:
            bool: True if Discord accepted the message
        """
        url = f"{self.base_url}/webhooks/{self.app_id}/{interaction_token}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, json=payload, headers=self._headers)
        except httpx.HTTPError as e:
            logger.error(f"Error sending follow-up: {e}")
            return False

        if response.is_error:
            logger.error(f"Failed to send follow-up ({response.status_code}): {response.text}")
            return False
        return True

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type(httpx.TransportError),
        reraise=True,
    )
    async def _put_commands(self, client: httpx.AsyncClient, path: str, commands: list[dict]) -> None:
        """Overwrite the commands at ``path``, retrying connection errors."""
        response = await client.put(f"{self.base_url}{path}", json=commands, headers=self._headers)
        response.raise_for_status()

    async def register_commands(self, commands: list[dict] | None = None) -> None:
        """
        Overwrite the application's commands.

        With a dev guild configured, commands are registered there first (instant)
        and then globally. Global commands can take up to an hour to propagate.

        Raises:
            httpx.HTTPError: If Discord rejects a registration
        """
        commands = commands if commands is not None else COMMANDS

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            if self.dev_guild_id:
                logger.info(f"Registering commands for dev guild {self.dev_guild_id}...")
                await self._put_commands(
                    client,
                    f"/applications/{self.app_id}/guilds/{self.dev_guild_id}/commands",
                    commands,
                )
                logger.info("Commands registered for dev guild")

            logger.info("Registering global commands...")
            await self._put_commands(client, f"/applications/{self.app_id}/commands", commands)
            logger.info("Global commands registered (propagation can take up to 1 hour)")


def create_discord_client() -> DiscordClient:
    return DiscordClient(
        app_id=settings.discord_app_id,
        token=settings.discord_token,
        base_url=settings.discord_api_base_url,
        timeout=settings.discord_timeout,
        dev_guild_id=settings.discord_dev_guild_id,
    )

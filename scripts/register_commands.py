#!/usr/bin/env python3
"""
Register the bot's application commands with Discord.

Registers globally, and also in DISCORD_DEV_GUILD_ID when set (instant there,
up to an hour to propagate globally).
"""

import asyncio
import sys

import httpx

from translator.services.discord_client import create_discord_client


def main() -> None:
    client = create_discord_client()
    try:
        asyncio.run(client.register_commands())
    except httpx.HTTPError as e:
        print(f"❌ Failed to register commands: {e}")
        sys.exit(1)
    print("✅ Commands registered")


if __name__ == "__main__":
    main()

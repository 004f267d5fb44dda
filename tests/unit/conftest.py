"""
Pytest configuration and fixtures for unit tests.
"""

from unittest.mock import AsyncMock

import pytest

from translator.services.discord_client import DiscordClient
from translator.services.translation_service import TranslationService


@pytest.fixture
def translation_service(store, model_client):
    return TranslationService(store, model_client)


@pytest.fixture
def discord_client():
    """Discord client whose follow-up sends are recorded instead of posted."""
    client = DiscordClient(app_id="123", token="token")
    client.send_followup = AsyncMock(return_value=True)
    return client

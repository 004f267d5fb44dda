"""
Pytest configuration for integration tests.

Runs the FastAPI app against a temporary SQLite store, a scripted model and a
Discord client that records follow-ups instead of posting them.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from translator.api.deps import get_interaction_handler, get_store
from translator.main import app
from translator.services.discord_client import DiscordClient
from translator.services.interaction_handler import InteractionHandler
from translator.services.translation_service import TranslationService


@pytest.fixture
def recording_discord_client():
    client = DiscordClient(app_id="123", token="token")
    client.send_followup = AsyncMock(return_value=True)
    return client


@pytest.fixture
def client(store, model_client, recording_discord_client):
    """Test client with services wired to the temporary store (no lifespan)."""
    handler = InteractionHandler(TranslationService(store, model_client), recording_discord_client)
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_interaction_handler] = lambda: handler

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {"X-API-Key": "test-admin-key"}

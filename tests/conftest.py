"""
Shared pytest configuration.

Sets the required environment before the application settings are loaded and
provides a temporary history store and a scripted model provider.
"""

import os
import time

import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

# Key pair standing in for the Discord application's signing key
SIGNING_KEY = Ed25519PrivateKey.generate()
PUBLIC_KEY_HEX = SIGNING_KEY.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw).hex()

os.environ["DISCORD_PUBLIC_KEY"] = PUBLIC_KEY_HEX
os.environ.setdefault("DISCORD_APP_ID", "123456789012345678")
os.environ.setdefault("DISCORD_TOKEN", "test-bot-token")
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")
os.environ["ENVIRONMENT"] = "testing"
os.environ["AUTO_MIGRATE"] = "false"
os.environ["ADMIN_API_KEY"] = "test-admin-key"
os.environ["LOG_FORMAT"] = "text"
os.environ["LOG_OUTPUT"] = "stdout"

from translator.services.ai_providers.base import AIGenerateResponse, BaseAIProvider  # noqa: E402
from translator.services.history_store import HistoryStore  # noqa: E402
from translator.services.model_client import TranslationModelClient  # noqa: E402


def make_reply(original: str = "Hello", translated: str = "Hola", detected: str = "english") -> str:
    return (
        '{"original_message": "%s", "translated_message": "%s", "detected_language": "%s"}'
        % (original, translated, detected)
    )


class FakeProvider(BaseAIProvider):
    """
    Scripted stand-in for the Gemini provider.

    ``reply`` may be a string, an exception to raise, or a callable taking the
    prompt and returning a string.
    """

    def __init__(self, reply=None):
        super().__init__(api_key="fake")
        self.reply = reply if reply is not None else make_reply()
        self.calls: list[dict] = []

    @property
    def provider_name(self) -> str:
        return "fake"

    async def generate(self, model, prompt, system=None, temperature=0.7, max_tokens=None, **kwargs):
        self.calls.append({"model": model, "prompt": prompt, "temperature": temperature})
        reply = self.reply
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            reply = reply(prompt)
        return AIGenerateResponse(text=reply, model=model, provider=self.provider_name)


# =============================================================================
# Store Fixtures
# =============================================================================

@pytest.fixture
def store(tmp_path):
    """Initialized history store backed by a temporary SQLite file."""
    history_store = HistoryStore(f"sqlite:///{tmp_path / 'history.db'}")
    history_store.initialize()
    history_store.create_tables()
    yield history_store
    history_store.close()


# =============================================================================
# Model Fixtures
# =============================================================================

@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def model_client(fake_provider):
    return TranslationModelClient(fake_provider, model="gemini-test")


# =============================================================================
# Signature Fixtures
# =============================================================================

@pytest.fixture
def signing_key():
    return SIGNING_KEY


@pytest.fixture
def signed_headers():
    """Build Discord signature headers for a raw request body."""

    def _sign(body: bytes) -> dict[str, str]:
        timestamp = str(int(time.time()))
        signature = SIGNING_KEY.sign(timestamp.encode() + body).hex()
        return {
            "X-Signature-Ed25519": signature,
            "X-Signature-Timestamp": timestamp,
            "Content-Type": "application/json",
        }

    return _sign

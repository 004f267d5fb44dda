"""
Integration tests for the Discord interactions webhook.
"""

import json

from translator.services.discord_commands import EPHEMERAL_FLAG


def _post(client, signed_headers, interaction: dict):
    body = json.dumps(interaction).encode()
    return client.post("/interactions", content=body, headers=signed_headers(body))


def _translate_command(message="Hello", language="spanish"):
    return {
        "id": "900",
        "type": 2,
        "token": "interaction-token",
        "member": {"user": {"id": "42", "username": "alice"}},
        "data": {
            "name": "translate",
            "type": 1,
            "options": [
                {"name": "message", "type": 3, "value": message},
                {"name": "language", "type": 3, "value": language},
            ],
        },
    }


class TestSignatureChecks:
    def test_missing_headers(self, client):
        response = client.post("/interactions", content=b'{"type": 1}')
        assert response.status_code == 400

    def test_invalid_signature(self, client, signed_headers):
        headers = signed_headers(b'{"type": 1}')
        response = client.post("/interactions", content=b'{"type": 2}', headers=headers)

        assert response.status_code == 401
        assert response.text == "invalid request signature"

    def test_signed_invalid_json(self, client, signed_headers):
        body = b"not json"
        response = client.post("/interactions", content=body, headers=signed_headers(body))
        assert response.status_code == 400


class TestInteractions:
    def test_ping(self, client, signed_headers):
        response = _post(client, signed_headers, {"type": 1})

        assert response.status_code == 200
        assert response.json() == {"type": 1}

    def test_translate_is_deferred_then_followed_up(
        self, client, signed_headers, recording_discord_client, store
    ):
        response = _post(client, signed_headers, _translate_command())

        assert response.status_code == 200
        assert response.json() == {"type": 5, "data": {"flags": EPHEMERAL_FLAG}}

        # Background tasks complete before TestClient returns
        recording_discord_client.send_followup.assert_awaited_once()
        token, payload = recording_discord_client.send_followup.await_args.args
        assert token == "interaction-token"
        assert payload["content"] == "Hola"
        assert store.user_stats("42").total_translations == 1

    def test_repeat_translation_is_served_from_cache(
        self, client, signed_headers, fake_provider, store
    ):
        _post(client, signed_headers, _translate_command("Hello"))
        _post(client, signed_headers, _translate_command("  HELLO"))

        assert len(fake_provider.calls) == 1
        assert store.global_stats().total_translations == 1

    def test_unknown_command(self, client, signed_headers):
        response = _post(client, signed_headers, {"type": 2, "token": "t", "data": {"name": "ban"}})
        assert response.status_code == 404

    def test_unhandled_interaction_type(self, client, signed_headers):
        response = _post(client, signed_headers, {"type": 3, "token": "t", "data": {}})
        assert response.status_code == 404

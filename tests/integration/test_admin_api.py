"""
Integration tests for the health and history administration endpoints.
"""

from translator.api.routers import health
from translator.core.config import settings
from translator.services.fingerprint import fingerprint


def _seed(store):
    entry = store.upsert(fingerprint("Hello"), "Hello", "spanish", "english", "Hola")
    store.attribute_user("42", "alice", entry.id)
    return entry


class TestHealth:
    def test_ok(self, client, monkeypatch):
        async def redis_ok():
            return True

        monkeypatch.setattr(health, "_redis_health_check", redis_ok)

        data = client.get("/api/health").json()

        assert data["status"] == "ok"
        assert data["services"] == {"database": "ok", "redis": "ok"}

    def test_redis_down_is_degraded(self, client, monkeypatch):
        async def redis_down():
            return False

        monkeypatch.setattr(health, "_redis_health_check", redis_down)

        assert client.get("/api/health").json()["status"] == "degraded"


class TestAdminAuth:
    def test_missing_key(self, client):
        assert client.get("/api/history/stats").status_code == 401

    def test_wrong_key(self, client):
        response = client.get("/api/history/stats", headers={"X-API-Key": "nope"})
        assert response.status_code == 401

    def test_disabled_without_configured_key(self, client, admin_headers, monkeypatch):
        monkeypatch.setattr(settings, "admin_api_key", None)
        assert client.get("/api/history/stats", headers=admin_headers).status_code == 403


class TestHistoryEndpoints:
    def test_global_stats(self, client, admin_headers, store):
        _seed(store)

        response = client.get("/api/history/stats", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"total_translations": 1, "unique_messages": 1, "languages_used": 1}

    def test_user_stats_and_history(self, client, admin_headers, store):
        entry = _seed(store)

        stats = client.get("/api/history/users/42/stats", headers=admin_headers).json()
        history = client.get("/api/history/users/42/translations", headers=admin_headers).json()

        assert stats["total_translations"] == 1
        assert [item["id"] for item in history] == [entry.id]
        assert history[0]["translated_message"] == "Hola"

    def test_history_limit_is_validated(self, client, admin_headers):
        response = client.get("/api/history/users/42/translations?limit=0", headers=admin_headers)
        assert response.status_code == 422

    def test_delete_user(self, client, admin_headers, store):
        _seed(store)

        response = client.delete("/api/history/users/42", headers=admin_headers)

        assert response.json() == {"links_deleted": 1, "user_deleted": True}
        assert store.global_stats().total_translations == 1

    def test_purge_stale(self, client, admin_headers, store):
        _seed(store)

        response = client.delete("/api/history/stale?days=30", headers=admin_headers)

        assert response.json() == {"deleted_count": 0, "max_age_days": 30}

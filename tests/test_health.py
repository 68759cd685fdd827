import fakeredis
from fastapi.testclient import TestClient

from legacy_orders.api.routers import health


class _DownRedis:
    def ping(self):
        raise ConnectionError("Connection refused")


def test_health_ok(client, engine, monkeypatch):
    monkeypatch.setattr(health, "engine", engine)
    monkeypatch.setattr(health, "get_redis", lambda: fakeredis.FakeRedis())

    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {
        "status": "healthy",
        "dependencies": {"database": "ok", "broker": "ok"},
    }


def test_health_degraded_when_broker_is_down(client, engine, monkeypatch):
    monkeypatch.setattr(health, "engine", engine)
    monkeypatch.setattr(health, "get_redis", lambda: _DownRedis())

    resp = client.get("/health")

    assert resp.status_code == 503
    body = resp.json()
    assert body["status"] == "degraded"
    assert body["dependencies"]["database"] == "ok"
    assert body["dependencies"]["broker"].startswith("error:")


def test_redis_client_is_reused_and_closed(monkeypatch):
    monkeypatch.setattr(health, "_redis", None)

    first = health.get_redis()
    assert health.get_redis() is first

    health.close_redis()
    assert health._redis is None
    assert health.get_redis() is not first
    health.close_redis()


def test_app_shutdown_closes_redis_client(app, monkeypatch):
    closed = []

    class _Client:
        def close(self):
            closed.append(True)

    monkeypatch.setattr(health, "_redis", _Client())
    with TestClient(app):
        pass

    assert closed == [True]
    assert health._redis is None

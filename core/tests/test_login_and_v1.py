from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from relaychat_core.app import create_app


def test_login_accepts_then_conflicts(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("RELAYCHAT_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        r = client.post("/v1/auth/login", json={"name": "alice"})
        assert r.status_code == 200
        assert r.json() == {"ok": True, "data": {"acceptedName": "alice"}, "error": None}

        r2 = client.post("/v1/auth/login", json={"name": "alice"})
        assert r2.status_code == 409
        body2 = r2.json()
        assert body2["ok"] is False
        assert body2["error"]["code"] == "conflict"
        assert body2["error"]["message"] == "name already taken"


def test_login_requires_name(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("RELAYCHAT_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        for payload in ({"name": ""}, {"name": "   "}, {"name": None}, {}):
            r = client.post("/v1/auth/login", json=payload)
            assert r.status_code == 400
            body = r.json()
            assert body["ok"] is False
            assert body["error"]["code"] == "validation_error"
            assert body["error"]["message"] == "name required"

        sessions = client.get("/v1/chat/sessions").json()
        assert sessions["data"] == {"names": [], "connected": []}


def test_login_strips_whitespace(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("RELAYCHAT_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        r = client.post("/v1/auth/login", json={"name": "  bob "})
        assert r.status_code == 200
        assert r.json()["data"] == {"acceptedName": "bob"}

        r2 = client.post("/v1/auth/login", json={"name": "bob"})
        assert r2.status_code == 409


def test_login_rejects_non_object_body(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("RELAYCHAT_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        r = client.post("/v1/auth/login", json=["alice"])
        assert r.status_code == 422
        assert r.json()["error"]["code"] == "validation_error"


def test_ping_and_system_info(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("RELAYCHAT_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        r = client.get("/v1/ping")
        assert r.status_code == 200
        assert r.json() == {"ok": True, "data": {"pong": True}, "error": None}

        r2 = client.get("/v1/system/info")
        assert r2.status_code == 200
        body2 = r2.json()
        assert body2["ok"] is True
        assert body2["data"]["relaychat_home"] == str(tmp_path.resolve())
        assert body2["data"]["version"]


def test_unknown_route_uses_error_envelope(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("RELAYCHAT_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        r = client.get("/v1/nope")
        assert r.status_code == 404
        assert r.json()["error"]["code"] == "not_found"


def test_docs_and_openapi_are_public(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("RELAYCHAT_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        assert client.get("/docs").status_code == 200

        openapi = client.get("/openapi.json")
        assert openapi.status_code == 200
        schema = openapi.json()
        assert "/v1/auth/login" in schema.get("paths", {})
        assert "/v1/chat/messages" in schema.get("paths", {})


def test_cors_allows_configured_client(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("RELAYCHAT_HOME", str(tmp_path))
    monkeypatch.setenv("RELAYCHAT_CLIENT_URL", "http://localhost:3000")

    with TestClient(create_app()) as client:
        r = client.options(
            "/v1/auth/login",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert r.status_code == 200
        assert r.headers["access-control-allow-origin"] == "http://localhost:3000"

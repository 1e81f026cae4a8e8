from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from relaychat_core.app import create_app


def test_healthz_ok(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("RELAYCHAT_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        response = client.get("/healthz")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


def test_root_reports_running(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("RELAYCHAT_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        response = client.get("/")
        assert response.status_code == 200
        assert response.text == "RelayChat server is running"

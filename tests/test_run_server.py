from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from gitnotify.core.app_config import AppConfig, save_config
from gitnotify.core.config import Settings
from gitnotify.main import create_app
from gitnotify.scripts import run_server


def _valid_config(tmp_path: Path) -> Path:
    path = tmp_path / "config.yml"
    save_config(path, AppConfig(organization="acme", webhook_secret="s", port=9123))
    return path


def test_main_fails_fast_on_invalid_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "config.yml"
    path.write_text("port: 9000\n", encoding="utf-8")
    calls: list = []
    monkeypatch.setattr(run_server.uvicorn, "run", lambda *a, **kw: calls.append((a, kw)))

    assert run_server.main(["--config", str(path)]) == 1
    assert run_server.main(["--config", str(tmp_path / "missing.yml")]) == 1
    assert calls == []


def test_main_serves_on_configured_port(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = _valid_config(tmp_path)
    calls: list = []
    monkeypatch.setattr(run_server.uvicorn, "run", lambda app, **kw: calls.append((app, kw)))

    assert run_server.main(["--config", str(path), "--host", "127.0.0.1"]) == 0

    app, kwargs = calls[0]
    assert kwargs["port"] == 9123
    assert kwargs["host"] == "127.0.0.1"
    assert app.state.config_store.config.organization == "acme"


def test_lifespan_loads_config_from_settings(tmp_path: Path) -> None:
    path = _valid_config(tmp_path)
    app = create_app(settings=Settings(config_path=str(path)))

    with TestClient(app) as client:
        assert client.get("/health").status_code == 200
        assert app.state.config_store.config.port == 9123


def test_lifespan_refuses_invalid_config(tmp_path: Path) -> None:
    path = tmp_path / "config.yml"
    path.write_text("organization: acme\n", encoding="utf-8")
    app = create_app(settings=Settings(config_path=str(path)))

    with pytest.raises(RuntimeError, match="webhook_secret is required"):
        with TestClient(app):
            pass

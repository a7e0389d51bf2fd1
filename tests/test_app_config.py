from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from gitnotify.core.app_config import (
    AppConfig,
    ConfigError,
    ConfigPersistError,
    NotificationRuleConfig,
    load_config,
    save_config,
    validate_config,
)
from gitnotify.core.notification_rules import build_rules

CONFIG_YAML = """
organization: "test-org"
port: 9090
webhook_secret: "test-secret"
notifications:
  - event_type: "issues"
    actions: ["opened", "closed"]
  - event_type: "pull_request"
    actions: ["opened"]
"""


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config.yml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_config(tmp_path: Path) -> None:
    config = load_config(_write(tmp_path, CONFIG_YAML))

    assert config.organization == "test-org"
    assert config.port == 9090
    assert config.webhook_secret == "test-secret"
    assert len(config.notifications) == 2
    assert config.notifications[0].actions == ["opened", "closed"]
    assert config.notifications[1].repos == []
    validate_config(config)


def test_load_config_default_port(tmp_path: Path) -> None:
    config = load_config(_write(tmp_path, 'organization: "test-org"\nwebhook_secret: "s"\n'))
    assert config.port == 8080

    config = load_config(_write(tmp_path, 'organization: "test-org"\nwebhook_secret: "s"\nport: 0\n'))
    assert config.port == 8080


def test_load_config_null_lists(tmp_path: Path) -> None:
    text = (
        "organization: o\n"
        "webhook_secret: s\n"
        "notifications:\n"
        "  - event_type: issues\n"
        "    actions:\n"
        "    repos:\n"
        "github_app:\n"
    )
    config = load_config(_write(tmp_path, text))

    assert config.notifications == [NotificationRuleConfig(event_type="issues")]
    assert config.github_app.app_id == 0


def test_load_config_empty_notifications_key(tmp_path: Path) -> None:
    config = load_config(_write(tmp_path, "organization: o\nwebhook_secret: s\nnotifications:\n"))
    assert config.notifications == []


def test_load_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="failed to read config file"):
        load_config(tmp_path / "nope.yml")


@pytest.mark.parametrize(
    "text",
    [
        "organization: [unclosed\n",
        "- just\n- a list\n",
        "organization: o\nport: not-a-number\n",
    ],
)
def test_load_config_parse_errors(tmp_path: Path, text: str) -> None:
    with pytest.raises(ConfigError, match="failed to parse config file"):
        load_config(_write(tmp_path, text))


@pytest.mark.parametrize(
    "config,message",
    [
        (AppConfig(port=8080, webhook_secret="s"), "organization is required"),
        (AppConfig(organization="o", port=8080), "webhook_secret is required"),
        (AppConfig(organization="o", webhook_secret="s", port=0), "port must be between 1 and 65535"),
        (AppConfig(organization="o", webhook_secret="s", port=70000), "port must be between 1 and 65535"),
        (AppConfig(organization="o", webhook_secret="s", port=-1), "port must be between 1 and 65535"),
    ],
)
def test_validate_config_errors(config: AppConfig, message: str) -> None:
    with pytest.raises(ConfigError, match=message):
        validate_config(config)


def test_validate_config_accepts_port_bounds() -> None:
    validate_config(AppConfig(organization="o", webhook_secret="s", port=1))
    validate_config(AppConfig(organization="o", webhook_secret="s", port=65535))


def test_save_then_load_reproduces_rules(tmp_path: Path) -> None:
    original = AppConfig(
        organization="acme",
        port=9000,
        webhook_secret="shh",
        notifications=[
            NotificationRuleConfig(event_type="pull_request", repos=["web", "core"]),
            NotificationRuleConfig(event_type="issues", actions=["reopened", "opened"]),
            NotificationRuleConfig(event_type="issues"),
        ],
    )
    path = tmp_path / "config.yml"

    save_config(path, original)
    reloaded = load_config(path)

    assert reloaded == original
    assert build_rules(reloaded.notifications) == build_rules(original.notifications)


def test_save_config_is_private_and_leaves_no_temp_files(tmp_path: Path) -> None:
    path = tmp_path / "config.yml"
    save_config(path, AppConfig(organization="o", webhook_secret="s", port=1))

    assert stat.S_IMODE(os.stat(path).st_mode) == 0o600
    assert [p.name for p in tmp_path.iterdir()] == ["config.yml"]


def test_save_config_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(ConfigPersistError):
        save_config(tmp_path / "missing" / "config.yml", AppConfig(organization="o"))

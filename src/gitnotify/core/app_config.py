"""gitnotify YAML configuration: model, load, validate, save.

The YAML file is the only persisted state. It is loaded once at startup and
rewritten whenever ``PUT /api/config`` installs a new configuration.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

DEFAULT_PORT = 8080


class ConfigError(Exception):
    """Configuration could not be read, parsed or validated."""


class ConfigPersistError(ConfigError):
    """Configuration could not be written to disk."""


class NotificationRuleConfig(BaseModel):
    event_type: str = ""
    actions: list[str] = Field(default_factory=list)
    repos: list[str] = Field(default_factory=list)

    @field_validator("actions", "repos", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class GitHubAppConfig(BaseModel):
    # App authentication metadata; kept and round-tripped, not used for matching
    app_id: int = 0
    installation_id: int = 0
    private_key_path: str = ""


class AppConfig(BaseModel):
    organization: str = ""
    port: int = 0
    webhook_secret: str = ""
    notifications: list[NotificationRuleConfig] = Field(default_factory=list)
    github_app: GitHubAppConfig = Field(default_factory=GitHubAppConfig)

    @field_validator("notifications", mode="before")
    @classmethod
    def _null_notifications(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("github_app", mode="before")
    @classmethod
    def _null_github_app(cls, value: Any) -> Any:
        return {} if value is None else value


def validate_config(config: AppConfig) -> None:
    if not config.organization:
        raise ConfigError("organization is required")
    if not config.webhook_secret:
        raise ConfigError("webhook_secret is required")
    if config.port <= 0 or config.port > 65535:
        raise ConfigError("port must be between 1 and 65535")


def load_config(path: str | os.PathLike[str]) -> AppConfig:
    """Read the YAML file at ``path``. A zero or missing port becomes 8080.

    Loading does not validate; call ``validate_config`` on the result.
    """

    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"failed to read config file: {e}") from e

    try:
        raw: Optional[Any] = yaml.safe_load(text)
        config = AppConfig.model_validate(raw or {})
    except (yaml.YAMLError, ValidationError) as e:
        raise ConfigError(f"failed to parse config file: {e}") from e

    if config.port == 0:
        config = config.model_copy(update={"port": DEFAULT_PORT})
    return config


def dump_config(config: AppConfig) -> str:
    return yaml.safe_dump(config.model_dump(), sort_keys=False, allow_unicode=True)


def save_config(path: str | os.PathLike[str], config: AppConfig) -> None:
    """Write ``config`` as YAML, replacing the file atomically (mode 0600)."""

    target = Path(path)
    data = dump_config(config)

    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
        )
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(data)
        os.chmod(tmp_name, 0o600)
        os.replace(tmp_name, target)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ConfigPersistError(str(e)) from e

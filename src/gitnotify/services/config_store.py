from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path

from gitnotify.core.app_config import AppConfig, load_config, save_config, validate_config
from gitnotify.core.notification_rules import RuleSet, build_rules

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfigSnapshot:
    config: AppConfig
    rules: RuleSet


def _make_snapshot(config: AppConfig) -> ConfigSnapshot:
    # deep copy: callers may keep mutating the model they handed in
    owned = config.model_copy(deep=True)
    return ConfigSnapshot(config=owned, rules=build_rules(owned.notifications))


class ConfigStore:
    """Owns the active configuration of one server instance.

    Readers grab ``snapshot`` (a single reference read) and always see either
    the old or the new configuration in full. Writers go through ``replace``,
    which is serialized by a lock and persists before it publishes.
    """

    def __init__(self, config: AppConfig, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()
        self._snapshot = _make_snapshot(config)

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> "ConfigStore":
        """Load and validate ``path``; raises ConfigError on any problem."""
        config = load_config(path)
        validate_config(config)
        return cls(config, path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def snapshot(self) -> ConfigSnapshot:
        return self._snapshot

    @property
    def config(self) -> AppConfig:
        return self._snapshot.config

    @property
    def rules(self) -> RuleSet:
        return self._snapshot.rules

    def replace(self, config: AppConfig) -> ConfigSnapshot:
        """Validate, persist, then activate ``config``.

        Raises ConfigError (validation) or ConfigPersistError (disk); the
        active configuration is untouched in both cases.
        """
        validate_config(config)
        new_snapshot = _make_snapshot(config)
        with self._lock:
            save_config(self._path, new_snapshot.config)
            self._snapshot = new_snapshot

        logger.info(
            "Configuration replaced: organization=%s port=%s rules=%s",
            new_snapshot.config.organization,
            new_snapshot.config.port,
            len(new_snapshot.rules),
        )
        return new_snapshot

"""Notification rules and the matching decision."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence


@dataclass(frozen=True)
class NotificationRule:
    """One configured filter.

    Empty ``actions`` / ``repos`` mean "any action" / "any repository".
    """

    event_type: str
    actions: tuple[str, ...] = ()
    repos: tuple[str, ...] = ()

    def matches(self, event_type: str, action: str, repo_name: str) -> bool:
        if self.event_type != event_type:
            return False
        if self.actions and action not in self.actions:
            return False
        if self.repos and repo_name not in self.repos:
            return False
        return True


RuleSet = tuple[NotificationRule, ...]


def _field(entry: Any, name: str) -> Any:
    if isinstance(entry, Mapping):
        return entry.get(name)
    return getattr(entry, name, None)


def build_rules(notifications: Iterable[Any]) -> RuleSet:
    """Freeze configured notification entries into a RuleSet.

    Entries can be config models or plain mappings; declaration order is kept.
    """

    rules: list[NotificationRule] = []
    for entry in notifications:
        rules.append(
            NotificationRule(
                event_type=_field(entry, "event_type") or "",
                actions=tuple(_field(entry, "actions") or ()),
                repos=tuple(_field(entry, "repos") or ()),
            )
        )
    return tuple(rules)


def should_notify(
    rules: Sequence[NotificationRule], event_type: str, action: str, repo_name: str
) -> bool:
    """Decide whether an event deserves a notification.

    No rules at all means notify for everything. Otherwise the first rule
    matching event type, action and repository wins.
    """

    if not rules:
        return True

    for rule in rules:
        if rule.matches(event_type, action, repo_name):
            return True
    return False

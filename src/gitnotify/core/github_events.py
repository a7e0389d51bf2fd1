from dataclasses import dataclass
from enum import Enum
from typing import Final, Optional

# Headers GitHub sets on every webhook delivery
EVENT_HEADER: Final[str] = "X-GitHub-Event"
SIGNATURE_256_HEADER: Final[str] = "X-Hub-Signature-256"
SIGNATURE_HEADER: Final[str] = "X-Hub-Signature"


class EventKind(str, Enum):
    """Event types that produce notifications.

    Each kind knows its display label and the payload key holding the
    issue / pull request it is about. A new kind is added here, together
    with its phrasing in ``services.notifications.templates``.
    """

    ISSUES = "issues"
    PULL_REQUEST = "pull_request"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def subject_key(self) -> str:
        return _SUBJECT_KEYS[self]

    @classmethod
    def from_header(cls, event_type: str) -> "EventKind | None":
        try:
            return cls(event_type)
        except ValueError:
            return None


_LABELS: dict[EventKind, str] = {
    EventKind.ISSUES: "Issue",
    EventKind.PULL_REQUEST: "Pull Request",
}

_SUBJECT_KEYS: dict[EventKind, str] = {
    EventKind.ISSUES: "issue",
    EventKind.PULL_REQUEST: "pull_request",
}


@dataclass(frozen=True)
class InboundEvent:
    """Fields of one delivery that matching and formatting need."""

    event_type: str
    action: str
    repo_name: str
    actor_login: str
    subject_number: int
    subject_title: str
    # pull_request only
    merged: Optional[bool] = None

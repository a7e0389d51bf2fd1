from __future__ import annotations

import logging
from typing import Optional, Sequence

from pydantic import BaseModel, StrictBool, StrictInt, ValidationError

from gitnotify.core.github_events import EventKind, InboundEvent
from gitnotify.core.notification_rules import NotificationRule, should_notify
from gitnotify.services.notifications.log_sink import emit_notification
from gitnotify.services.notifications.templates import format_notification

logger = logging.getLogger(__name__)


class EventDecodeError(Exception):
    """Payload of a supported event type is not valid JSON of the expected shape."""


# Only the fields we read; GitHub sends far more. Anything absent or null
# decodes to an empty value instead of failing.
class _User(BaseModel):
    login: Optional[str] = None


class _Subject(BaseModel):
    number: Optional[StrictInt] = None
    title: Optional[str] = None
    user: Optional[_User] = None
    merged: Optional[StrictBool] = None


class _Repository(BaseModel):
    name: Optional[str] = None


class _EventPayload(BaseModel):
    action: Optional[str] = None
    repository: Optional[_Repository] = None
    issue: Optional[_Subject] = None
    pull_request: Optional[_Subject] = None


def decode_event(kind: EventKind, payload: bytes) -> InboundEvent:
    try:
        parsed = _EventPayload.model_validate_json(payload)
    except ValidationError as e:
        raise EventDecodeError(f"failed to decode {kind.value} event: {e}") from e

    subject = getattr(parsed, kind.subject_key) or _Subject()
    user = subject.user or _User()
    repository = parsed.repository or _Repository()

    return InboundEvent(
        event_type=kind.value,
        action=parsed.action or "",
        repo_name=repository.name or "",
        actor_login=user.login or "",
        subject_number=subject.number or 0,
        subject_title=subject.title or "",
        merged=bool(subject.merged) if kind is EventKind.PULL_REQUEST else None,
    )


def process_event(
    event_type: str,
    payload: bytes,
    rules: Sequence[NotificationRule],
) -> Optional[str]:
    """
    이벤트 하나 처리: decode → rule 매칭 → notification 로그.
    Returns the emitted line, or None when the event was ignored or filtered.
    Raises EventDecodeError for a malformed payload of a supported type.
    """
    kind = EventKind.from_header(event_type)
    if kind is None:
        logger.info("Ignoring event: %s", event_type)
        return None

    event = decode_event(kind, payload)

    if not should_notify(rules, event.event_type, event.action, event.repo_name):
        logger.debug(
            "No rule matched %s.%s in %s", event.event_type, event.action, event.repo_name
        )
        return None

    text = format_notification(event)
    emit_notification(text)
    return text

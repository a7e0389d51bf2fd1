from gitnotify.core.github_events import EventKind, InboundEvent

# Dedicated phrasing; every other (kind, action) uses "<Label> <action>"
_HEADLINES: dict[tuple[EventKind, str], str] = {
    (EventKind.ISSUES, "opened"): "New Issue Opened",
    (EventKind.ISSUES, "closed"): "Issue Closed",
    (EventKind.ISSUES, "reopened"): "Issue Reopened",
    (EventKind.PULL_REQUEST, "opened"): "New Pull Request Opened",
    (EventKind.PULL_REQUEST, "closed"): "Pull Request Closed",
    (EventKind.PULL_REQUEST, "reopened"): "Pull Request Reopened",
}


def _headline(event: InboundEvent) -> str:
    kind = EventKind(event.event_type)
    if kind is EventKind.PULL_REQUEST and event.action == "closed" and event.merged:
        return "Pull Request Merged"
    return _HEADLINES.get((kind, event.action), f"{kind.label} {event.action}")


def format_notification(event: InboundEvent) -> str:
    return (
        f"{_headline(event)}: #{event.subject_number} - "
        f"{event.subject_title} by {event.actor_login}"
    )

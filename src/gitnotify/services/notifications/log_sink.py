import logging

logger = logging.getLogger(__name__)


def emit_notification(text: str) -> None:
    # The log line is the notification; there is no outbound transport.
    logger.info(text)

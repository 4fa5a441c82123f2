from __future__ import annotations

import logging

from rpos.application.ports.publisher import EventPublisher

logger = logging.getLogger(__name__)


def publish_quietly(publisher: EventPublisher, channel: str, message: str) -> None:
    """Deliver an event without letting a subscriber failure undo the mutation."""
    try:
        publisher.publish(channel=channel, message=message)
    except Exception:
        logger.warning("event_publish_failed", extra={"channel": channel}, exc_info=True)

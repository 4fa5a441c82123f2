from __future__ import annotations

import logging
import queue
from dataclasses import dataclass

from rpos.application.ports.publisher import EventPublisher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BusMessage:
    channel: str
    message: str


class LocalEventBus(EventPublisher):
    """Thread-safe hand-off from request threads to the WebSocket fan-out task."""

    def __init__(self, max_pending: int = 1000) -> None:
        self._queue: queue.Queue[BusMessage] = queue.Queue(maxsize=max_pending)

    def publish(self, channel: str, message: str) -> None:
        try:
            self._queue.put_nowait(BusMessage(channel=channel, message=message))
        except queue.Full:
            logger.warning("event_bus_full_dropping_message", extra={"channel": channel})

    def get(self, timeout_seconds: float) -> BusMessage | None:
        try:
            return self._queue.get(timeout=timeout_seconds)
        except queue.Empty:
            return None

    def pending(self) -> int:
        return self._queue.qsize()

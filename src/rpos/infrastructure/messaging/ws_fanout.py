from __future__ import annotations

import asyncio
import logging
from typing import Any

from rpos.infrastructure.messaging.local_event_bus import LocalEventBus

logger = logging.getLogger(__name__)


async def start_ws_fanout(app_state: Any, poll_seconds: float = 0.25) -> None:
    bus: LocalEventBus = app_state.container.event_bus
    backoff_seconds = 1.0
    logger.info("ws_fanout_started")
    while True:
        try:
            item = await asyncio.to_thread(bus.get, poll_seconds)
            if item is None:
                continue

            _, _, topic = item.channel.partition(":")
            if not topic:
                logger.warning("ws_fanout_invalid_channel", extra={"channel": item.channel})
                continue

            await app_state.ws_manager.broadcast(topic=topic, message_json_str=item.message)
            backoff_seconds = 1.0
        except asyncio.CancelledError:
            logger.info("ws_fanout_cancelled")
            raise
        except Exception:
            logger.exception(
                "ws_fanout_error",
                extra={"backoff_seconds": backoff_seconds},
            )
            await asyncio.sleep(backoff_seconds)
            backoff_seconds = min(backoff_seconds * 2, 5.0)

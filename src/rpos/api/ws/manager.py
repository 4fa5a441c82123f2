from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from dataclasses import dataclass

from fastapi import WebSocket

logger = logging.getLogger(__name__)

TOPICS = frozenset({"orders", "cart"})


@dataclass(frozen=True)
class _Subscription:
    topic: str
    role: str


class ConnectionManager:
    """Tracks live screens per topic; ``orders`` feeds kitchen and manager, ``cart`` the client."""

    def __init__(self) -> None:
        self._connections: dict[str, set[WebSocket]] = defaultdict(set)
        self._subscriptions: dict[WebSocket, _Subscription] = {}
        self._lock = asyncio.Lock()

    async def register(self, websocket: WebSocket, topic: str, role: str) -> None:
        await websocket.accept()
        async with self._lock:
            self._connections[topic].add(websocket)
            self._subscriptions[websocket] = _Subscription(topic=topic, role=role)
        logger.info("ws_client_connected", extra={"topic": topic, "role": role})

    async def unregister(self, websocket: WebSocket) -> None:
        async with self._lock:
            subscription = self._subscriptions.pop(websocket, None)
            if subscription is None:
                return
            sockets = self._connections.get(subscription.topic)
            if sockets is not None:
                sockets.discard(websocket)
                if not sockets:
                    self._connections.pop(subscription.topic, None)
        logger.info(
            "ws_client_disconnected",
            extra={"topic": subscription.topic, "role": subscription.role},
        )

    def connection_count(self, topic: str | None = None) -> int:
        if topic is None:
            return len(self._subscriptions)
        return len(self._connections.get(topic, ()))

    async def broadcast(self, topic: str, message_json_str: str) -> None:
        async with self._lock:
            targets = list(self._connections.get(topic, set()))

        stale: list[WebSocket] = []
        for websocket in targets:
            try:
                await websocket.send_text(message_json_str)
            except Exception:
                logger.warning("ws_send_failed", extra={"topic": topic}, exc_info=True)
                stale.append(websocket)

        for websocket in stale:
            await self.unregister(websocket)

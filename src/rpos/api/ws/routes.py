from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from rpos.api.ws.manager import TOPICS, ConnectionManager

router = APIRouter()
logger = logging.getLogger(__name__)


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    topic = websocket.query_params.get("topic")
    role = websocket.query_params.get("role", "UNKNOWN").upper()
    if topic not in TOPICS:
        await websocket.close(
            code=1008,
            reason=f"topic query parameter must be one of {', '.join(sorted(TOPICS))}",
        )
        return

    manager: ConnectionManager = websocket.app.state.ws_manager
    await manager.register(websocket=websocket, topic=topic, role=role)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await manager.unregister(websocket)
    except Exception:
        logger.exception("ws_connection_error", extra={"topic": topic, "role": role})
        await manager.unregister(websocket)

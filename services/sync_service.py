"""
Real-time sync - "something changed, refetch" notifications over WebSocket

Every mutating API call broadcasts a small message naming the resource and the
action. Clients treat any message as a cache invalidation, so delivery is
best-effort: there is no ordering, replay or acknowledgement.
"""

import json
import logging
import time
from typing import Any, Set

from fastapi import WebSocket
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


def build_message(change_type: str, action: str, data: Any) -> str:
    """Serialize a change notification; pydantic models use their camelCase aliases"""
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json", by_alias=True)
    return json.dumps({
        "type": change_type,
        "action": action,
        "data": jsonable_encoder(data),
        "timestamp": _now_ms(),
    }, ensure_ascii=False)


class ConnectionManager:
    """Tracks open WebSocket clients and fans out change notifications"""

    def __init__(self):
        self.active_connections: Set[WebSocket] = set()

    @property
    def connection_count(self) -> int:
        return len(self.active_connections)

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.active_connections.add(websocket)
        logger.info(f"WebSocket client connected ({len(self.active_connections)} open)")
        await websocket.send_text(build_message(
            "system", "connected", {"message": "Connected to real-time sync"}
        ))

    def disconnect(self, websocket: WebSocket) -> None:
        self.active_connections.discard(websocket)
        logger.info(f"WebSocket client disconnected ({len(self.active_connections)} open)")

    async def broadcast_change(self, change_type: str, action: str, data: Any = None) -> int:
        """
        Send a change notification to every connected client.

        Args:
            change_type: Resource that changed ("recipes", "shopping", "pantry", "tools")
            action: What happened ("create", "update", "delete", "toggle", ...)
            data: Changed entity or a small payload such as {"id": ...}

        Returns:
            Number of clients the message was delivered to
        """
        message = build_message(change_type, action, data if data is not None else {})
        delivered = 0

        for websocket in list(self.active_connections):
            try:
                await websocket.send_text(message)
                delivered += 1
            except Exception as e:
                logger.warning(f"Dropping WebSocket client after failed send: {e}")
                self.active_connections.discard(websocket)

        return delivered


# Create singleton instance
sync_manager = ConnectionManager()

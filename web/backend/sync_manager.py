from typing import Any
from fastapi import WebSocket
from loguru import logger


class SyncManager:
    """Manages per-room WebSocket connections and broadcasts sync messages.

    Broadcasts are fire-and-forget: a client whose send fails is dropped
    and never retried.
    """

    def __init__(self):
        # Room connections: {room: [ws, ...]}
        self.rooms: dict[str, list[WebSocket]] = {}

    async def connect(self, room: str, ws: WebSocket) -> None:
        """Accept and store a new WebSocket connection for a room."""
        await ws.accept()
        self.rooms.setdefault(room, []).append(ws)

    def disconnect(self, room: str, ws: WebSocket) -> None:
        """Remove a WebSocket connection."""
        connections = self.rooms.get(room, [])
        if ws in connections:
            connections.remove(ws)
        if not connections:
            self.rooms.pop(room, None)

    def connection_count(self, room: str) -> int:
        """Number of clients connected to a room."""
        return len(self.rooms.get(room, []))

    async def broadcast(self, room: str, message: dict[str, Any]) -> None:
        """Send a sync message to all clients connected to a room."""
        dead_connections: list[WebSocket] = []

        for conn in list(self.rooms.get(room, [])):
            try:
                await conn.send_json(message)
            except Exception as e:
                logger.warning(f"[{room}] Dropping client after failed send: {e}")
                dead_connections.append(conn)

        for conn in dead_connections:
            self.disconnect(room, conn)


# Singleton instance
sync_manager = SyncManager()

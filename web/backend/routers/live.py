import json
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from loguru import logger

from chat_jukebox.router import Event, EventType

from ..deps import get_registry
from ..rooms import RoomRegistry
from ..sync_manager import sync_manager

router = APIRouter()


def parse_signal(message: str) -> str:
    """Client signals arrive as plain text ("songEnded") or JSON {"message": ...}."""
    if not message.lstrip().startswith("{"):
        return message.strip()

    data = json.loads(message)
    return str(data.get("message", ""))


@router.websocket("/ws/rooms/{room}")
async def room_websocket(
    websocket: WebSocket,
    room: str,
    registry: RoomRegistry = Depends(get_registry),
):
    """WebSocket endpoint for real-time player synchronization."""
    await registry.get_room(room)
    await sync_manager.connect(room, websocket)

    try:
        while True:
            message = await websocket.receive_text()
            try:
                signal = parse_signal(message)
            except json.JSONDecodeError:
                logger.warning(f"Invalid JSON from WebSocket: {message}")
                continue

            handled, _ = await registry.handle(room, Event(EventType.SIGNAL, text=signal))
            if not handled:
                logger.debug(f"[{room}] Unknown client signal: {signal!r}")

    except WebSocketDisconnect:
        logger.debug(f"[{room}] Client disconnected")
    finally:
        sync_manager.disconnect(room, websocket)

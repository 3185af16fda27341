"""Chat router: feeds room chat messages into the command dispatcher."""

from fastapi import APIRouter, Depends
from loguru import logger

from chat_jukebox.domain.playback import get_player, get_playlist
from chat_jukebox.router import Event, EventType

from ..deps import get_registry
from ..rooms import RoomRegistry
from ..schemas import ChatMessageRequest, ChatMessageResponse, PlayerView

router = APIRouter()


@router.post("/rooms/{room}/messages", response_model=ChatMessageResponse)
async def post_message(
    room: str,
    request: ChatMessageRequest,
    registry: RoomRegistry = Depends(get_registry),
):
    """Handle one chat message and return whatever the bot says in reply."""
    event = Event(EventType.MESSAGE, text=request.text, username=request.username)
    handled, replies = await registry.handle(room, event)

    if handled:
        logger.debug(f"[{room}] {request.username}: {request.text!r} -> {len(replies)} reply(s)")

    return ChatMessageResponse(handled=handled, replies=replies)


@router.get("/rooms/{room}/player", response_model=PlayerView)
async def get_player_view(room: str, registry: RoomRegistry = Depends(get_registry)):
    """Current player state and playlist for a room."""
    ctx = await registry.get_room(room)
    player = get_player(ctx.store, ctx.room)
    playlist = get_playlist(ctx.store, ctx.room)
    return PlayerView(
        player=player.model_dump(by_alias=True),
        playlist=[song.model_dump(by_alias=True) for song in playlist],
    )

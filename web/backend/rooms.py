"""Room registry: one RoomContext per active room."""

import asyncio
from dataclasses import replace
from typing import Optional

from loguru import logger

from chat_jukebox.context import MEMBER_ROLE, MODERATOR_ROLE, RoomContext, SyncBroadcaster
from chat_jukebox.core.config import Config
from chat_jukebox.domain.catalog import SongCatalog
from chat_jukebox.domain.store import SettingsStore
from chat_jukebox.router import Event, EventType, dispatch


class RoomChat:
    """Chat client for one inbound request.

    Outgoing messages are collected and returned in the HTTP response;
    `to` is None for messages addressed to the whole room.
    """

    def __init__(self, moderators: list[str]):
        self.moderators = set(moderators)
        self.messages: list[dict[str, Optional[str]]] = []

    def get_user_role(self, username: str) -> str:
        return MODERATOR_ROLE if username in self.moderators else MEMBER_ROLE

    async def send_message(self, text: str) -> None:
        self.messages.append({"to": None, "text": text})

    async def reply_to(self, username: str, text: str) -> None:
        self.messages.append({"to": username, "text": text})


class RoomRegistry:
    """Creates room contexts on first use and fires their startup event once."""

    def __init__(
        self,
        config: Config,
        store: SettingsStore,
        catalog: SongCatalog,
        broadcaster: SyncBroadcaster,
    ):
        self.config = config
        self.store = store
        self.catalog = catalog
        self.broadcaster = broadcaster
        self.rooms: dict[str, RoomContext] = {}
        self._activation_lock = asyncio.Lock()

    def new_chat(self) -> RoomChat:
        return RoomChat(self.config.rooms.moderators)

    async def get_room(self, room: str) -> RoomContext:
        """Return the room's context, activating the room if needed."""
        async with self._activation_lock:
            ctx = self.rooms.get(room)
            if ctx is None:
                ctx = RoomContext(
                    room=room,
                    store=self.store,
                    chat=self.new_chat(),
                    catalog=self.catalog,
                    broadcaster=self.broadcaster,
                    config=self.config,
                )
                await dispatch(ctx, Event(EventType.STARTUP))
                self.rooms[room] = ctx
                logger.info(f"Room activated: {room}")
        return ctx

    async def handle(self, room: str, event: Event) -> tuple[bool, list[dict]]:
        """Dispatch an event in a room with a fresh chat client.

        Returns:
            (handled, messages the bot sent while handling it)
        """
        ctx = await self.get_room(room)
        chat = self.new_chat()
        # Same room lock and collaborators, request-scoped chat
        handled = await dispatch(replace(ctx, chat=chat), event)
        return handled, chat.messages

"""Room context for explicit state passing.

Every playback operation receives a RoomContext instead of reaching for
global settings. The context bundles the room's collaborators: the settings
store, the chat client used for replies, the song catalog and the sync
broadcaster, plus the lock that serializes state changes for the room.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, Protocol

from chat_jukebox.core.config import Config
from chat_jukebox.domain.catalog import SongCatalog
from chat_jukebox.domain.store import SettingsStore


MODERATOR_ROLE = "moderator"
MEMBER_ROLE = "member"


class ChatClient(Protocol):
    """Chat side of a room: role lookup and outgoing messages."""

    def get_user_role(self, username: str) -> str: ...

    async def send_message(self, text: str) -> None: ...

    async def reply_to(self, username: str, text: str) -> None: ...


class SyncBroadcaster(Protocol):
    """Fire-and-forget delivery of sync messages to every client in a room."""

    async def broadcast(self, room: str, message: Dict[str, Any]) -> None: ...


@dataclass
class RoomContext:
    """Per-room handle passed to every playback operation.

    Attributes:
        room: Room identifier, also the settings namespace
        store: Key-value settings storage
        chat: Chat client for replies and role lookup
        catalog: Song metadata lookup
        broadcaster: Sync message fan-out
        config: Application configuration
        lock: Serializes load-modify-save sequences for this room
    """

    room: str
    store: SettingsStore
    chat: ChatClient
    catalog: SongCatalog
    broadcaster: SyncBroadcaster
    config: Config = field(default_factory=Config)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    def is_moderator(self, username: str) -> bool:
        """Check whether a user holds the moderator role in this room."""
        return self.chat.get_user_role(username) == MODERATOR_ROLE

    async def broadcast(self, message: Dict[str, Any]) -> None:
        """Send a sync message to every client in this room."""
        await self.broadcaster.broadcast(self.room, message)

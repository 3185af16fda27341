"""Shared fixtures: an in-memory room with fake chat, catalog and broadcaster."""

from typing import Optional

import pytest

from chat_jukebox.context import MEMBER_ROLE, MODERATOR_ROLE, RoomContext
from chat_jukebox.core.config import Config
from chat_jukebox.domain.catalog import VideoMetadata
from chat_jukebox.domain.playback import PlayerState, SongEntry, set_player, set_playlist
from chat_jukebox.domain.store import MemorySettingsStore


ROOM = "lobby"
MODERATOR = "mod_mia"
MEMBER = "member_max"


class FakeChat:
    """Records outgoing messages; roles come from a fixed moderator set."""

    def __init__(self, moderators=(MODERATOR,)):
        self.moderators = set(moderators)
        self.messages: list[str] = []
        self.replies: list[tuple[str, str]] = []

    def get_user_role(self, username: str) -> str:
        return MODERATOR_ROLE if username in self.moderators else MEMBER_ROLE

    async def send_message(self, text: str) -> None:
        self.messages.append(text)

    async def reply_to(self, username: str, text: str) -> None:
        self.replies.append((username, text))


class FakeCatalog:
    """Returns canned titles by video ID; unknown IDs are not found."""

    def __init__(self, titles: Optional[dict] = None, error: Optional[Exception] = None):
        self.titles = titles or {}
        self.error = error
        self.lookups: list[str] = []

    async def lookup(self, video_id: str) -> list[VideoMetadata]:
        self.lookups.append(video_id)
        if self.error is not None:
            raise self.error
        if video_id not in self.titles:
            return []
        return [VideoMetadata(video_id=video_id, title=self.titles[video_id])]


class RecordingBroadcaster:
    def __init__(self):
        self.sent: list[tuple[str, dict]] = []

    async def broadcast(self, room: str, message: dict) -> None:
        self.sent.append((room, message))

    @property
    def messages(self) -> list[dict]:
        return [message for _, message in self.sent]


def make_song(external_id: str, title: Optional[str] = None) -> SongEntry:
    return SongEntry(
        external_id=external_id,
        title=title or f"Song {external_id}",
        requested_by=MEMBER,
        requested_at=1700000000.0,
    )


@pytest.fixture
def store() -> MemorySettingsStore:
    return MemorySettingsStore()


@pytest.fixture
def chat() -> FakeChat:
    return FakeChat()


@pytest.fixture
def catalog() -> FakeCatalog:
    return FakeCatalog({"dQw4w9WgXcQ": "Never Gonna Give You Up"})


@pytest.fixture
def broadcaster() -> RecordingBroadcaster:
    return RecordingBroadcaster()


@pytest.fixture
def ctx(store, chat, catalog, broadcaster) -> RoomContext:
    return RoomContext(
        room=ROOM,
        store=store,
        chat=chat,
        catalog=catalog,
        broadcaster=broadcaster,
        config=Config(),
    )


@pytest.fixture
def seed_room(store):
    """Write a playlist of the given IDs and a player state into the room."""

    def seed(ids, current_index=0, playing=False, started=False):
        playlist = [make_song(external_id) for external_id in ids]
        set_playlist(store, ROOM, playlist)
        set_player(
            store,
            ROOM,
            PlayerState(current_index=current_index, playing=playing, started=started),
        )
        return playlist

    return seed


@pytest.fixture
def anyio_backend():
    return "asyncio"

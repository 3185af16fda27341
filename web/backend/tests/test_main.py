"""Tests for FastAPI application."""

import os
import tempfile

# Keep log and database files out of the user's data dir
os.environ["XDG_DATA_HOME"] = tempfile.mkdtemp(prefix="chat-jukebox-test-")

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from chat_jukebox.core.config import Config, RoomsConfig
from chat_jukebox.domain.catalog import VideoMetadata
from chat_jukebox.domain.playback import (
    PlayerState,
    SongEntry,
    get_player,
    get_playlist,
    set_player,
    set_playlist,
)
from chat_jukebox.domain.store import MemorySettingsStore
from web.backend.deps import get_registry
from web.backend.main import app
from web.backend.rooms import RoomRegistry
from web.backend.sync_manager import sync_manager


@pytest.fixture
def store():
    return MemorySettingsStore()


@pytest.fixture
def catalog():
    catalog = AsyncMock()
    catalog.lookup.return_value = [VideoMetadata(video_id="dQw4w9WgXcQ", title="Never Gonna Give You Up")]
    return catalog


@pytest.fixture
def client(store, catalog):
    registry = RoomRegistry(
        config=Config(rooms=RoomsConfig(moderators=["mia"])),
        store=store,
        catalog=catalog,
        broadcaster=sync_manager,
    )
    app.dependency_overrides[get_registry] = lambda: registry
    yield TestClient(app)
    app.dependency_overrides.clear()


def _song(external_id: str) -> SongEntry:
    return SongEntry(
        external_id=external_id,
        title=f"Song {external_id}",
        requested_by="max",
        requested_at=1700000000.0,
    )


def test_health_endpoint(client):
    """Test health check endpoint returns 200."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_cors_headers(client):
    """Test CORS headers are present."""
    response = client.options(
        "/health",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "GET",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:5173"


def test_song_command_replies_to_room(client):
    response = client.post("/api/rooms/lobby/messages", json={"username": "max", "text": "!song"})

    assert response.status_code == 200
    assert response.json() == {
        "handled": True,
        "replies": [{"to": None, "text": "No song currently playing."}],
    }


def test_unknown_text_is_not_handled(client):
    response = client.post("/api/rooms/lobby/messages", json={"username": "max", "text": "hi all"})

    assert response.json() == {"handled": False, "replies": []}


def test_request_adds_song(client, store, catalog):
    response = client.post(
        "/api/rooms/lobby/messages",
        json={"username": "max", "text": "!request https://youtu.be/dQw4w9WgXcQ"},
    )

    assert response.json()["replies"] == [
        {"to": "max", "text": "Your song has been added to the playlist!"}
    ]
    catalog.lookup.assert_awaited_once_with("dQw4w9WgXcQ")
    assert [s.title for s in get_playlist(store, "lobby")] == ["Never Gonna Give You Up"]


def test_moderator_starts_player(client, store):
    client.post("/api/rooms/lobby/messages", json={"username": "max", "text": "!song"})
    set_playlist(store, "lobby", [_song("a")])

    response = client.post(
        "/api/rooms/lobby/messages", json={"username": "mia", "text": "!startplayer"}
    )

    assert response.json() == {"handled": True, "replies": []}
    assert get_player(store, "lobby") == PlayerState(current_index=0, playing=True, started=True)


def test_member_cannot_start_player(client, store):
    client.post("/api/rooms/lobby/messages", json={"username": "max", "text": "!startplayer"})

    assert get_player(store, "lobby") == PlayerState()


def test_room_activation_resets_player(client, store):
    set_player(store, "lobby", PlayerState(current_index=0, playing=True, started=True))

    client.post("/api/rooms/lobby/messages", json={"username": "max", "text": "!song"})

    assert get_player(store, "lobby") == PlayerState()


def test_player_view(client, store):
    client.get("/api/rooms/lobby/player")
    set_playlist(store, "lobby", [_song("a"), _song("b")])

    response = client.get("/api/rooms/lobby/player")

    assert response.status_code == 200
    body = response.json()
    assert body["player"] == {"currentIndex": 0, "playing": False, "started": False}
    assert [song["externalId"] for song in body["playlist"]] == ["a", "b"]


def test_empty_username_rejected(client):
    response = client.post("/api/rooms/lobby/messages", json={"username": "", "text": "!song"})
    assert response.status_code == 422


def test_song_ended_signal_skips_and_broadcasts(client, store):
    with client.websocket_connect("/ws/rooms/lobby") as ws:
        # Room is active now; set up a playing player
        set_playlist(store, "lobby", [_song("a"), _song("b")])
        set_player(store, "lobby", PlayerState(current_index=0, playing=True, started=True))

        ws.send_text("songEnded")
        assert ws.receive_json() == {"message": "skip", "externalID": "b"}

        ws.send_text('{"message": "songEnded"}')
        assert ws.receive_json() == {"message": "skip", "externalID": "a"}

    assert get_player(store, "lobby").current_index == 0

"""
Player state and playlist persistence for Chat Jukebox

Loads and saves a room's player and playlist through the settings store, and
implements the circular cursor shared by skipping and the upcoming preview.
"""

from typing import List, Optional

from loguru import logger

from chat_jukebox.domain.store import SettingsStore

from .models import PlayerState, SongEntry


PLAYER_KEY = "player"
PLAYLIST_KEY = "playlist"


def next_index(current: int, length: int) -> int:
    """
    Advance the cursor one position, wrapping to the start.

    Args:
        current: Current playlist index
        length: Playlist length

    Returns:
        (current + 1) mod length, or 0 for an empty playlist
    """
    if length <= 0:
        return 0
    return (current + 1) % length


def upcoming_indices(current: int, length: int, count: int) -> List[int]:
    """
    Indices that repeated skips would visit, in order.

    The walk starts one past the current index and stops before coming back
    to it, so the current song is never listed.

    Args:
        current: Current playlist index
        length: Playlist length
        count: Maximum number of indices to return

    Returns:
        min(count, length - 1) indices
    """
    indices = []
    index = current
    # length - 1, not length: the current song is never listed, even when
    # count covers the whole playlist
    for _ in range(min(count, length - 1)):
        index = next_index(index, length)
        indices.append(index)
    return indices


def get_player(store: SettingsStore, room: str) -> PlayerState:
    """Load a room's player state, defaulting when nothing is stored."""
    data = store.get(room, PLAYER_KEY)
    if data is None:
        return PlayerState()
    return PlayerState.model_validate(data)


def set_player(store: SettingsStore, room: str, player: PlayerState) -> None:
    """Persist a room's player state."""
    store.set(room, PLAYER_KEY, player.model_dump(by_alias=True))
    logger.debug(
        f"[{room}] player saved: index={player.current_index} "
        f"playing={player.playing} started={player.started}"
    )


def get_playlist(store: SettingsStore, room: str) -> List[SongEntry]:
    """Load a room's playlist in playback order."""
    data = store.get(room, PLAYLIST_KEY) or []
    return [SongEntry.model_validate(item) for item in data]


def set_playlist(store: SettingsStore, room: str, playlist: List[SongEntry]) -> None:
    """Persist a room's playlist."""
    store.set(room, PLAYLIST_KEY, [song.model_dump(by_alias=True) for song in playlist])


def current_song(player: PlayerState, playlist: List[SongEntry]) -> Optional[SongEntry]:
    """
    Song under the cursor, or None for an empty playlist.

    A stored index past the end (stale state) wraps instead of failing.
    """
    if not playlist:
        return None
    return playlist[player.current_index % len(playlist)]

"""Playback domain - shared room player state and playlist.

This domain handles:
- Player state (cursor, playing and started flags)
- The append-only room playlist
- Circular cursor movement
- Sync messages for client players
"""

from .models import PlayerState, SongEntry, SyncMessage
from .state import (
    PLAYER_KEY,
    PLAYLIST_KEY,
    current_song,
    get_player,
    get_playlist,
    next_index,
    set_player,
    set_playlist,
    upcoming_indices,
)

__all__ = [
    "PlayerState",
    "SongEntry",
    "SyncMessage",
    "PLAYER_KEY",
    "PLAYLIST_KEY",
    "current_song",
    "get_player",
    "get_playlist",
    "next_index",
    "set_player",
    "set_playlist",
    "upcoming_indices",
]

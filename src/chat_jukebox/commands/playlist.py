"""
Room playlist command handlers for Chat Jukebox.

Handles: startup, request, song/track/music, upcoming, skip, songEnded,
pause, play, startplayer, help

Moderator-only commands that fail the role or started check are silently
ignored: no reply, no state change, no broadcast.
"""

import time
from typing import List, Optional

from loguru import logger

from chat_jukebox.context import RoomContext
from chat_jukebox.domain.catalog import (
    CatalogLookupError,
    SongNotFoundError,
    extract_video_id,
)
from chat_jukebox.domain.playback import (
    PlayerState,
    SongEntry,
    SyncMessage,
    current_song,
    get_player,
    get_playlist,
    next_index,
    set_player,
    set_playlist,
    upcoming_indices,
)


HELP_TEXT = """Song commands:
!song / !track / !music - current song
!request <url> - request a YouTube video to be played
!upcoming - list the next songs
!skip - skip the current song (moderators)
!pause - pause the player (moderators)
!play - resume the player (moderators)
!startplayer - start the player (moderators)"""

SONG_ADDED_REPLY = "Your song has been added to the playlist!"
SONG_NOT_FOUND_REPLY = "Your song could not be found."
LOOKUP_FAILED_REPLY = "Your song could not be requested right now. Please try again later."
NO_SONG_PLAYING = "No song currently playing."
NO_UPCOMING_SONGS = "No upcoming songs."


async def initialize(ctx: RoomContext) -> PlayerState:
    """Reset the room's player to its startup state."""
    async with ctx.lock:
        player = PlayerState()
        set_player(ctx.store, ctx.room, player)

    logger.info(f"[{ctx.room}] Player initialized")
    return player


async def _resolve_song(ctx: RoomContext, username: str, video_id: str) -> SongEntry:
    """Look up a video and build its playlist entry.

    Raises:
        SongNotFoundError: If the catalog has no such video
        CatalogLookupError: If the lookup fails
    """
    items = await ctx.catalog.lookup(video_id)
    if not items:
        raise SongNotFoundError(video_id)

    return SongEntry(
        external_id=video_id,
        title=items[0].title,
        requested_by=username,
        requested_at=time.time(),
    )


async def request_song(ctx: RoomContext, username: str, url: str) -> Optional[SongEntry]:
    """
    Append a requested song to the end of the playlist.

    Queueing never touches the player or interrupts the current song.

    Args:
        ctx: Room context
        username: Requesting user
        url: YouTube URL (or bare video ID)

    Returns:
        The new playlist entry, or None if the song could not be added
    """
    video_id = extract_video_id(url)

    # The lookup runs without the room lock held
    try:
        song = await _resolve_song(ctx, username, video_id)
    except SongNotFoundError:
        logger.info(f"[{ctx.room}] Requested video not found: {video_id} (by {username})")
        await ctx.chat.reply_to(username, SONG_NOT_FOUND_REPLY)
        return None
    except CatalogLookupError as e:
        logger.error(f"[{ctx.room}] Error requesting YouTube data for {video_id}: {e}")
        await ctx.chat.reply_to(username, LOOKUP_FAILED_REPLY)
        return None

    async with ctx.lock:
        playlist = get_playlist(ctx.store, ctx.room)
        playlist.append(song)
        set_playlist(ctx.store, ctx.room, playlist)

    logger.info(f"Song: {song.title} has been added to the playlist by {username}")
    await ctx.chat.reply_to(username, SONG_ADDED_REPLY)
    return song


async def status(ctx: RoomContext) -> str:
    """Tell the room which song is playing."""
    player = get_player(ctx.store, ctx.room)
    playlist = get_playlist(ctx.store, ctx.room)

    song = current_song(player, playlist)
    if player.started and player.playing and song is not None:
        text = f"Current song: {song.title}"
    else:
        # Player is paused, never started or the playlist is empty
        text = NO_SONG_PLAYING

    await ctx.chat.send_message(text)
    return text


async def upcoming(ctx: RoomContext, count: Optional[int] = None) -> List[str]:
    """
    List the titles that the next skips will play, in order.

    Args:
        ctx: Room context
        count: Maximum number of titles (default: config player.upcoming_count)

    Returns:
        Upcoming titles, wrapping past the end of the playlist
    """
    if count is None:
        count = ctx.config.player.upcoming_count

    player = get_player(ctx.store, ctx.room)
    playlist = get_playlist(ctx.store, ctx.room)

    titles = [
        playlist[i].title
        for i in upcoming_indices(player.current_index, len(playlist), count)
    ]

    if titles:
        await ctx.chat.send_message(f"Next {len(titles)} songs:\n" + "\n".join(titles))
    else:
        await ctx.chat.send_message(NO_UPCOMING_SONGS)
    return titles


async def _advance(ctx: RoomContext, player: PlayerState) -> PlayerState:
    """Move the cursor one song forward. Caller holds the room lock."""
    playlist = get_playlist(ctx.store, ctx.room)

    player = player.model_copy(
        update={"current_index": next_index(player.current_index, len(playlist))}
    )
    set_player(ctx.store, ctx.room, player)

    song = current_song(player, playlist)
    if player.playing and song is not None:
        await ctx.broadcast(
            SyncMessage(message="skip", external_id=song.external_id).to_payload()
        )

    logger.info(f"[{ctx.room}] Skipped to index {player.current_index}")
    return player


async def skip_song(ctx: RoomContext) -> PlayerState:
    """
    Advance to the next song, wrapping to the start of the playlist.

    Used directly when a client reports the song ended; no role check.

    Returns:
        Updated player state
    """
    async with ctx.lock:
        return await _advance(ctx, get_player(ctx.store, ctx.room))


def _can_control(ctx: RoomContext, username: str, player: PlayerState) -> bool:
    """Moderator role and a started player are required for playback control."""
    if not ctx.is_moderator(username):
        logger.debug(f"[{ctx.room}] Ignoring playback command from non-moderator {username}")
        return False
    if not player.started:
        logger.debug(f"[{ctx.room}] Ignoring playback command, player not started")
        return False
    return True


async def skip_command(ctx: RoomContext, username: str) -> Optional[PlayerState]:
    """Moderator skip. Silently ignored unless the caller may control playback."""
    async with ctx.lock:
        player = get_player(ctx.store, ctx.room)
        if not _can_control(ctx, username, player):
            return None
        return await _advance(ctx, player)


async def _set_playing(ctx: RoomContext, username: str, playing: bool) -> Optional[PlayerState]:
    async with ctx.lock:
        player = get_player(ctx.store, ctx.room)
        if not _can_control(ctx, username, player):
            return None

        player = player.model_copy(update={"playing": playing})
        set_player(ctx.store, ctx.room, player)
        await ctx.broadcast(SyncMessage(message="play" if playing else "pause").to_payload())

    logger.info(f"[{ctx.room}] Player {'resumed' if playing else 'paused'} by {username}")
    return player


async def pause(ctx: RoomContext, username: str) -> Optional[PlayerState]:
    """Pause every client player in the room."""
    return await _set_playing(ctx, username, False)


async def play(ctx: RoomContext, username: str) -> Optional[PlayerState]:
    """Resume every client player in the room."""
    return await _set_playing(ctx, username, True)


async def start_player(ctx: RoomContext, username: str) -> Optional[PlayerState]:
    """
    Activate the room player.

    Only the moderator role is required; the player need not be started.
    When there is something to play, clients are pointed at the current song.
    """
    if not ctx.is_moderator(username):
        logger.debug(f"[{ctx.room}] Ignoring startplayer from non-moderator {username}")
        return None

    async with ctx.lock:
        player = get_player(ctx.store, ctx.room)
        playlist = get_playlist(ctx.store, ctx.room)

        player = player.model_copy(update={"started": True, "playing": True})
        set_player(ctx.store, ctx.room, player)

        song = current_song(player, playlist)
        if song is not None:
            await ctx.broadcast(
                SyncMessage(message="skip", external_id=song.external_id).to_payload()
            )

    logger.info(f"[{ctx.room}] Player started by {username}")
    return player


async def show_help(ctx: RoomContext) -> str:
    """List the song commands."""
    await ctx.chat.send_message(HELP_TEXT)
    return HELP_TEXT

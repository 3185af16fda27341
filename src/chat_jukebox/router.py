"""
Command routing for Chat Jukebox.

Routes room events (chat messages, client signals and room startup) to the
playlist command handlers. Routes are checked in table order and the first
match wins; events that match nothing are ignored.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, List, Optional, Tuple

from loguru import logger

from chat_jukebox.commands import playlist
from chat_jukebox.context import RoomContext


class EventType(str, Enum):
    """Kinds of events a room receives."""

    STARTUP = "startup"  # Room activation, no payload
    MESSAGE = "message"  # Chat text from a user
    SIGNAL = "websocket"  # Signal from a client player, e.g. songEnded


@dataclass(frozen=True)
class Event:
    """An inbound room event."""

    type: EventType
    text: str = ""
    username: Optional[str] = None


Action = Callable[[RoomContext, Event, Optional[re.Match]], Awaitable[object]]


@dataclass(frozen=True)
class Route:
    """One entry of the command table.

    Attributes:
        types: Event types this route accepts
        pattern: Matched against the event text; None matches every event
        action: Handler invoked with the room context, event and match
    """

    types: Tuple[EventType, ...]
    pattern: Optional[re.Pattern]
    action: Action


def _command(name: str) -> re.Pattern:
    """Exact chat command with a ! or / prefix."""
    return re.compile(rf"^(!|/){name}$")


REQUEST_PATTERN = re.compile(r"^(!|/)request\s(.+)$")


ROUTES: List[Route] = [
    # Reset the player when the room comes up
    Route(
        types=(EventType.STARTUP,),
        pattern=None,
        action=lambda ctx, event, match: playlist.initialize(ctx),
    ),
    # A client finished the song; no role check on this path
    Route(
        types=(EventType.SIGNAL,),
        pattern=re.compile(r"^songEnded$"),
        action=lambda ctx, event, match: playlist.skip_song(ctx),
    ),
    Route(
        types=(EventType.MESSAGE,),
        pattern=_command("(song|track|music)"),
        action=lambda ctx, event, match: playlist.status(ctx),
    ),
    Route(
        types=(EventType.MESSAGE,),
        pattern=REQUEST_PATTERN,
        action=lambda ctx, event, match: playlist.request_song(
            ctx, event.username, match.group(2)
        ),
    ),
    Route(
        types=(EventType.MESSAGE,),
        pattern=_command("skip"),
        action=lambda ctx, event, match: playlist.skip_command(ctx, event.username),
    ),
    Route(
        types=(EventType.MESSAGE,),
        pattern=_command("pause"),
        action=lambda ctx, event, match: playlist.pause(ctx, event.username),
    ),
    Route(
        types=(EventType.MESSAGE,),
        pattern=_command("play"),
        action=lambda ctx, event, match: playlist.play(ctx, event.username),
    ),
    Route(
        types=(EventType.MESSAGE,),
        pattern=_command("startplayer"),
        action=lambda ctx, event, match: playlist.start_player(ctx, event.username),
    ),
    Route(
        types=(EventType.MESSAGE,),
        pattern=_command("upcoming"),
        action=lambda ctx, event, match: playlist.upcoming(ctx),
    ),
    Route(
        types=(EventType.MESSAGE,),
        pattern=_command("(help|commands)"),
        action=lambda ctx, event, match: playlist.show_help(ctx),
    ),
]


def match_route(
    event: Event, routes: Optional[List[Route]] = None
) -> Optional[Tuple[Route, Optional[re.Match]]]:
    """
    Find the first route accepting an event.

    Args:
        event: Inbound event
        routes: Route table (default: ROUTES)

    Returns:
        (route, match) for the first matching route, or None
    """
    if not isinstance(event.type, EventType):
        raise ValueError(f"Unknown event type: {event.type!r}")

    for route in ROUTES if routes is None else routes:
        if event.type not in route.types:
            continue
        if route.pattern is None:
            return route, None
        match = route.pattern.fullmatch(event.text)
        if match:
            return route, match
    return None


async def dispatch(
    ctx: RoomContext, event: Event, routes: Optional[List[Route]] = None
) -> bool:
    """
    Run the handler for an event.

    Args:
        ctx: Room context
        event: Inbound event
        routes: Route table (default: ROUTES)

    Returns:
        True if a route handled the event, False if nothing matched
    """
    found = match_route(event, routes)
    if found is None:
        return False

    route, match = found
    pattern = route.pattern.pattern if route.pattern else "<any>"
    logger.debug(f"[{ctx.room}] {event.type.value} event matched {pattern}")
    await route.action(ctx, event, match)
    return True

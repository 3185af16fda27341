from pydantic import BaseModel, Field
from typing import Optional


class ChatMessageRequest(BaseModel):
    username: str = Field(min_length=1)
    text: str


class ChatReply(BaseModel):
    to: Optional[str] = None  # None = whole room
    text: str


class ChatMessageResponse(BaseModel):
    handled: bool
    replies: list[ChatReply]


class PlayerView(BaseModel):
    """Read-only snapshot of a room's player and playlist (camelCase keys)."""

    player: dict
    playlist: list[dict]

"""
Playback domain models.

Contains the persisted player state, playlist entries and the sync messages
broadcast to every client in a room.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SongEntry(BaseModel):
    """A song queued in a room's playlist.

    Created once the catalog lookup resolves and never changed afterwards.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    external_id: str  # YouTube video ID
    title: str
    requested_by: str
    requested_at: float  # Unix timestamp


class PlayerState(BaseModel):
    """Per-room playback position and flags."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    current_index: int = Field(default=0, ge=0)
    playing: bool = False  # Meaningless until started
    started: bool = False  # Set once a moderator starts the player


class SyncMessage(BaseModel):
    """Instruction broadcast to every client player in a room."""

    message: Literal["skip", "pause", "play"]
    external_id: Optional[str] = Field(default=None, alias="externalID")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_payload(self) -> dict:
        """Wire format: {"message": ..., "externalID": ...} without unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


"""
Song catalog for Chat Jukebox.

Resolves requested YouTube URLs to video metadata.
"""

from typing import List, Protocol

from .exceptions import (
    CatalogError,
    CatalogLookupError,
    MissingAPIKeyError,
    SongNotFoundError,
)
from .youtube import VideoMetadata, YouTubeCatalog, extract_video_id


class SongCatalog(Protocol):
    """Anything that can resolve a video ID to metadata."""

    async def lookup(self, video_id: str) -> List[VideoMetadata]: ...


__all__ = [
    "SongCatalog",
    "CatalogError",
    "CatalogLookupError",
    "MissingAPIKeyError",
    "SongNotFoundError",
    "VideoMetadata",
    "YouTubeCatalog",
    "extract_video_id",
]

"""YouTube song lookup using the YouTube Data API."""

import asyncio
import re
from typing import List, Optional

import requests
from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from chat_jukebox.core.config import YOUTUBE_API_URL, YouTubeConfig

from .exceptions import CatalogLookupError, MissingAPIKeyError


# youtube.com/watch?v=ID, youtu.be/ID, youtube.com/embed/ID, youtube.com/v/ID, ...
YOUTUBE_ID_PATTERN = re.compile(
    r"(youtu(?:\.be|be\.com)/(?:.*v(?:/|=)|(?:.*/)?)([\w'-]+))", re.IGNORECASE
)


class VideoMetadata(BaseModel):
    """One item of a catalog lookup result."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    video_id: str
    title: str
    channel_title: Optional[str] = None


def extract_video_id(url: str) -> str:
    """Extract the YouTube video ID from a requested URL.

    Handles the common URL formats:
    - Standard: youtube.com/watch?v=ID
    - Short: youtu.be/ID
    - Embed: youtube.com/embed/ID
    - Old style: youtube.com/v/ID

    Anything that is not a YouTube URL is taken to be the ID itself.

    Args:
        url: URL (or bare ID) from the chat request

    Returns:
        Video ID
    """
    url = url.strip()
    match = YOUTUBE_ID_PATTERN.search(url)
    if match:
        return match.group(2)
    return url


class YouTubeCatalog:
    """Looks up video metadata by ID.

    The HTTP call is blocking, so it runs in a worker thread and the event
    loop stays free while it is in flight.
    """

    def __init__(
        self,
        api_key: Optional[str],
        api_url: str = YOUTUBE_API_URL,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config: YouTubeConfig) -> "YouTubeCatalog":
        return cls(
            api_key=config.api_key,
            api_url=config.api_url,
            timeout=config.timeout_seconds,
        )

    async def lookup(self, video_id: str) -> List[VideoMetadata]:
        """Look up a video.

        Args:
            video_id: YouTube video ID

        Returns:
            Matching videos (empty when the ID is unknown)

        Raises:
            CatalogLookupError: If the API call fails
        """
        return await asyncio.to_thread(self._lookup_sync, video_id)

    def _lookup_sync(self, video_id: str) -> List[VideoMetadata]:
        if not self.api_key:
            raise MissingAPIKeyError("YouTube API key is not configured")

        params = {"id": video_id, "part": "snippet", "key": self.api_key}

        try:
            response = self.session.get(self.api_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise CatalogLookupError(f"YouTube lookup failed for {video_id!r}: {e}") from e
        except ValueError as e:
            raise CatalogLookupError(f"Invalid YouTube response for {video_id!r}: {e}") from e

        try:
            items = self._parse_items(video_id, data)
        except (AttributeError, TypeError, ValidationError) as e:
            raise CatalogLookupError(f"Malformed YouTube response for {video_id!r}: {e}") from e

        logger.debug(f"YouTube lookup {video_id!r}: {len(items)} item(s)")
        return items

    def _parse_items(self, video_id: str, data: dict) -> List[VideoMetadata]:
        items = []
        for item in data.get("items", []):
            snippet = item.get("snippet") or {}
            if "title" not in snippet:
                logger.warning(f"YouTube item without title skipped: {item.get('id')}")
                continue
            items.append(
                VideoMetadata(
                    video_id=item.get("id", video_id),
                    title=snippet["title"],
                    channel_title=snippet.get("channelTitle"),
                )
            )
        return items

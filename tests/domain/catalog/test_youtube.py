"""Tests for the YouTube song lookup."""

from unittest.mock import MagicMock

import pytest
import requests

from chat_jukebox.core.config import YouTubeConfig
from chat_jukebox.domain.catalog import (
    CatalogLookupError,
    MissingAPIKeyError,
    YouTubeCatalog,
    extract_video_id,
)


class TestExtractVideoId:
    @pytest.mark.parametrize(
        "url",
        [
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            "https://youtube.com/watch?v=dQw4w9WgXcQ&t=42s",
            "https://youtu.be/dQw4w9WgXcQ",
            "https://youtu.be/dQw4w9WgXcQ?si=abc",
            "https://www.youtube.com/embed/dQw4w9WgXcQ",
            "http://www.youtube.com/v/dQw4w9WgXcQ",
            "  https://m.youtube.com/watch?v=dQw4w9WgXcQ  ",
        ],
    )
    def test_extracts_id_from_youtube_urls(self, url: str) -> None:
        assert extract_video_id(url) == "dQw4w9WgXcQ"

    def test_bare_id_is_used_as_is(self) -> None:
        assert extract_video_id("dQw4w9WgXcQ") == "dQw4w9WgXcQ"


def _catalog_with_response(payload=None, error=None) -> YouTubeCatalog:
    session = MagicMock()
    response = MagicMock()
    if error is not None:
        session.get.side_effect = error
    else:
        response.json.return_value = payload
    session.get.return_value = response
    return YouTubeCatalog(api_key="test-key", session=session, timeout=3)


@pytest.mark.anyio
class TestYouTubeCatalog:
    async def test_returns_titles(self) -> None:
        catalog = _catalog_with_response(
            {
                "items": [
                    {
                        "id": "dQw4w9WgXcQ",
                        "snippet": {
                            "title": "Never Gonna Give You Up",
                            "channelTitle": "Rick Astley",
                        },
                    }
                ]
            }
        )

        items = await catalog.lookup("dQw4w9WgXcQ")

        assert len(items) == 1
        assert items[0].title == "Never Gonna Give You Up"
        assert items[0].channel_title == "Rick Astley"

    async def test_sends_id_and_key(self) -> None:
        catalog = _catalog_with_response({"items": []})

        await catalog.lookup("abc")

        _, kwargs = catalog.session.get.call_args
        assert kwargs["params"] == {"id": "abc", "part": "snippet", "key": "test-key"}
        assert kwargs["timeout"] == 3

    async def test_no_items_means_not_found(self) -> None:
        catalog = _catalog_with_response({"items": []})
        assert await catalog.lookup("missing") == []

    async def test_transport_error_raises_lookup_error(self) -> None:
        catalog = _catalog_with_response(error=requests.ConnectionError("offline"))

        with pytest.raises(CatalogLookupError):
            await catalog.lookup("abc")

    async def test_http_error_raises_lookup_error(self) -> None:
        catalog = _catalog_with_response({})
        catalog.session.get.return_value.raise_for_status.side_effect = requests.HTTPError(
            "403 Forbidden"
        )

        with pytest.raises(CatalogLookupError):
            await catalog.lookup("abc")

    async def test_invalid_json_raises_lookup_error(self) -> None:
        catalog = _catalog_with_response({})
        catalog.session.get.return_value.json.side_effect = ValueError("not json")

        with pytest.raises(CatalogLookupError):
            await catalog.lookup("abc")

    async def test_missing_api_key(self) -> None:
        catalog = YouTubeCatalog.from_config(YouTubeConfig(api_key=None))

        with pytest.raises(MissingAPIKeyError):
            await catalog.lookup("abc")

    @pytest.mark.parametrize(
        "payload",
        [
            ["not", "a", "dict"],
            {"items": [{"id": "abc", "snippet": {"title": None}}]},
            {"items": ["abc"]},
            {"items": 42},
        ],
    )
    async def test_malformed_response_raises_lookup_error(self, payload) -> None:
        catalog = _catalog_with_response(payload)

        with pytest.raises(CatalogLookupError):
            await catalog.lookup("abc")

"""Song catalog exceptions for error handling."""


class CatalogError(Exception):
    """Base exception for song catalog operations."""

    pass


class CatalogLookupError(CatalogError):
    """Raised when the lookup itself fails (transport, HTTP or decoding error)."""

    pass


class MissingAPIKeyError(CatalogLookupError):
    """Raised when no YouTube API key is configured."""

    pass


class SongNotFoundError(CatalogError):
    """Raised when the lookup succeeds but returns no videos."""

    def __init__(self, video_id: str, message: str = None):
        self.video_id = video_id
        super().__init__(message or f"No video found for id {video_id!r}")

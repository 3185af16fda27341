"""Chat Jukebox - shared, synchronized playlist player for chat rooms."""

__version__ = "0.1.0"

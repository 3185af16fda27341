from functools import lru_cache

from chat_jukebox.core.config import load_config, Config
from chat_jukebox.core.output import setup_logging
from chat_jukebox.domain.catalog import YouTubeCatalog
from chat_jukebox.domain.store import create_store

from .rooms import RoomRegistry
from .sync_manager import sync_manager


@lru_cache
def get_config() -> Config:
    """FastAPI dependency for configuration."""
    config = load_config()
    setup_logging(config.logging)
    return config


@lru_cache
def get_registry() -> RoomRegistry:
    """FastAPI dependency for the room registry."""
    config = get_config()
    return RoomRegistry(
        config=config,
        store=create_store(config),
        catalog=YouTubeCatalog.from_config(config.youtube),
        broadcaster=sync_manager,
    )

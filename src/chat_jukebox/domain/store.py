"""
Room-scoped key-value settings storage.

Player and playlist state are kept as JSON-compatible values under fixed keys.
Every operation receives the store explicitly; nothing reads ambient globals.
"""

import copy
import json
from pathlib import Path
from typing import Any, Optional, Protocol

from loguru import logger

from chat_jukebox.core.config import Config
from chat_jukebox.core.database import get_database_path, get_db_connection, init_database


class SettingsStore(Protocol):
    """Get/set storage scoped per room."""

    def get(self, room: str, key: str, default: Any = None) -> Any: ...

    def set(self, room: str, key: str, value: Any) -> None: ...


class MemorySettingsStore:
    """In-process settings store. State is lost on restart."""

    def __init__(self) -> None:
        self._rooms: dict[str, dict[str, Any]] = {}

    def get(self, room: str, key: str, default: Any = None) -> Any:
        settings = self._rooms.get(room, {})
        if key not in settings:
            return default
        # Callers get their own copy so mutations never leak back in
        return copy.deepcopy(settings[key])

    def set(self, room: str, key: str, value: Any) -> None:
        self._rooms.setdefault(room, {})[key] = copy.deepcopy(value)


class SqliteSettingsStore:
    """Settings store backed by the `settings` table."""

    def __init__(self, db_path: Optional[Path] = None) -> None:
        self.db_path = init_database(db_path)

    def get(self, room: str, key: str, default: Any = None) -> Any:
        with get_db_connection(self.db_path) as conn:
            row = conn.execute(
                "SELECT value FROM settings WHERE room = ? AND key = ?",
                (room, key),
            ).fetchone()

        if row is None:
            return default
        return json.loads(row["value"])

    def set(self, room: str, key: str, value: Any) -> None:
        with get_db_connection(self.db_path) as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO settings (room, key, value, updated_at)
                VALUES (?, ?, ?, CURRENT_TIMESTAMP)
                """,
                (room, key, json.dumps(value)),
            )
            conn.commit()


def create_store(config: Config) -> SettingsStore:
    """Build the settings store selected by the [storage] config section."""
    if config.storage.backend == "memory":
        logger.info("Using in-memory settings store")
        return MemorySettingsStore()

    db_path = (
        Path(config.storage.database_path).expanduser()
        if config.storage.database_path
        else get_database_path()
    )
    logger.info(f"Using SQLite settings store: {db_path}")
    return SqliteSettingsStore(db_path)

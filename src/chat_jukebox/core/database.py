"""
SQLite database operations for Chat Jukebox
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from loguru import logger

from .config import get_data_dir


SCHEMA_VERSION = 1


def get_database_path() -> Path:
    """Get the default path to the SQLite database file."""
    return get_data_dir() / "chat_jukebox.db"


@contextmanager
def get_db_connection(db_path: Optional[Path] = None):
    """Get a database connection with proper cleanup and concurrency support."""
    db_path = db_path or get_database_path()
    conn = sqlite3.connect(db_path, timeout=30.0)
    conn.row_factory = sqlite3.Row  # Enable dict-like access

    # WAL mode allows reads during writes
    conn.execute("PRAGMA journal_mode=WAL")

    try:
        yield conn
    finally:
        conn.close()


def init_database(db_path: Optional[Path] = None) -> Path:
    """Create the database and its tables if they do not exist.

    Returns:
        Path of the initialized database
    """
    db_path = db_path or get_database_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)

    with get_db_connection(db_path) as conn:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS schema_version (
                version INTEGER PRIMARY KEY
            )
        """)
        conn.execute("""
            CREATE TABLE IF NOT EXISTS settings (
                room TEXT NOT NULL,
                key TEXT NOT NULL,
                value TEXT NOT NULL, -- JSON encoded
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                PRIMARY KEY (room, key)
            )
        """)
        conn.execute(
            "INSERT OR IGNORE INTO schema_version (version) VALUES (?)",
            (SCHEMA_VERSION,),
        )
        conn.commit()

    logger.debug(f"Database initialized: {db_path}")
    return db_path

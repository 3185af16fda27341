"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Database operations (SQLite)
- Logging (Loguru)
"""

from .config import (
    Config,
    load_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
)
from .database import (
    get_database_path,
    get_db_connection,
    init_database,
)
from .output import setup_logging, setup_loguru

__all__ = [
    "Config",
    "load_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "get_database_path",
    "get_db_connection",
    "init_database",
    "setup_logging",
    "setup_loguru",
]

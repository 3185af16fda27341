"""
Configuration management for Chat Jukebox
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from loguru import logger


YOUTUBE_API_URL = "https://www.googleapis.com/youtube/v3/videos"


@dataclass
class YouTubeConfig:
    """Configuration for the YouTube Data API song lookup."""

    api_key: Optional[str] = None
    api_url: str = YOUTUBE_API_URL
    timeout_seconds: float = 10.0


@dataclass
class PlayerConfig:
    """Configuration for the shared room player."""

    upcoming_count: int = 5

    def validate(self) -> None:
        """Validate player configuration values.

        Raises:
            ValueError: If configuration values are invalid
        """
        if self.upcoming_count < 1:
            raise ValueError(
                f"upcoming_count must be at least 1, got {self.upcoming_count}"
            )


@dataclass
class RoomsConfig:
    """Configuration for chat rooms and user roles."""

    moderators: List[str] = field(default_factory=list)


@dataclass
class StorageConfig:
    """Configuration for persisted room settings."""

    backend: str = "sqlite"  # 'sqlite' or 'memory'
    database_path: Optional[str] = None  # Default: <data dir>/chat_jukebox.db

    def validate(self) -> None:
        """Validate storage configuration values.

        Raises:
            ValueError: If configuration values are invalid
        """
        valid_backends = {"sqlite", "memory"}
        if self.backend not in valid_backends:
            raise ValueError(
                f"Invalid storage backend: {self.backend!r}. "
                f"Valid backends are: {valid_backends}"
            )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/chat-jukebox/chat-jukebox.log)
    )
    max_file_size_mb: int = 10  # Maximum log file size before rotation
    backup_count: int = 5  # Number of backup files to keep
    console_output: bool = False  # Also output to console (for debugging)


@dataclass
class WebConfig:
    """Configuration for the web host."""

    allowed_origins: List[str] = field(
        default_factory=lambda: ["http://localhost:5173"]
    )


@dataclass
class Config:
    """Main configuration object."""

    youtube: YouTubeConfig = field(default_factory=YouTubeConfig)
    player: PlayerConfig = field(default_factory=PlayerConfig)
    rooms: RoomsConfig = field(default_factory=RoomsConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    web: WebConfig = field(default_factory=WebConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "chat-jukebox"
    return Path.home() / ".config" / "chat-jukebox"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "chat-jukebox"
    return Path.home() / ".local" / "share" / "chat-jukebox"


def _find_project_config() -> Optional[Path]:
    """Find config.toml in the project root (the directory holding pyproject.toml).

    Returns:
        Path to config.toml in project root, or None if not found
    """
    current = Path(__file__).resolve().parent
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            config_path = parent / "config.toml"
            return config_path if config_path.exists() else None
    return None


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Project root (detected via pyproject.toml) - for development
    2. Current working directory
    3. XDG_CONFIG_HOME/chat-jukebox (or ~/.config/chat-jukebox)
    """
    project_config = _find_project_config()
    if project_config:
        return project_config

    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def _apply_env_overrides(config: Config) -> Config:
    """Apply environment variable overrides on top of TOML values."""
    api_key = os.environ.get("YOUTUBE_API_KEY")
    if api_key:
        config.youtube.api_key = api_key

    moderators = os.environ.get("CHAT_JUKEBOX_MODERATORS")
    if moderators:
        config.rooms.moderators = [
            name.strip() for name in moderators.split(",") if name.strip()
        ]

    return config


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file or fall back to defaults.

    Environment variables override TOML values:
    - YOUTUBE_API_KEY
    - CHAT_JUKEBOX_MODERATORS

    Args:
        config_path: Explicit config file (default: see get_config_path)

    Returns:
        Parsed configuration
    """
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config_path = config_path or get_config_path()

    if not config_path.exists():
        logger.info(f"No configuration at {config_path}, using defaults")
        return _apply_env_overrides(Config())

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Could not read configuration {config_path}: {e}")
        logger.warning("Using default configuration.")
        return _apply_env_overrides(Config())

    config = Config()

    if "youtube" in toml_data:
        youtube_data = toml_data["youtube"]
        config.youtube = YouTubeConfig(
            api_key=youtube_data.get("api_key"),
            api_url=youtube_data.get("api_url", config.youtube.api_url),
            timeout_seconds=youtube_data.get(
                "timeout_seconds", config.youtube.timeout_seconds
            ),
        )

    if "player" in toml_data:
        player_data = toml_data["player"]
        config.player = PlayerConfig(
            upcoming_count=player_data.get(
                "upcoming_count", config.player.upcoming_count
            ),
        )
        try:
            config.player.validate()
        except ValueError as e:
            logger.warning(f"Invalid player configuration: {e}")
            logger.warning("Using default player configuration.")
            config.player = PlayerConfig()

    if "rooms" in toml_data:
        rooms_data = toml_data["rooms"]
        config.rooms = RoomsConfig(
            moderators=list(rooms_data.get("moderators", config.rooms.moderators)),
        )

    if "storage" in toml_data:
        storage_data = toml_data["storage"]
        config.storage = StorageConfig(
            backend=storage_data.get("backend", config.storage.backend),
            database_path=storage_data.get("database_path"),
        )
        try:
            config.storage.validate()
        except ValueError as e:
            logger.warning(f"Invalid storage configuration: {e}")
            logger.warning("Using default storage configuration.")
            config.storage = StorageConfig()

    if "logging" in toml_data:
        logging_data = toml_data["logging"]
        config.logging = LoggingConfig(
            level=logging_data.get("level", config.logging.level),
            log_file=logging_data.get("log_file"),
            max_file_size_mb=logging_data.get(
                "max_file_size_mb", config.logging.max_file_size_mb
            ),
            backup_count=logging_data.get(
                "backup_count", config.logging.backup_count
            ),
            console_output=logging_data.get(
                "console_output", config.logging.console_output
            ),
        )

    if "web" in toml_data:
        web_data = toml_data["web"]
        config.web = WebConfig(
            allowed_origins=list(
                web_data.get("allowed_origins", config.web.allowed_origins)
            ),
        )

    return _apply_env_overrides(config)


"""Configuration management for the tree mirroring application."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from config directory or project root
config_env = Path(__file__).parent.parent.parent / "config" / ".env"
if config_env.exists():
    load_dotenv(config_env)
else:
    # Fallback to project root .env
    load_dotenv()


class ConfigError(Exception):
    """Raised when a configuration value is invalid."""

    pass


def _positive_int(name: str, default: str) -> int:
    """Read a positive integer setting from the environment."""
    raw = os.getenv(name, default)
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got: {raw}")
    if value < 1:
        raise ConfigError(f"{name} must be at least 1, got: {value}")
    return value


class Config:
    """Application configuration."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        # Copy streaming settings
        self.chunk_size = _positive_int("TREE_MIRROR_CHUNK_SIZE", "4096")
        self.chunks_per_report = _positive_int("TREE_MIRROR_CHUNKS_PER_REPORT", "256")

        # Console settings
        self.progress_bar_width = _positive_int(
            "TREE_MIRROR_PROGRESS_BAR_WIDTH", "100"
        )

        # Logging settings
        self.log_level = os.getenv("TREE_MIRROR_LOG_LEVEL", "WARNING").upper()
        self.log_file = Path(
            os.getenv(
                "TREE_MIRROR_LOG_FILE",
                str(Path.home() / ".tree-mirror" / "tree-mirror.log"),
            )
        )


def get_config() -> Config:
    """Get application configuration."""
    return Config()

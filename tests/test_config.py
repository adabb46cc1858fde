"""Tests for configuration management."""

from pathlib import Path

import pytest

from tree_mirror.config import Config, ConfigError, get_config

ENV_VARS = (
    "TREE_MIRROR_CHUNK_SIZE",
    "TREE_MIRROR_CHUNKS_PER_REPORT",
    "TREE_MIRROR_PROGRESS_BAR_WIDTH",
    "TREE_MIRROR_LOG_LEVEL",
    "TREE_MIRROR_LOG_FILE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove configuration variables from the environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestConfig:
    """Test configuration loading."""

    def test_defaults(self):
        """Test that config can be created with defaults."""
        config = get_config()
        assert config.chunk_size == 4096
        assert config.chunks_per_report == 256
        assert config.progress_bar_width == 100
        assert config.log_level == "WARNING"
        assert config.log_file == Path.home() / ".tree-mirror" / "tree-mirror.log"

    def test_environment_overrides(self, monkeypatch, tmp_path):
        """Test values read from the environment."""
        monkeypatch.setenv("TREE_MIRROR_CHUNK_SIZE", "8192")
        monkeypatch.setenv("TREE_MIRROR_CHUNKS_PER_REPORT", "16")
        monkeypatch.setenv("TREE_MIRROR_PROGRESS_BAR_WIDTH", "40")
        monkeypatch.setenv("TREE_MIRROR_LOG_LEVEL", "debug")
        monkeypatch.setenv("TREE_MIRROR_LOG_FILE", str(tmp_path / "run.log"))

        config = Config()

        assert config.chunk_size == 8192
        assert config.chunks_per_report == 16
        assert config.progress_bar_width == 40
        assert config.log_level == "DEBUG"
        assert config.log_file == tmp_path / "run.log"

    @pytest.mark.parametrize("value", ["abc", "0", "-5"])
    def test_invalid_numbers_rejected(self, monkeypatch, value):
        """Test that non-positive or non-numeric values raise ConfigError."""
        monkeypatch.setenv("TREE_MIRROR_CHUNK_SIZE", value)
        with pytest.raises(ConfigError, match="TREE_MIRROR_CHUNK_SIZE"):
            Config()

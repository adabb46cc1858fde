"""Tests for logging configuration."""

import io
import logging
import logging.handlers
import sys

from tree_mirror.utils.logging_config import (
    ColoredFormatter,
    LocationFormatter,
    setup_logging,
)


def _record(level=logging.WARNING):
    return logging.LogRecord(
        name="tree_mirror.test",
        level=level,
        pathname="/src/tree_mirror/core/sync/executor.py",
        lineno=42,
        msg="copy failed for %s",
        args=("a.txt",),
        exc_info=None,
    )


def test_location_formatter_adds_location():
    """Test the combined file:line field."""
    formatter = LocationFormatter(fmt="%(location)s %(message)s")
    assert formatter.format(_record()) == "executor.py:42 copy failed for a.txt"


def test_colored_formatter_restores_levelname():
    """Test colors wrap the level name without leaking into the record."""
    formatter = ColoredFormatter(fmt="%(levelname)s|%(message)s")
    record = _record()

    output = formatter.format(record)

    assert output.startswith("\033[33mWARNING ")
    assert record.levelname == "WARNING"


def test_setup_logging_with_file(tmp_path, restore_root_logger):
    """Test a rotating file handler is installed and written to."""
    log_file = tmp_path / "logs" / "tree-mirror.log"

    setup_logging(log_level="INFO", log_file=log_file)
    logging.getLogger("tree_mirror.test").info("hello from test")
    for handler in logging.getLogger().handlers:
        handler.flush()

    root = logging.getLogger()
    assert root.level == logging.INFO
    assert any(
        isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers
    )
    assert "hello from test" in log_file.read_text(encoding="utf-8")


def test_setup_logging_console_only(restore_root_logger):
    """Test console output without a log file."""
    setup_logging(log_level="DEBUG", console_output=True)

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, ColoredFormatter)


def test_colored_formatter_without_color():
    """Test plain output keeps the padded level name only."""
    formatter = ColoredFormatter(fmt="%(levelname)s|%(message)s", use_color=False)

    output = formatter.format(_record())

    assert output == "WARNING |copy failed for a.txt"
    assert "\033[" not in output


def test_console_output_is_not_colored_when_redirected(
    monkeypatch, restore_root_logger
):
    """Test stderr that is not a terminal gets no escape codes."""
    monkeypatch.setattr(sys, "stderr", io.StringIO())
    setup_logging(log_level="INFO", console_output=True)

    formatter = logging.getLogger().handlers[0].formatter
    assert formatter.use_color is False


def test_undecodable_path_is_escaped_in_log_file(tmp_path, restore_root_logger):
    """Test a surrogate-escaped file name is logged instead of dropped."""
    log_file = tmp_path / "tree-mirror.log"
    name = b"bad\xffname.txt".decode("utf-8", "surrogateescape")

    setup_logging(log_level="WARNING", log_file=log_file)
    logging.getLogger("tree_mirror.test").warning("Copy failed for %s", name)
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert "Copy failed for bad\\udcffname.txt" in log_file.read_text(
        encoding="utf-8"
    )

"""Logging configuration for the tree mirroring application.

Records go to a rotating log file. Console logging is opt-in and writes to
stderr, since stdout belongs to the progress display during a run.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Optional, TextIO

FILE_FORMAT = "%(asctime)s - %(location)-30s - %(levelname)-8s - %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
CONSOLE_DATE_FORMAT = "%H:%M:%S"


class LocationFormatter(logging.Formatter):
    """Base formatter that adds a combined location field."""

    def format(self, record: Any) -> str:
        """Format log record with combined location field."""
        record.location = f"{record.filename}:{record.lineno}"
        return super().format(record)


class ColoredFormatter(LocationFormatter):
    """Log formatter that colors the level name for terminals."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, *args: Any, use_color: bool = True, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.use_color = use_color

    def format(self, record: Any) -> str:
        """Format log record, padding and optionally coloring the level."""
        original_levelname = record.levelname
        padded = f"{original_levelname:<8}"
        if self.use_color:
            color = self.COLORS.get(original_levelname, self.RESET)
            padded = f"{color}{padded}{self.RESET}"

        record.levelname = padded
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname


def _console_handler(level: int, stream: TextIO) -> logging.Handler:
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    isatty = getattr(stream, "isatty", None)
    handler.setFormatter(
        ColoredFormatter(
            fmt=CONSOLE_FORMAT,
            datefmt=CONSOLE_DATE_FORMAT,
            use_color=bool(isatty and isatty()),
        )
    )
    return handler


def _file_handler(
    log_file: Path, level: int, max_file_size: int, backup_count: int
) -> logging.Handler:
    """Create a rotating handler for the log file.

    Paths that are not valid in the file system encoding come back from
    ``os.scandir`` with surrogate escapes; they are written backslash-escaped
    instead of failing the record.
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=max_file_size,
        backupCount=backup_count,
        encoding="utf-8",
        errors="backslashreplace",
    )
    handler.setLevel(level)
    handler.setFormatter(
        LocationFormatter(fmt=FILE_FORMAT, datefmt=FILE_DATE_FORMAT)
    )
    return handler


def setup_logging(
    log_level: str = "WARNING",
    log_file: Optional[Path] = None,
    console_output: bool = False,
    max_file_size: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> None:
    """Set up application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        console_output: Whether to also log to stderr
        max_file_size: Maximum size of log file before rotation
        backup_count: Number of backup log files to keep
    """
    numeric_level = getattr(logging, log_level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    if console_output:
        root_logger.addHandler(_console_handler(numeric_level, sys.stderr))
    if log_file:
        root_logger.addHandler(
            _file_handler(log_file, numeric_level, max_file_size, backup_count)
        )
    if not root_logger.handlers:
        # Without a handler, logging.lastResort prints warnings over the
        # progress display.
        root_logger.addHandler(logging.NullHandler())

    logger = logging.getLogger(__name__)
    logger.info("Logging initialized - Level: %s", log_level)
    if log_file:
        logger.info("Log file: %s", log_file)

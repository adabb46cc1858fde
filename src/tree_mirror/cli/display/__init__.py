"""CLI display and formatting utilities."""

from .console_sink import RichProgressSink
from .formatters import display_sync_summary

__all__ = [
    "RichProgressSink",
    "display_sync_summary",
]

"""Console progress sink built on rich."""

import logging
import os
import sys
from types import TracebackType
from typing import List, Optional, Type

from rich.console import Console, Group
from rich.live import Live
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

logger = logging.getLogger(__name__)


def printable(text: str) -> str:
    """Replace undecodable file name bytes with U+FFFD.

    Names that are not valid in the file system encoding reach us with
    surrogate escapes, which a strict output stream refuses to encode.
    """
    try:
        return os.fsencode(text).decode(sys.getfilesystemencoding(), "replace")
    except UnicodeEncodeError:
        return text.encode("utf-8", "replace").decode("utf-8")


class RichProgressSink:
    """Renders status lines and a progress bar in a live console region.

    Permanent lines are printed above the live region. The region itself is
    replaced on every rewrite and only refreshes when a rewrite happens.
    """

    def __init__(
        self, console: Optional[Console] = None, progress_bar_width: int = 100
    ) -> None:
        """Initialize the sink.

        Args:
            console: Console to render on (defaults to stdout)
            progress_bar_width: Maximum width of the bar row in cells
        """
        self.console = console or Console()
        self.progress_bar_width = progress_bar_width
        self._live: Optional[Live] = None

    def __enter__(self) -> "RichProgressSink":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()

    def write_line(self, text: str) -> None:
        """Print a permanent line."""
        self.console.print(Text(printable(text)))

    def rewrite_lines(self, lines: List[str]) -> None:
        """Replace the live region with the given lines."""
        if not lines:
            return
        self._update(Group(*self._rows(lines)))

    def rewrite_lines_with_progress(self, lines: List[str], percentage: int) -> None:
        """Replace the live region with the given lines and a progress bar."""
        if not lines or percentage < 0 or percentage > 100:
            return
        self._update(Group(*self._rows(lines), self._progress_bar(percentage)))

    def close(self) -> None:
        """Stop the live region, leaving its last content on screen."""
        if self._live is not None:
            self._live.stop()
            self._live = None

    def _rows(self, lines: List[str]) -> List[Text]:
        return [
            Text(printable(line), no_wrap=True, overflow="ellipsis")
            for line in lines
        ]

    def _progress_bar(self, percentage: int) -> Table:
        label = f"{percentage}%"
        width = min(self.progress_bar_width, self.console.width)
        bar_width = max(1, width - len(label) - 1)

        grid = Table.grid(padding=(0, 1))
        grid.add_row(
            ProgressBar(total=100, completed=percentage, width=bar_width),
            Text(label),
        )
        return grid

    def _update(self, renderable: Group) -> None:
        if self._live is None:
            self._live = Live(
                renderable,
                console=self.console,
                auto_refresh=False,
                redirect_stdout=False,
                redirect_stderr=False,
            )
            self._live.start(refresh=True)
            return
        self._live.update(renderable, refresh=True)

"""Command-line interface for the tree mirroring application.

This is the main entry point; it wires configuration, logging, and the
console progress sink around the synchronizer.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console

from ..config import ConfigError, get_config
from ..core.sync import InvalidPathsError, TreeSynchronizer
from ..utils.logging_config import setup_logging
from .display import RichProgressSink, display_sync_summary

console = Console()
logger = logging.getLogger(__name__)


@click.command("tree-mirror")
@click.argument(
    "paths",
    nargs=-1,
    metavar="SOURCE DESTINATION",
    type=click.Path(path_type=Path),
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Set logging level (default from TREE_MIRROR_LOG_LEVEL)",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    help="Log to file (default from TREE_MIRROR_LOG_FILE)",
)
@click.option("--log-to-console", is_flag=True, help="Also log to stderr")
@click.option("--chunk-size", type=click.IntRange(min=1), help="Bytes per copy step")
@click.option(
    "--chunks-per-report",
    type=click.IntRange(min=1),
    help="Copy steps between progress updates",
)
def cli(
    paths: Tuple[Path, ...],
    log_level: Optional[str],
    log_file: Optional[Path],
    log_to_console: bool,
    chunk_size: Optional[int],
    chunks_per_report: Optional[int],
) -> None:
    """Mirror SOURCE onto DESTINATION.

    Afterwards DESTINATION holds exactly the files and directories of SOURCE,
    with file modification times preserved.
    """
    try:
        config = get_config()
    except ConfigError as e:
        console.print(str(e), markup=False)
        raise click.Abort()

    setup_logging(
        log_level=log_level or config.log_level,
        log_file=log_file or config.log_file,
        console_output=log_to_console,
    )

    if len(paths) != 2:
        logger.error("wrong number of arguments: %d", len(paths))
        console.print("wrong number of arguments", markup=False)
        raise click.Abort()

    if chunk_size is not None:
        config.chunk_size = chunk_size
    if chunks_per_report is not None:
        config.chunks_per_report = chunks_per_report

    source, destination = paths
    with RichProgressSink(console, config.progress_bar_width) as sink:
        synchronizer = TreeSynchronizer.from_config(
            source, destination, config, sink=sink
        )
        try:
            session = synchronizer.synchronize()
        except InvalidPathsError:
            raise click.Abort()

    display_sync_summary(session, console)


if __name__ == "__main__":
    cli()

"""Display formatters for CLI."""

from typing import Optional

from rich.console import Console
from rich.table import Table

from ...core.sync import SyncSession

console = Console()


def _format_bytes(size: int) -> str:
    """Format a byte count with a binary unit."""
    value = float(size)
    for unit in ("B", "KB", "MB", "GB"):
        if value < 1024 or unit == "GB":
            return f"{value:.0f} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{size} B"


def display_sync_summary(
    session: SyncSession, output: Optional[Console] = None
) -> None:
    """Display synchronization results.

    Args:
        session: Finished synchronization session
        output: Console to print on (defaults to the module console)
    """
    output = output or console

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="green", justify="right")

    table.add_row("Directories Deleted", str(session.directories_deleted))
    table.add_row("Files Deleted", str(session.files_deleted))
    table.add_row("Files Copied", str(session.files_copied))
    table.add_row("Bytes Copied", _format_bytes(session.bytes_copied))

    for label, failures in (
        ("Failed To Scan", session.failed_to_scan),
        ("Failed To Delete", session.failed_to_delete),
        ("Failed To Copy", session.failed_to_copy),
    ):
        if failures:
            table.add_row(label, f"[red]{len(failures)}[/red]")

    output.print(table)

    if session.has_failures:
        output.print("[yellow]⚠️  Some items could not be synchronized[/yellow]")
    else:
        output.print("[bold green]✓ Synchronization complete[/bold green]")

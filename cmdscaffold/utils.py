"""Shared console helpers for command scaffolding.

All user-facing output goes through a single Rich ``Console`` so tests can
capture it and the CLI can render tables and coloured status lines.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(rows: list[tuple[str, str, str]], title: str = "Summary") -> None:
    """Print a three-column unit/status/detail table.

    Args:
        rows: ``(unit, status, detail)`` tuples.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Unit", style="dim", no_wrap=True)
    table.add_column("Status")
    table.add_column("Detail")

    for unit, status, detail in rows:
        table.add_row(unit, status, detail)

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------


def display_path(path: Path, root: Path) -> str:
    """Return *path* relative to *root* when possible, for compact output."""
    try:
        return str(Path(path).relative_to(root))
    except ValueError:
        return str(path)

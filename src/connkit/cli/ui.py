"""Shared UI components for the connkit CLI."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

# Custom theme for connkit CLI
theme = Theme(
    {
        "info": "dim cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "tip": "blue",
        "heading": "bold cyan",
    }
)

console = Console(theme=theme, highlight=False)
error_console = Console(theme=theme, stderr=True, highlight=False)


def print_error(title: str, message: str, tip: str | None = None) -> None:
    """Print a styled error message with an optional actionable tip."""
    content = Text()
    content.append(f"{message}\n", style="white")

    if tip:
        content.append("\n💡 Tip: ", style="bold blue")
        content.append(tip, style="blue")

    error_console.print(
        Panel(
            content,
            title=f"[bold red]Error: {title}[/bold red]",
            border_style="red",
            padding=(1, 1),
        )
    )


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]✓[/bold green] {message}")


def print_warning_list(heading: str, items: list[str]) -> None:
    """Print a heading and a bulleted list to stderr; prints nothing for an empty list."""
    if not items:
        return
    error_console.print()
    error_console.print(f"[warning]{heading}[/warning]")
    for item in items:
        error_console.print(f"  - {item}", markup=False)


def details_table() -> Table:
    """Two-column key/value table used by ``show``."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="bold white", justify="right")
    table.add_column("Value", style="cyan")
    return table

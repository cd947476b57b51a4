"""Simple status messages (no panels)."""

from typing import Iterable, Optional

from rich.console import Console
from rich.markup import escape

from sforg_browser.utils.console import get_console


class StatusMessage:
    """Simple status messages without panels.

    Used by: every workflow for inline feedback and explanations.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or get_console()

    def success(self, message: str) -> None:
        """Print success message."""
        self.console.print(f"[green]✓ {escape(message)}[/green]")

    def error(self, message: str) -> None:
        """Print error message."""
        self.console.print(f"[red]❌ Error: {escape(message)}[/red]")

    def warning(self, message: str) -> None:
        """Print warning message."""
        self.console.print(f"[yellow]{escape(message)}[/yellow]")

    def info(self, message: str) -> None:
        """Print info message."""
        self.console.print(f"[cyan]{escape(message)}[/cyan]")

    def hint(self, heading: str, reasons: Iterable[str]) -> None:
        """Print a dim heading followed by bulleted possible causes."""
        self.console.print(f"[dim]{escape(heading)}[/dim]")
        for reason in reasons:
            self.console.print(f"[dim]• {escape(reason)}[/dim]")

"""Busy indicator shown while a remote call is outstanding."""

from typing import Awaitable, Optional, TypeVar

from rich.console import Console
from rich.markup import escape

from sforg_browser.utils.console import get_console

T = TypeVar("T")


class ActivityIndicator:
    """Spinner around one awaited operation, then a success or failure line.

    Used by: list, detail, search and export workflows.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or get_console()

    async def track(self, message: str, operation: Awaitable[T]) -> T:
        """Await ``operation`` while a spinner shows ``message``.

        Exceptions from the operation propagate unchanged; the caller reports
        the outcome with ``succeed`` or ``fail``.
        """
        with self.console.status(f"[cyan]{escape(message)}[/cyan]", spinner="dots"):
            return await operation

    def succeed(self, message: str) -> None:
        self.console.print(f"[green]✔[/green] {escape(message)}")

    def fail(self, message: str) -> None:
        self.console.print(f"[red]✖[/red] {escape(message)}")

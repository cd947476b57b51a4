"""Property table display component."""

from typing import Any, Iterable, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sforg_browser.utils.console import get_console


class PropertyTable:
    """Two-column Property/Value table.

    Used by: item detail view.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or get_console()

    def display(self, rows: Iterable[Tuple[str, Any]], title: Optional[str] = None) -> None:
        """Render ``rows`` as a table; prints nothing when there are no rows."""
        rows = list(rows)
        if not rows:
            return

        table = Table(title=title)
        table.add_column("Property", style="cyan", width=20, no_wrap=True)
        table.add_column("Value", min_width=30)

        for label, value in rows:
            table.add_row(escape(label), escape(self._format_value(value)))

        self.console.print(table)

    @staticmethod
    def _format_value(value: Any) -> str:
        if isinstance(value, bool):
            return "Yes" if value else "No"
        if value is None:
            return "N/A"
        return str(value)

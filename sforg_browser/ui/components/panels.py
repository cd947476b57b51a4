from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table

from sforg_browser.core.models import ConnectionInfo
from sforg_browser.utils.console import get_console

APP_TITLE = "🚀 Salesforce Org Browser"


class HeaderPanel:
    """Application banner and section headings.

    Used by: main menu, startup, item detail.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or get_console()

    def banner(self, subtitle: Optional[str] = None) -> None:
        self.console.print(f"[bold blue]{APP_TITLE}[/bold blue]")
        if subtitle:
            self.console.print(f"[dim]{subtitle}[/dim]")
        self.console.print(Rule(style="dim"))

    def heading(self, text: str) -> None:
        self.console.print()
        self.console.print(f"[bold blue]{escape(text)}[/bold blue]", highlight=False)
        self.console.print(Rule(style="dim"))


class ConnectionPanel:
    """Summary of the connected org.

    Used by: startup.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or get_console()

    def display(self, info: ConnectionInfo) -> None:
        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column(style="bold", width=12)
        table.add_column()

        table.add_row("Username:", info.username)
        table.add_row("Org ID:", info.org_id)
        table.add_row("Instance:", info.instance_url)
        table.add_row("Org Type:", info.org_type)

        self.console.print(Panel(
            table,
            title="[bold green]✓ Connected[/bold green]",
            border_style="green",
            padding=(1, 2),
        ))

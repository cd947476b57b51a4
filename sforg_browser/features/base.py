"""Shared plumbing for the interactive workflows."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from rich.console import Console

from sforg_browser.core.source import MetadataSource
from sforg_browser.ui.components import (
    ActivityIndicator,
    HeaderPanel,
    Prompter,
    PropertyTable,
    StatusMessage,
)
from sforg_browser.utils.console import get_console
from sforg_browser.utils.errors import BrowserError, format_error_message
from sforg_browser.utils.logging import get_logger

logger = get_logger(__name__)


class MenuAction(Enum):
    """Non-item menu choices, kept distinct from item names."""

    BACK = "back"
    MAIN_MENU = "main"
    SEARCH = "search"
    SEARCH_AGAIN = "search-again"
    RETRY = "retry"
    EXPORT = "export"
    EXPORT_ANOTHER = "export-another"
    EXIT = "exit"


@dataclass
class BrowserContext:
    """Collaborators every workflow needs."""

    source: MetadataSource
    prompter: Prompter = field(default_factory=Prompter)
    console: Console = field(default_factory=get_console)
    working_dir: Path = field(default_factory=Path.cwd)
    field_preview_limit: int = 10
    clear_screen: bool = True


class BaseWorkflow:
    """Base class wiring display components to the shared console."""

    def __init__(self, context: BrowserContext):
        self.ctx = context
        self.source = context.source
        self.prompter = context.prompter
        self.console = context.console
        self.activity = ActivityIndicator(self.console)
        self.message = StatusMessage(self.console)
        self.header = HeaderPanel(self.console)
        self.table = PropertyTable(self.console)

    def report_failure(self, error: Exception, context: str) -> str:
        """Record a recoverable failure in the log file and return its user-facing text."""
        details = error.to_dict() if isinstance(error, BrowserError) else {"message": str(error)}
        logger.info(f"{context} failed: {error}", exc_info=error, extra={"context": details})
        return format_error_message(error)

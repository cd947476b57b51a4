"""Navigation controller: the main menu and the state loop."""

from typing import Awaitable, Callable, Dict, Optional, Type

from sforg_browser.core.registry import all_descriptors, lookup_by_menu_value
from sforg_browser.features.base import BaseWorkflow, BrowserContext, MenuAction
from sforg_browser.features.browse import BrowseWorkflow
from sforg_browser.features.export import ExportWorkflow
from sforg_browser.features.search import SearchWorkflow
from sforg_browser.ui.components import SEPARATOR, MenuOption
from sforg_browser.utils.console import clear_screen
from sforg_browser.utils.logging import get_logger

from .states import (
    Exit,
    ExportFlow,
    ExportItem,
    GlobalSearch,
    ItemDetail,
    ListCategory,
    LocalSearch,
    MainMenu,
    State,
)

logger = get_logger(__name__)

Handler = Callable[[State], Awaitable[State]]


class Navigator(BaseWorkflow):
    """Runs one state handler at a time until a handler returns ``Exit``.

    Every screen returns the next state rather than calling the next screen,
    so the call stack stays flat however long the session runs.
    """

    def __init__(self, context: BrowserContext):
        super().__init__(context)
        self.browse = BrowseWorkflow(context)
        self.search = SearchWorkflow(context)
        self.exporter = ExportWorkflow(context)
        self.handlers: Dict[Type, Handler] = {
            MainMenu: self.main_menu,
            ListCategory: self.browse.list_category,
            ItemDetail: self.browse.item_detail,
            LocalSearch: self.browse.local_search,
            GlobalSearch: self.search.global_search,
            ExportFlow: self.exporter.export_flow,
            ExportItem: self.exporter.export_item,
        }

    async def main_menu(self, state: MainMenu) -> State:
        if self.ctx.clear_screen:
            clear_screen(self.console)
        self.header.banner("Explore metadata in your connected org")

        choice = await self.prompter.select(
            "What would you like to explore?",
            [
                *(MenuOption(c.menu_label, c.menu_value) for c in all_descriptors()),
                SEPARATOR,
                MenuOption("🔍 Search Metadata", MenuAction.SEARCH),
                MenuOption("📤 Export Component", MenuAction.EXPORT),
                SEPARATOR,
                MenuOption("🚪 Exit", MenuAction.EXIT),
            ],
            cancel_value=MenuAction.EXIT,
        )

        if choice is MenuAction.EXIT:
            self.console.print("\n[bold cyan]👋 Goodbye![/bold cyan]")
            return Exit(0)
        if choice is MenuAction.SEARCH:
            return GlobalSearch()
        if choice is MenuAction.EXPORT:
            return ExportFlow()

        category = lookup_by_menu_value(choice)
        if category is None:
            logger.info(f"Unknown menu value: {choice!r}")
            self.message.error("Invalid metadata type")
            return MainMenu()
        return ListCategory(category)

    async def step(self, state: State) -> State:
        """Run the handler for ``state`` and return the state it chose."""
        handler = self.handlers.get(type(state))
        if handler is None:
            raise TypeError(f"No handler for navigation state {type(state).__name__}")
        logger.debug(f"Entering {type(state).__name__}")
        return await handler(state)

    async def run(self, initial: Optional[State] = None) -> int:
        """Drive the session from ``initial`` (the main menu by default).

        Returns:
            Exit code carried by the final ``Exit`` state
        """
        state = initial or MainMenu()
        while not isinstance(state, Exit):
            state = await self.step(state)
        logger.info(f"Session ended with code {state.code}")
        return state.code

"""Browse workflow: category listing, item details and in-list search."""

from sforg_browser.core.models import MetadataItem
from sforg_browser.features.base import BaseWorkflow, BrowserContext, MenuAction
from sforg_browser.features.search.query import SearchQuery, sort_items, validate_term
from sforg_browser.tui.states import (
    ExportItem,
    ItemDetail,
    ListCategory,
    LocalSearch,
    MainMenu,
    State,
)
from sforg_browser.ui.components import SEPARATOR, MenuOption
from sforg_browser.utils.logging import async_log_call, get_logger

from .display import BrowseDisplay, DetailDisplay

logger = get_logger(__name__)


def _item_option(item: MetadataItem) -> MenuOption:
    return MenuOption(item["fullName"], item["fullName"])


class BrowseWorkflow(BaseWorkflow):
    """Orchestrates the ListCategory, ItemDetail and LocalSearch screens."""

    def __init__(self, context: BrowserContext):
        super().__init__(context)
        self.display = BrowseDisplay(self.console)
        self.detail = DetailDisplay(self.console, context.field_preview_limit)

    @async_log_call
    async def list_category(self, state: ListCategory) -> State:
        """List every item of a category and let the user pick one.

        A failed listing offers an explicit retry; an empty one explains
        itself and returns to the main menu.
        """
        category = state.category
        plural = category.display_name.lower()

        try:
            items = await self.activity.track(
                f"Loading {category.display_name}...", self.source.list_items(category)
            )
        except Exception as e:
            error_text = self.report_failure(e, f"Listing {category.key}")
            self.activity.fail(f"Failed to load {category.display_name}")
            self.display.show_list_failure(error_text)
            action = await self.prompter.select(
                "What would you like to do?",
                [
                    MenuOption("🔙 Return to main menu", MenuAction.MAIN_MENU),
                    MenuOption("🔄 Try again", MenuAction.RETRY),
                ],
                cancel_value=MenuAction.MAIN_MENU,
            )
            return state if action is MenuAction.RETRY else MainMenu()

        if not items:
            self.activity.succeed(f"Found 0 {plural}")
            self.display.show_empty(category)
            await self.prompter.select(
                "Press Enter to continue",
                [MenuOption("🔙 Return to main menu", MenuAction.MAIN_MENU)],
                cancel_value=MenuAction.MAIN_MENU,
            )
            return MainMenu()

        self.activity.succeed(f"Found {len(items)} {plural}")
        sorted_items = sort_items(items)

        choice = await self.prompter.select(
            f"Select a {category.singular_name.lower()} to explore:",
            [
                *(_item_option(item) for item in sorted_items),
                SEPARATOR,
                MenuOption("🔍 Search in this list", MenuAction.SEARCH),
                MenuOption("🔙 Back to main menu", MenuAction.BACK),
            ],
            cancel_value=MenuAction.BACK,
        )

        if choice is MenuAction.BACK:
            return MainMenu()
        if choice is MenuAction.SEARCH:
            return LocalSearch(category, tuple(sorted_items))
        return ItemDetail(category, choice)

    @async_log_call
    async def item_detail(self, state: ItemDetail) -> State:
        """Show one item's details and offer export or navigation."""
        category, full_name = state.category, state.full_name

        try:
            item = await self.activity.track(
                f"Loading {full_name} details...",
                self.source.read_item(category, full_name),
            )
        except Exception as e:
            error_text = self.report_failure(e, f"Reading {category.key} {full_name}")
            self.activity.fail(f"Failed to load {category.singular_name} details")
            self.display.show_error(error_text)
            action = await self.prompter.select(
                "What would you like to do?",
                [
                    MenuOption("🔄 Try again", MenuAction.RETRY),
                    MenuOption("🏠 Main Menu", MenuAction.MAIN_MENU),
                ],
                cancel_value=MenuAction.MAIN_MENU,
            )
            return state if action is MenuAction.RETRY else MainMenu()

        if item is None:
            self.activity.fail(f"Details not found for {full_name}")
            self.display.show_not_found(category)
            action = await self.prompter.select(
                "What would you like to do?",
                [
                    MenuOption(f"🔙 Back to {category.display_name}", MenuAction.BACK),
                    MenuOption("🏠 Main Menu", MenuAction.MAIN_MENU),
                ],
                cancel_value=MenuAction.MAIN_MENU,
            )
            return ListCategory(category) if action is MenuAction.BACK else MainMenu()

        self.activity.succeed(f"Loaded {full_name}")
        self.detail.display(category, full_name, item)

        action = await self.prompter.select(
            "What would you like to do?",
            [
                MenuOption(f"📤 Export {category.singular_name}", MenuAction.EXPORT),
                MenuOption(f"🔙 Back to {category.display_name}", MenuAction.BACK),
                MenuOption("🏠 Main Menu", MenuAction.MAIN_MENU),
            ],
            cancel_value=MenuAction.MAIN_MENU,
        )

        if action is MenuAction.EXPORT:
            return ExportItem(category.export_type, full_name)
        if action is MenuAction.BACK:
            return ListCategory(category)
        return MainMenu()

    @async_log_call
    async def local_search(self, state: LocalSearch) -> State:
        """Filter an already-loaded category list by a search term."""
        category = state.category
        back_label = f"🔙 Back to {category.display_name}"

        term = await self.prompter.text(
            f"Search in {category.display_name}:", validate=validate_term
        )
        if term is None:
            return ListCategory(category)

        matches = sort_items(SearchQuery(term).filter_items(state.items))
        logger.debug(f"Local search '{term}' in {category.key}: {len(matches)} match(es)")

        if not matches:
            self.display.show_no_matches(category, term)
            action = await self.prompter.select(
                "What would you like to do?",
                [
                    MenuOption("🔍 Search again", MenuAction.SEARCH_AGAIN),
                    MenuOption(back_label, MenuAction.BACK),
                ],
                cancel_value=MenuAction.BACK,
            )
            return state if action is MenuAction.SEARCH_AGAIN else ListCategory(category)

        choice = await self.prompter.select(
            f"Select a {category.singular_name.lower()} ({len(matches)} results):",
            [
                *(_item_option(item) for item in matches),
                SEPARATOR,
                MenuOption("🔍 Search again", MenuAction.SEARCH_AGAIN),
                MenuOption(back_label, MenuAction.BACK),
            ],
            cancel_value=MenuAction.BACK,
        )

        if choice is MenuAction.SEARCH_AGAIN:
            return state
        if choice is MenuAction.BACK:
            return ListCategory(category)
        return ItemDetail(category, choice)

"""Global search workflow: one term, every category."""

import asyncio
from typing import List, Sequence, Tuple

from sforg_browser.core.models import SearchHit
from sforg_browser.core.registry import CategoryDescriptor, all_descriptors
from sforg_browser.features.base import BaseWorkflow, MenuAction
from sforg_browser.tui.states import GlobalSearch, ItemDetail, MainMenu, State
from sforg_browser.ui.components import SEPARATOR, MenuOption
from sforg_browser.utils.logging import async_log_call, get_logger

from .query import SearchQuery, sort_hits, validate_term

logger = get_logger(__name__)


class SearchWorkflow(BaseWorkflow):
    """Orchestrates the GlobalSearch screen."""

    async def collect_hits(
        self, categories: Sequence[CategoryDescriptor]
    ) -> Tuple[List[SearchHit], List[CategoryDescriptor]]:
        """List every category concurrently.

        A category whose listing fails is reported back instead of
        aborting the whole search.
        """
        results = await asyncio.gather(
            *(self.source.list_items(category) for category in categories),
            return_exceptions=True,
        )

        hits: List[SearchHit] = []
        failed: List[CategoryDescriptor] = []
        for category, result in zip(categories, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                self.report_failure(result, f"Searching {category.key}")
                failed.append(category)
                continue
            hits.extend(SearchHit(item, category) for item in result)
        return hits, failed

    @async_log_call
    async def global_search(self, state: GlobalSearch) -> State:
        """Prompt for a term and match it against every category's items."""
        term = await self.prompter.text(
            "Enter search term (searches across all metadata types):",
            validate=validate_term,
        )
        if term is None:
            return MainMenu()

        query = SearchQuery(term)
        hits, failed = await self.activity.track(
            "Searching metadata...", self.collect_hits(all_descriptors())
        )
        matches = sort_hits(query.filter_hits(hits))
        logger.debug(f"Global search '{term}': {len(matches)} match(es), {len(failed)} failed")

        if failed:
            names = ", ".join(category.display_name for category in failed)
            self.message.warning(f"⚠ Could not search: {names}")

        if not matches:
            self.activity.fail("No results found")
            self.message.warning("\nNo results found.")
            self.message.hint("Try:", [
                "Using a different search term",
                "Checking spelling",
                "Using partial names",
            ])
            action = await self.prompter.select(
                "What would you like to do?",
                [
                    MenuOption("🔍 Search again", MenuAction.SEARCH_AGAIN),
                    MenuOption("🔙 Back to main menu", MenuAction.BACK),
                ],
                cancel_value=MenuAction.BACK,
            )
            return state if action is MenuAction.SEARCH_AGAIN else MainMenu()

        self.activity.succeed(f"Found {len(matches)} results")

        choice = await self.prompter.select(
            f"Search results for \"{term.strip()}\" ({len(matches)} found):",
            [
                *(
                    MenuOption(f"{hit.full_name} ({hit.category.display_name})", hit)
                    for hit in matches
                ),
                SEPARATOR,
                MenuOption("🔍 Search again", MenuAction.SEARCH_AGAIN),
                MenuOption("🔙 Back to main menu", MenuAction.BACK),
            ],
            cancel_value=MenuAction.BACK,
        )

        if choice is MenuAction.SEARCH_AGAIN:
            return state
        if choice is MenuAction.BACK:
            return MainMenu()
        return ItemDetail(choice.category, choice.full_name)

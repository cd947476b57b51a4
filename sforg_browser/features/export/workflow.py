"""Export workflow: retrieve components into the local SFDX project."""

from sforg_browser.core.registry import all_descriptors, lookup_by_export_type
from sforg_browser.features.base import BaseWorkflow, MenuAction
from sforg_browser.features.search.query import sort_items
from sforg_browser.tui.states import ExportFlow, ExportItem, MainMenu, State
from sforg_browser.ui.components import SEPARATOR, MenuOption
from sforg_browser.utils.errors import ExportError
from sforg_browser.utils.logging import async_log_call, get_logger
from sforg_browser.utils.paths import DEFAULT_PACKAGE_DIR

logger = get_logger(__name__)


class ExportWorkflow(BaseWorkflow):
    """Orchestrates the ExportFlow and ExportItem screens."""

    @async_log_call
    async def export_flow(self, state: ExportFlow) -> State:
        """Pick a category, then a component of it, to export."""
        export_type = await self.prompter.select(
            "Select metadata type to export:",
            [
                *(MenuOption(category.menu_label, category.export_type) for category in all_descriptors()),
                SEPARATOR,
                MenuOption("🔙 Back to main menu", MenuAction.BACK),
            ],
            cancel_value=MenuAction.BACK,
        )
        if export_type is MenuAction.BACK:
            return MainMenu()

        category = lookup_by_export_type(export_type)
        if category is None:
            self.message.error(f"Unknown metadata type: {export_type}")
            return MainMenu()

        try:
            items = await self.activity.track(
                f"Loading {category.display_name}...", self.source.list_items(category)
            )
        except Exception as e:
            error_text = self.report_failure(e, f"Listing {category.key} for export")
            self.activity.fail(f"Failed to load {category.display_name}")
            self.message.error(error_text)
            return MainMenu()

        if not items:
            self.activity.succeed(f"Found 0 {category.display_name.lower()}")
            self.message.warning(f"No {category.display_name.lower()} found.")
            return MainMenu()

        self.activity.succeed(f"Found {len(items)} {category.display_name.lower()}")

        full_name = await self.prompter.select(
            f"Select {category.singular_name.lower()} to export:",
            [
                *(MenuOption(item["fullName"], item["fullName"]) for item in sort_items(items)),
                SEPARATOR,
                MenuOption("🔙 Back to main menu", MenuAction.BACK),
            ],
            cancel_value=MenuAction.BACK,
        )
        if full_name is MenuAction.BACK:
            return MainMenu()
        return ExportItem(category.export_type, full_name)

    @async_log_call
    async def export_item(self, state: ExportItem) -> State:
        """Retrieve one component into the working directory's project."""
        full_name = state.full_name

        try:
            result = await self.activity.track(
                f"Exporting {full_name}...",
                self.source.export(state.export_type, full_name, self.ctx.working_dir),
            )
            if not result.ok:
                raise ExportError(
                    f"Failed to export {full_name}: {result.failure_summary()}",
                    details={"type": state.export_type, "fullName": full_name},
                )
        except Exception as e:
            error_text = self.report_failure(e, f"Exporting {state.export_type}:{full_name}")
            self.activity.fail(f"Export of {full_name} failed")
            self.message.error(error_text)
            action = await self.prompter.select(
                "What would you like to do?",
                [
                    MenuOption("🔄 Try again", MenuAction.RETRY),
                    MenuOption("🏠 Main Menu", MenuAction.MAIN_MENU),
                ],
                cancel_value=MenuAction.MAIN_MENU,
            )
            return state if action is MenuAction.RETRY else MainMenu()

        self.activity.succeed(f"Exported {full_name} using SFDX retrieve")
        self.message.success(
            f"✓ Successfully exported {full_name} to {DEFAULT_PACKAGE_DIR} directory"
        )

        action = await self.prompter.select(
            "What would you like to do?",
            [
                MenuOption("📤 Export Another", MenuAction.EXPORT_ANOTHER),
                MenuOption("🔙 Back to Main Menu", MenuAction.MAIN_MENU),
            ],
            cancel_value=MenuAction.MAIN_MENU,
        )
        return ExportFlow() if action is MenuAction.EXPORT_ANOTHER else MainMenu()

"""
Tests for the navigation states and the workflows behind them

Tests cover:
- Category listing, empty lists and list failures
- Item details, missing items and retries
- Local and global search
- Export selection and execution
- Main menu and the navigator loop
"""
import pytest

from sforg_browser.core.registry import lookup_by_key
from sforg_browser.features.base import MenuAction
from sforg_browser.features.browse import BrowseWorkflow
from sforg_browser.features.export import ExportWorkflow
from sforg_browser.features.search import SearchWorkflow
from sforg_browser.tui.navigator import Navigator
from sforg_browser.tui.states import (
    Exit,
    ExportFlow,
    ExportItem,
    GlobalSearch,
    ItemDetail,
    ListCategory,
    LocalSearch,
    MainMenu,
)
from sforg_browser.utils.errors import DetailOperationError, ListOperationError

from .test_helpers import CANCEL, ConsoleTestHelper, by_label


class TestListCategory:
    """Tests for the ListCategory state"""

    async def test_items_are_offered_sorted(self, context, source, prompter, objects):
        """Test items appear in name order before the action entries"""
        source.set_items("CustomObject", "Zeta__c", "account", "Beta__c")
        prompter.script("account")

        next_state = await BrowseWorkflow(context).list_category(ListCategory(objects))

        assert next_state == ItemDetail(objects, "account")
        assert prompter.last_labels() == [
            "account",
            "Beta__c",
            "Zeta__c",
            "🔍 Search in this list",
            "🔙 Back to main menu",
        ]

    async def test_item_named_like_an_action_is_still_an_item(self, context, source, prompter, objects):
        """Test an item called 'back' opens its details"""
        source.set_items("CustomObject", "back")
        prompter.script("back")

        next_state = await BrowseWorkflow(context).list_category(ListCategory(objects))

        assert next_state == ItemDetail(objects, "back")

    async def test_back_returns_to_main_menu(self, context, source, prompter, objects):
        source.set_items("CustomObject", "Account")
        prompter.script(MenuAction.BACK)

        assert await BrowseWorkflow(context).list_category(ListCategory(objects)) == MainMenu()

    async def test_cancel_returns_to_main_menu(self, context, source, prompter, objects):
        source.set_items("CustomObject", "Account")
        prompter.script(CANCEL)

        assert await BrowseWorkflow(context).list_category(ListCategory(objects)) == MainMenu()

    async def test_search_carries_loaded_items(self, context, source, prompter, objects):
        """Test local search reuses the already-loaded list"""
        source.set_items("CustomObject", "b", "A")
        prompter.script(MenuAction.SEARCH)

        next_state = await BrowseWorkflow(context).list_category(ListCategory(objects))

        assert isinstance(next_state, LocalSearch)
        assert [i["fullName"] for i in next_state.items] == ["A", "b"]

    async def test_empty_category_explains_and_returns(self, context, prompter, console, flows):
        """Test an empty list shows the explanation and one way out"""
        prompter.script(MenuAction.MAIN_MENU)

        next_state = await BrowseWorkflow(context).list_category(ListCategory(flows))

        assert next_state == MainMenu()
        assert prompter.last_labels() == ["🔙 Return to main menu"]
        output = ConsoleTestHelper.output(console)
        assert "No flows found in this org." in output
        assert "This could mean:" in output

    async def test_list_failure_offers_retry(self, context, source, prompter, console, objects):
        """Test a failed listing can be retried"""
        source.fail_list("CustomObject", ListOperationError("Failed to list Objects: timeout"))
        prompter.script(MenuAction.RETRY)
        state = ListCategory(objects)

        next_state = await BrowseWorkflow(context).list_category(state)

        assert next_state == state
        assert prompter.last_labels() == ["🔙 Return to main menu", "🔄 Try again"]
        output = ConsoleTestHelper.output(console)
        assert "❌ Error: Failed to list Objects: timeout" in output
        assert "Network connectivity issues" in output

    async def test_list_failure_back_to_main_menu(self, context, source, prompter, objects):
        source.fail_list("CustomObject", RuntimeError("boom"))
        prompter.script(MenuAction.MAIN_MENU)

        assert await BrowseWorkflow(context).list_category(ListCategory(objects)) == MainMenu()


class TestItemDetail:
    """Tests for the ItemDetail state"""

    async def test_detail_is_rendered_with_actions(self, context, source, prompter, console, objects):
        source.details[("CustomObject", "Account")] = {
            "fullName": "Account",
            "label": "Account",
            "fields": [{"fullName": "Name"}, {"fullName": "Industry"}],
        }
        prompter.script(MenuAction.BACK)

        next_state = await BrowseWorkflow(context).item_detail(ItemDetail(objects, "Account"))

        assert next_state == ListCategory(objects)
        assert prompter.last_labels() == [
            "📤 Export Object",
            "🔙 Back to Objects",
            "🏠 Main Menu",
        ]
        output = ConsoleTestHelper.output(console)
        assert "📋 Fields (2):" in output
        assert "1. Name" in output

    async def test_export_action_targets_the_item(self, context, source, prompter, objects):
        source.set_items("CustomObject", "Account")
        prompter.script(MenuAction.EXPORT)

        next_state = await BrowseWorkflow(context).item_detail(ItemDetail(objects, "Account"))

        assert next_state == ExportItem("CustomObject", "Account")

    async def test_main_menu_action(self, context, source, prompter, objects):
        source.set_items("CustomObject", "Account")
        prompter.script(MenuAction.MAIN_MENU)

        assert await BrowseWorkflow(context).item_detail(ItemDetail(objects, "Account")) == MainMenu()

    async def test_missing_item_goes_back_to_list(self, context, source, prompter, console, objects):
        """Test a vanished item explains itself without a second read"""
        prompter.script(MenuAction.BACK)

        next_state = await BrowseWorkflow(context).item_detail(ItemDetail(objects, "Ghost__c"))

        assert next_state == ListCategory(objects)
        assert source.calls_to("read") == [("read", "CustomObject", "Ghost__c")]
        assert "Object details not found." in ConsoleTestHelper.output(console)

    async def test_detail_failure_retry(self, context, source, prompter, console, objects):
        """Test a failed read can be retried and then succeeds"""
        source.set_items("CustomObject", "Account")
        source.fail_detail("CustomObject", "Account", DetailOperationError("Failed to read Account"))
        prompter.script(MenuAction.RETRY, MenuAction.MAIN_MENU)
        workflow = BrowseWorkflow(context)
        state = ItemDetail(objects, "Account")

        assert await workflow.item_detail(state) == state
        assert await workflow.item_detail(state) == MainMenu()
        assert len(source.calls_to("read")) == 2
        assert "Failed to read Account" in ConsoleTestHelper.output(console)


class TestLocalSearch:
    """Tests for the LocalSearch state"""

    def _state(self, category, *names):
        return LocalSearch(category, tuple({"fullName": n} for n in names))

    async def test_matches_are_offered(self, context, source, prompter, objects):
        """Test matching is case-insensitive and does not reload the list"""
        prompter.script("check", "Contact_Check__c")
        state = self._state(objects, "Account", "Contact_Check__c", "Lead")

        next_state = await BrowseWorkflow(context).local_search(state)

        assert next_state == ItemDetail(objects, "Contact_Check__c")
        assert prompter.last_labels() == [
            "Contact_Check__c",
            "🔍 Search again",
            "🔙 Back to Objects",
        ]
        assert source.calls == []

    async def test_no_matches_search_again(self, context, prompter, console, objects):
        prompter.script("zzz", MenuAction.SEARCH_AGAIN)
        state = self._state(objects, "Account")

        assert await BrowseWorkflow(context).local_search(state) == state
        assert 'No objects found matching "zzz"' in ConsoleTestHelper.output(console)

    async def test_no_matches_back(self, context, prompter, objects):
        prompter.script("zzz", MenuAction.BACK)

        next_state = await BrowseWorkflow(context).local_search(self._state(objects, "Account"))

        assert next_state == ListCategory(objects)

    async def test_cancel_returns_to_list(self, context, prompter, objects):
        prompter.script(CANCEL)

        next_state = await BrowseWorkflow(context).local_search(self._state(objects, "Account"))

        assert next_state == ListCategory(objects)


class TestGlobalSearch:
    """Tests for the GlobalSearch state"""

    async def test_results_span_categories(self, context, source, prompter, console):
        """Test hits from several categories are merged and labelled"""
        source.set_items("CustomObject", "Account", "Contact")
        source.set_items("Flow", "account_sync", "Lead_Router")
        prompter.script("ACC", by_label("Account (Objects)"))

        next_state = await SearchWorkflow(context).global_search(GlobalSearch())

        assert next_state == ItemDetail(lookup_by_key("CustomObject"), "Account")
        assert prompter.last_labels() == [
            "Account (Objects)",
            "account_sync (Flows)",
            "🔍 Search again",
            "🔙 Back to main menu",
        ]
        assert "Found 2 results" in ConsoleTestHelper.output(console)
        assert len(source.calls_to("list")) == 14

    async def test_failed_category_does_not_abort_search(self, context, source, prompter, console):
        """Test one failing category still yields the others' results"""
        source.set_items("CustomObject", "Account")
        source.fail_list("Flow", ListOperationError("Failed to list Flows"))
        prompter.script("acc", by_label("Account (Objects)"))

        next_state = await SearchWorkflow(context).global_search(GlobalSearch())

        assert next_state == ItemDetail(lookup_by_key("CustomObject"), "Account")
        assert "Could not search: Flows" in ConsoleTestHelper.output(console)

    async def test_no_results(self, context, prompter, console):
        prompter.script("nothing", MenuAction.SEARCH_AGAIN)

        next_state = await SearchWorkflow(context).global_search(GlobalSearch())

        assert next_state == GlobalSearch()
        output = ConsoleTestHelper.output(console)
        assert "No results found." in output
        assert "Using partial names" in output

    async def test_back_from_results(self, context, source, prompter):
        source.set_items("CustomObject", "Account")
        prompter.script("acc", MenuAction.BACK)

        assert await SearchWorkflow(context).global_search(GlobalSearch()) == MainMenu()

    async def test_cancel_term(self, context, source, prompter):
        prompter.script(CANCEL)

        assert await SearchWorkflow(context).global_search(GlobalSearch()) == MainMenu()
        assert source.calls == []


class TestExport:
    """Tests for the ExportFlow and ExportItem states"""

    async def test_export_flow_selects_component(self, context, source, prompter):
        source.set_items("Flow", "Lead_Router", "Case_Escalation")
        prompter.script("Flow", "Lead_Router")

        next_state = await ExportWorkflow(context).export_flow(ExportFlow())

        assert next_state == ExportItem("Flow", "Lead_Router")
        assert prompter.last_labels() == ["Case_Escalation", "Lead_Router", "🔙 Back to main menu"]

    async def test_export_flow_offers_every_category(self, context, prompter):
        prompter.script(MenuAction.BACK)

        assert await ExportWorkflow(context).export_flow(ExportFlow()) == MainMenu()
        labels = prompter.last_labels()
        assert labels[0] == "📋 Objects"
        assert len(labels) == 15

    async def test_export_flow_empty_category(self, context, prompter, console):
        prompter.script("Flow")

        assert await ExportWorkflow(context).export_flow(ExportFlow()) == MainMenu()
        assert "No flows found." in ConsoleTestHelper.output(console)

    async def test_export_flow_list_failure(self, context, source, prompter, console):
        source.fail_list("Flow", ListOperationError("Failed to list Flows"))
        prompter.script("Flow")

        assert await ExportWorkflow(context).export_flow(ExportFlow()) == MainMenu()
        assert "❌ Error: Failed to list Flows" in ConsoleTestHelper.output(console)

    async def test_export_item_runs_once_in_working_dir(self, context, source, prompter, console, tmp_path):
        """Test one retrieve is issued for the chosen component"""
        prompter.script(MenuAction.EXPORT_ANOTHER)

        next_state = await ExportWorkflow(context).export_item(ExportItem("Flow", "Lead_Router"))

        assert next_state == ExportFlow()
        assert source.calls_to("export") == [("export", "Flow", ("Lead_Router",), tmp_path)]
        output = ConsoleTestHelper.output(console)
        assert "Exported Lead_Router using SFDX retrieve" in output
        assert "Successfully exported Lead_Router to force-app directory" in output

    async def test_export_item_back_to_main_menu(self, context, prompter):
        prompter.script(MenuAction.MAIN_MENU)

        next_state = await ExportWorkflow(context).export_item(ExportItem("Flow", "Lead_Router"))

        assert next_state == MainMenu()
        assert prompter.last_labels() == ["📤 Export Another", "🔙 Back to Main Menu"]

    async def test_export_failure_offers_retry(self, context, source, prompter, console):
        source.export_failures["Lead_Router"] = "No source-backed components present"
        prompter.script(MenuAction.RETRY)
        state = ExportItem("Flow", "Lead_Router")

        assert await ExportWorkflow(context).export_item(state) == state
        assert "No source-backed components present" in ConsoleTestHelper.output(console)


class TestNavigator:
    """Tests for the main menu and the state loop"""

    async def test_main_menu_category(self, context, prompter, flows):
        prompter.script("flows")

        assert await Navigator(context).main_menu(MainMenu()) == ListCategory(flows)

    async def test_main_menu_lists_categories_then_actions(self, context, prompter):
        prompter.script(MenuAction.EXIT)

        await Navigator(context).main_menu(MainMenu())

        labels = prompter.last_labels()
        assert labels[:2] == ["📋 Objects", "🎨 Layouts"]
        assert labels[-3:] == ["🔍 Search Metadata", "📤 Export Component", "🚪 Exit"]

    @pytest.mark.parametrize(
        "choice, expected",
        [(MenuAction.SEARCH, GlobalSearch()), (MenuAction.EXPORT, ExportFlow())],
    )
    async def test_main_menu_actions(self, context, prompter, choice, expected):
        prompter.script(choice)

        assert await Navigator(context).main_menu(MainMenu()) == expected

    async def test_main_menu_cancel_exits(self, context, prompter, console):
        prompter.script(CANCEL)

        assert await Navigator(context).main_menu(MainMenu()) == Exit(0)
        assert "Goodbye!" in ConsoleTestHelper.output(console)

    async def test_unknown_menu_value(self, context, prompter, console):
        prompter.script("apex-classes")

        assert await Navigator(context).main_menu(MainMenu()) == MainMenu()
        assert "Invalid metadata type" in ConsoleTestHelper.output(console)

    async def test_run_browse_session(self, context, source, prompter):
        """Test a full session: list, open an item, return, exit"""
        source.set_items("CustomObject", "Account")
        prompter.script("objects", "Account", MenuAction.MAIN_MENU, MenuAction.EXIT)

        assert await Navigator(context).run() == 0
        assert source.calls == [("list", "CustomObject"), ("read", "CustomObject", "Account")]

    async def test_run_search_then_back_to_list(self, context, source, prompter):
        """Test leaving a search result's details lands on its category list"""
        source.set_items("CustomObject", "Account")
        prompter.script(
            MenuAction.SEARCH,
            "acc",
            by_label("Account (Objects)"),
            MenuAction.BACK,
            MenuAction.BACK,
            MenuAction.EXIT,
        )

        assert await Navigator(context).run() == 0
        assert source.calls[-2:] == [
            ("read", "CustomObject", "Account"),
            ("list", "CustomObject"),
        ]

    async def test_run_export_from_detail(self, context, source, prompter, tmp_path):
        source.set_items("Flow", "Lead_Router")
        prompter.script(
            "flows",
            "Lead_Router",
            MenuAction.EXPORT,
            MenuAction.MAIN_MENU,
            MenuAction.EXIT,
        )

        assert await Navigator(context).run() == 0
        assert source.calls_to("export") == [("export", "Flow", ("Lead_Router",), tmp_path)]

    async def test_run_from_initial_state(self, context, prompter):
        prompter.script(MenuAction.MAIN_MENU, MenuAction.EXIT)

        assert await Navigator(context).run(ListCategory(lookup_by_key("Flow"))) == 0

    async def test_unknown_state_rejected(self, context):
        with pytest.raises(TypeError):
            await Navigator(context).step(object())

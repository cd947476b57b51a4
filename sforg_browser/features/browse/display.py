"""Browse display coordinator (uses shared UI components)."""

from typing import Any, Callable, Dict, List, Optional

from rich.console import Console
from rich.markup import escape

from sforg_browser.core.models import MetadataItem
from sforg_browser.core.registry import CategoryDescriptor
from sforg_browser.ui.components import HeaderPanel, PropertyTable, StatusMessage
from sforg_browser.utils.console import get_console

COMMON_PROPERTIES = (
    ("label", "Label"),
    ("type", "Type"),
    ("masterLabel", "Master Label"),
    ("description", "Description"),
    ("active", "Active"),
)


def as_list(value: Any) -> List[Any]:
    """Normalise a repeated element: the API returns a bare mapping when there is only one."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def as_flag(value: Any) -> bool:
    """Read a boolean leaf: the API sends ``"true"``/``"false"`` text."""
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


def _text(value: Any) -> str:
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if value is None or value == "":
        return "N/A"
    return str(value)


class DetailDisplay:
    """Renders one metadata item: common properties, then a per-category section."""

    def __init__(self, console: Optional[Console] = None, field_preview_limit: int = 10):
        self.console = console or get_console()
        self.header = HeaderPanel(self.console)
        self.table = PropertyTable(self.console)
        self.field_preview_limit = field_preview_limit
        self._renderers: Dict[str, Callable[[MetadataItem], None]] = {
            "CustomObject": self._render_object,
            "Layout": self._render_layout,
            "FlexiPage": self._render_flexi_page,
            "ValidationRule": self._render_validation_rule,
            "Flow": self._render_flow,
            "CustomTab": self._render_tab,
            "QuickAction": self._render_quick_action,
            "PermissionSet": self._render_permission_set,
            "Profile": self._render_profile,
            "CustomMetadata": self._render_custom_metadata,
            "CustomApplication": self._render_application,
            "CustomLabel": self._render_label,
            "Report": self._render_report,
            "ReportType": self._render_report_type,
        }

    def display(self, category: CategoryDescriptor, full_name: str, item: MetadataItem) -> None:
        self.header.heading(f"{category.icon} {full_name}")
        self.table.display(self.common_rows(item))
        self.render_specific(category, item)

    @staticmethod
    def common_rows(item: MetadataItem) -> List[tuple]:
        """Rows for the shared properties that are present on ``item``."""
        rows = []
        for key, label in COMMON_PROPERTIES:
            value = item.get(key)
            if key == "active":
                if value is not None:
                    rows.append((label, as_flag(value)))
            elif value:
                rows.append((label, value))
        return rows

    def render_specific(self, category: CategoryDescriptor, item: MetadataItem) -> None:
        renderer = self._renderers.get(category.key)
        if renderer is not None:
            renderer(item)

    ## Section helpers

    def _section(self, title: str) -> None:
        self.console.print(f"\n[bold blue]{escape(title)}[/bold blue]")

    def _numbered(self, entries: List[str]) -> None:
        for index, entry in enumerate(entries, start=1):
            self.console.print(f"  {index}. {escape(entry)}", highlight=False)

    def _property(self, label: str, value: Any) -> None:
        self.console.print(f"[cyan]{escape(label)}:[/cyan] {escape(_text(value))}", highlight=False)

    ## Per-category renderers

    def _render_object(self, item: MetadataItem) -> None:
        fields = as_list(item.get("fields"))
        if not fields:
            return
        self._section(f"📋 Fields ({len(fields)}):")
        limit = self.field_preview_limit
        self._numbered([
            str(f.get("fullName") or f.get("name") or "?") if isinstance(f, dict) else str(f)
            for f in fields[:limit]
        ])
        if len(fields) > limit:
            self.console.print(f"[dim]  ... and {len(fields) - limit} more fields[/dim]")

    def _render_layout(self, item: MetadataItem) -> None:
        sections = as_list(item.get("layoutSections"))
        if not sections:
            return
        self._section(f"📋 Sections ({len(sections)}):")
        self._numbered([
            (s.get("label") if isinstance(s, dict) else None) or "Unnamed Section"
            for s in sections
        ])

    def _render_flexi_page(self, item: MetadataItem) -> None:
        regions = as_list(item.get("flexiPageRegions"))
        if not regions:
            return
        self._section(f"📋 Regions ({len(regions)}):")
        self._numbered([
            (r.get("name") if isinstance(r, dict) else None) or "Unnamed Region"
            for r in regions
        ])

    def _render_validation_rule(self, item: MetadataItem) -> None:
        formula = item.get("errorConditionFormula")
        if not formula:
            return
        self._section("🔍 Error Condition Formula:")
        self.console.print(f"[dim]{escape(str(formula))}[/dim]", highlight=False)

    def _render_flow(self, item: MetadataItem) -> None:
        if not item.get("processType"):
            return
        self._section("🌊 Flow Properties:")
        self._property("Process Type", item["processType"])
        self._property("Status", item.get("status"))

    def _render_tab(self, item: MetadataItem) -> None:
        if not item.get("sObjectName"):
            return
        self._section("📑 Tab Properties:")
        self._property("SObject", item["sObjectName"])
        self._property("Tab Style", item.get("tabStyle"))

    def _render_quick_action(self, item: MetadataItem) -> None:
        if not item.get("type"):
            return
        self._section("⚡ Quick Action Properties:")
        self._property("Type", item["type"])
        self._property("Target Object", item.get("targetObject"))

    def _render_permission_set(self, item: MetadataItem) -> None:
        if not item.get("description"):
            return
        self._section("🔐 Permission Set Properties:")
        self._property("Description", item["description"])
        self._property("License", item.get("license"))

    def _render_profile(self, item: MetadataItem) -> None:
        if not item.get("userLicense"):
            return
        self._section("👤 Profile Properties:")
        self._property("User License", item["userLicense"])
        self._property("Custom", as_flag(item.get("custom")))

    def _render_custom_metadata(self, item: MetadataItem) -> None:
        if not item.get("label"):
            return
        self._section("📊 Custom Metadata Properties:")
        self._property("Label", item["label"])
        self._property("Type", item.get("type"))

    def _render_application(self, item: MetadataItem) -> None:
        form_factors = as_list(item.get("formFactors"))
        if not form_factors:
            return
        self._section("📱 Application Properties:")
        self._property("Form Factors", ", ".join(str(f) for f in form_factors))
        self._property("Theme", item.get("theme"))

    def _render_label(self, item: MetadataItem) -> None:
        if not item.get("language"):
            return
        self._section("🏷️ Label Properties:")
        self._property("Language", item["language"])
        self._property("Protected", as_flag(item.get("protected")))

    def _render_report(self, item: MetadataItem) -> None:
        if not item.get("reportType"):
            return
        self._section("📈 Report Properties:")
        self._property("Report Type", item["reportType"])
        self._property("Format", item.get("format"))

    def _render_report_type(self, item: MetadataItem) -> None:
        if not item.get("baseObject"):
            return
        self._section("📋 Report Type Properties:")
        self._property("Base Object", item["baseObject"])
        self._property("Category", item.get("category"))


class BrowseDisplay:
    """Explanations shown for empty, failed and missing results."""

    def __init__(self, console: Optional[Console] = None):
        self.message = StatusMessage(console)

    def show_empty(self, category: CategoryDescriptor) -> None:
        plural = category.display_name.lower()
        self.message.warning(f"\n📭 No {plural} found in this org.")
        self.message.hint("This could mean:", [
            "No items of this type exist in your org",
            "You don't have permission to view this metadata",
            "The metadata type is not available in your org edition",
        ])

    def show_list_failure(self, error_text: str) -> None:
        self.message.error(error_text)
        self.message.hint("This could be due to:", [
            "Network connectivity issues",
            "Invalid org credentials",
            "Insufficient permissions",
            "API rate limiting",
        ])

    def show_not_found(self, category: CategoryDescriptor) -> None:
        self.message.warning(f"\n📭 {category.singular_name} details not found.")
        self.message.hint("This could mean:", [
            "The item was deleted or renamed",
            "You don't have permission to view this item",
            "The item is not available in your org edition",
        ])

    def show_no_matches(self, category: CategoryDescriptor, term: str) -> None:
        self.message.warning(f'No {category.display_name.lower()} found matching "{term}"')
        self.message.hint("Try:", ["Using a different search term", "Checking spelling"])

    def show_error(self, error_text: str) -> None:
        self.message.error(error_text)

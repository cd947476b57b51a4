"""Catalog of the metadata categories the browser knows how to list and read."""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class CategoryDescriptor:
    """Static description of one metadata category."""

    key: str
    display_name: str
    icon: str
    description: str
    export_type: str
    menu_value: str
    list_operation: str
    detail_operation: str

    @property
    def menu_label(self) -> str:
        return f"{self.icon} {self.display_name}"

    @property
    def singular_name(self) -> str:
        """Display name without its plural suffix ("Flows" -> "Flow")."""
        if self.display_name.endswith("s"):
            return self.display_name[:-1]
        return self.display_name


def _category(key, display_name, icon, description, menu_value, list_operation, detail_operation):
    return CategoryDescriptor(
        key=key,
        display_name=display_name,
        icon=icon,
        description=description,
        export_type=key,
        menu_value=menu_value,
        list_operation=list_operation,
        detail_operation=detail_operation,
    )


# Registration order is menu order.
CATEGORIES: Tuple[CategoryDescriptor, ...] = (
    _category("CustomObject", "Objects", "📋", "Custom and standard objects",
              "objects", "get_objects", "get_object_details"),
    _category("Layout", "Layouts", "🎨", "Page layouts",
              "layouts", "get_layouts", "get_layout_details"),
    _category("FlexiPage", "FlexiPages", "⚡", "Lightning page layouts and flexipages",
              "flexipages", "get_flexi_pages", "get_flexi_page_details"),
    _category("ValidationRule", "Validation Rules", "✅", "Field and object validation rules",
              "validation-rules", "get_validation_rules", "get_validation_rule_details"),
    _category("Flow", "Flows", "🌊", "Flow automation processes",
              "flows", "get_flows", "get_flow_details"),
    _category("CustomTab", "Tabs", "📑", "Custom tabs and standard tabs",
              "tabs", "get_tabs", "get_tab_details"),
    _category("QuickAction", "Quick Actions", "⚡", "Quick actions and global actions",
              "quick-actions", "get_quick_actions", "get_quick_action_details"),
    _category("PermissionSet", "Permission Sets", "🔐", "Permission sets",
              "permission-sets", "get_permission_sets", "get_permission_set_details"),
    _category("Profile", "Profiles", "👤", "User profiles",
              "profiles", "get_profiles", "get_profile_details"),
    _category("CustomMetadata", "Custom Metadata", "📊", "Custom metadata types and records",
              "custom-metadata", "get_custom_metadata", "get_custom_metadata_details"),
    _category("CustomApplication", "Applications", "📱", "Lightning applications",
              "applications", "get_applications", "get_application_details"),
    _category("CustomLabel", "Labels", "🏷️", "Custom labels",
              "labels", "get_labels", "get_label_details"),
    _category("Report", "Reports", "📈", "Reports and dashboards",
              "reports", "get_reports", "get_report_details"),
    _category("ReportType", "Report Types", "📋", "Report types and templates",
              "report-types", "get_report_types", "get_report_type_details"),
)

_BY_KEY: Dict[str, CategoryDescriptor] = {c.key: c for c in CATEGORIES}

if len(_BY_KEY) != len(CATEGORIES):
    raise RuntimeError("Duplicate category key in registry")
if len({c.menu_value for c in CATEGORIES}) != len(CATEGORIES):
    raise RuntimeError("Duplicate menu value in registry")


def lookup_by_key(key: str) -> Optional[CategoryDescriptor]:
    return _BY_KEY.get(key)


def lookup_by_menu_value(value: str) -> Optional[CategoryDescriptor]:
    return next((c for c in CATEGORIES if c.menu_value == value), None)


def lookup_by_export_type(export_type: str) -> Optional[CategoryDescriptor]:
    return next((c for c in CATEGORIES if c.export_type == export_type), None)


def all_descriptors() -> Tuple[CategoryDescriptor, ...]:
    return CATEGORIES


def category_keys() -> Tuple[str, ...]:
    return tuple(c.key for c in CATEGORIES)


def operation_mappings() -> Dict[str, Dict[str, str]]:
    """Map each export type to the names of its list and detail operations."""
    return {
        c.export_type: {"list": c.list_operation, "detail": c.detail_operation}
        for c in CATEGORIES
    }


MENU_CHOICES: Tuple[Tuple[str, str], ...] = tuple(
    (c.menu_label, c.menu_value) for c in CATEGORIES
)


def menu_choices() -> Tuple[Tuple[str, str], ...]:
    return MENU_CHOICES

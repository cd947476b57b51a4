"""Navigation states.

Each screen of the browser is one of these values. A state handler shows the
screen, waits for the user, and returns the next state; the navigator loop
keeps going until it receives ``Exit``.
"""

from dataclasses import dataclass
from typing import Tuple, Union

from sforg_browser.core.models import MetadataItem
from sforg_browser.core.registry import CategoryDescriptor


@dataclass(frozen=True)
class MainMenu:
    """Top-level menu of categories and actions."""


@dataclass(frozen=True)
class ListCategory:
    """Items of one category."""

    category: CategoryDescriptor


@dataclass(frozen=True)
class ItemDetail:
    """Full details of a single item."""

    category: CategoryDescriptor
    full_name: str


@dataclass(frozen=True)
class GlobalSearch:
    """Search across every category."""


@dataclass(frozen=True)
class LocalSearch:
    """Search within an already-listed category."""

    category: CategoryDescriptor
    items: Tuple[MetadataItem, ...]


@dataclass(frozen=True)
class ExportFlow:
    """Pick a category and an item to export."""


@dataclass(frozen=True)
class ExportItem:
    """Export one named component."""

    export_type: str
    full_name: str


@dataclass(frozen=True)
class Exit:
    """Leave the browser with ``code``."""

    code: int = 0


State = Union[MainMenu, ListCategory, ItemDetail, GlobalSearch, LocalSearch, ExportFlow, ExportItem, Exit]

"""Category browsing feature.

Public API:
    BrowseWorkflow - Category listing, item details and in-list search
    DetailDisplay - Per-category rendering of a single item
"""

from .display import BrowseDisplay, DetailDisplay
from .workflow import BrowseWorkflow

__all__ = ["BrowseDisplay", "BrowseWorkflow", "DetailDisplay"]

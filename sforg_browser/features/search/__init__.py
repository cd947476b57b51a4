"""Metadata search feature.

Public API:
    SearchQuery - Case-insensitive substring match on item names
    SearchWorkflow - Global search across every category
    sort_items(items) / sort_hits(hits) -> Name-ordered copies
    validate_term(text) -> True, or the message for an empty term
"""

from .query import SearchQuery, name_sort_key, sort_hits, sort_items, validate_term
from .workflow import SearchWorkflow

__all__ = [
    "SearchQuery",
    "SearchWorkflow",
    "name_sort_key",
    "sort_hits",
    "sort_items",
    "validate_term",
]

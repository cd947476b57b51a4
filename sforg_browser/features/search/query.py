"""Search term handling, filtering and ordering of metadata items."""

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from sforg_browser.core.models import MetadataItem, SearchHit
from sforg_browser.utils.errors import EmptySearchTermError

EMPTY_TERM_MESSAGE = EmptySearchTermError.user_message


def name_sort_key(full_name: str) -> Tuple[str, str]:
    """Dictionary-style ordering: case-insensitive first, lowercase before uppercase on ties.

    ``["Zeta", "Alpha", "beta"]`` sorts as ``["Alpha", "beta", "Zeta"]``.
    """
    return (full_name.casefold(), full_name.swapcase())


def sort_items(items: Iterable[MetadataItem]) -> List[MetadataItem]:
    return sorted(items, key=lambda item: name_sort_key(item["fullName"]))


def sort_hits(hits: Iterable[SearchHit]) -> List[SearchHit]:
    return sorted(hits, key=lambda hit: name_sort_key(hit.full_name))


def validate_term(text: str):
    """Prompt validator: True for a usable term, otherwise the error text."""
    return True if text and text.strip() else EMPTY_TERM_MESSAGE


@dataclass(frozen=True)
class SearchQuery:
    """A case-insensitive substring match on ``fullName``."""

    term: str

    def __post_init__(self):
        if not self.term or not self.term.strip():
            raise EmptySearchTermError()

    @property
    def needle(self) -> str:
        return self.term.strip().lower()

    def matches(self, full_name: str) -> bool:
        return self.needle in full_name.lower()

    def filter_items(self, items: Iterable[MetadataItem]) -> List[MetadataItem]:
        return [item for item in items if self.matches(item["fullName"])]

    def filter_hits(self, hits: Iterable[SearchHit]) -> List[SearchHit]:
        return [hit for hit in hits if self.matches(hit.full_name)]

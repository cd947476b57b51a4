"""Core domain: category registry, models and the metadata source interface."""

from .models import ConnectionInfo, ExportResult, MetadataItem, SearchHit
from .registry import CategoryDescriptor, all_descriptors, lookup_by_key
from .source import MetadataSource

__all__ = [
    "ConnectionInfo",
    "ExportResult",
    "MetadataItem",
    "SearchHit",
    "CategoryDescriptor",
    "all_descriptors",
    "lookup_by_key",
    "MetadataSource",
]

"""Capability interface the navigation layer needs from a metadata backend."""

from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Union

from .models import ExportResult, MetadataItem
from .registry import CategoryDescriptor


class MetadataSource(Protocol):
    """Anything that can list, read and export metadata by category.

    ``list_items`` and ``read_item`` raise ``MetadataOperationError`` subclasses
    on failure. ``read_item`` returns ``None`` when the component does not exist.
    """

    async def list_items(self, category: CategoryDescriptor) -> List[MetadataItem]:
        ...

    async def read_item(
        self, category: CategoryDescriptor, full_name: str
    ) -> Optional[MetadataItem]:
        ...

    async def export(
        self,
        export_type: str,
        full_names: Union[str, Sequence[str]],
        working_dir: Path,
    ) -> ExportResult:
        ...

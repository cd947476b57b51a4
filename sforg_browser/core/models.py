"""Domain models shared by the connector and the navigation layer"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .registry import CategoryDescriptor

# A metadata component as returned by the remote API: always carries
# ``fullName``, everything else depends on the category.
MetadataItem = Dict[str, Any]


@dataclass(frozen=True)
class ConnectionInfo:
    """Session metadata for the connected org."""

    org_id: str
    user_id: str
    username: str
    instance_url: str
    org_type: str = "Production"
    api_version: Optional[str] = None

    @classmethod
    def from_org_display(cls, result: Dict[str, Any]) -> "ConnectionInfo":
        """Build from the ``result`` object of ``sf org display --json``."""
        return cls(
            org_id=result.get("id") or result.get("organization_id") or "",
            user_id=result.get("userId") or result.get("user_id") or "",
            username=result.get("username", ""),
            instance_url=result.get("instanceUrl", ""),
            org_type=result.get("orgType") or result.get("org_type") or "Production",
            api_version=result.get("apiVersion"),
        )


@dataclass(frozen=True)
class SearchHit:
    """A metadata item found by global search, tagged with its category."""

    item: MetadataItem
    category: CategoryDescriptor

    @property
    def full_name(self) -> str:
        return self.item["fullName"]


@dataclass
class ExportResult:
    """Outcome of exporting one or more components of a single type."""

    export_type: str
    requested: List[str]
    succeeded: List[str] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed and len(self.succeeded) == len(self.requested)

    def failure_summary(self) -> str:
        return "; ".join(f"{name}: {reason}" for name, reason in self.failed)

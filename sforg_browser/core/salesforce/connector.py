"""Salesforce org connector backed by the sf CLI session."""

from pathlib import Path
from typing import List, Optional, Sequence, Union

from sforg_browser.core.models import ConnectionInfo, ExportResult, MetadataItem
from sforg_browser.core.registry import CategoryDescriptor
from sforg_browser.utils.errors import (
    BrowserError,
    DetailOperationError,
    ListOperationError,
    NotConnectedError,
    OrgConnectionError,
)
from sforg_browser.utils.logging import async_log_call, get_logger, log_event

from .metadata_api import MetadataApiClient
from .sf_cli import SfCli

logger = get_logger(__name__)


class SalesforceConnector:
    """Authenticated access to one org's metadata.

    The session comes from the sf CLI's default org for the working
    directory; listing and reading go through the Metadata API, exports
    through ``sf project retrieve start``.
    """

    def __init__(
        self,
        sf_cli: Optional[SfCli] = None,
        default_api_version: str = "60.0",
        request_timeout: float = 120.0,
    ):
        self.sf_cli = sf_cli or SfCli()
        self.default_api_version = default_api_version
        self.request_timeout = request_timeout
        self.api: Optional[MetadataApiClient] = None
        self.info: Optional[ConnectionInfo] = None
        self.log = logger

    @property
    def connected(self) -> bool:
        return self.api is not None

    @async_log_call
    async def connect(self, working_dir: Path) -> ConnectionInfo:
        """Establish a session from the sf CLI default org.

        Raises:
            OrgConnectionError: no usable session for ``working_dir``
        """
        try:
            await self.sf_cli.version()
            org = await self.sf_cli.org_display(working_dir)
        except OrgConnectionError:
            raise
        except BrowserError as e:
            raise OrgConnectionError(f"Connection failed: {e.message}") from e
        except Exception as e:
            raise OrgConnectionError(f"Connection failed: {e}") from e

        self.info = ConnectionInfo.from_org_display(org)
        self.api = MetadataApiClient(
            instance_url=org["instanceUrl"],
            session_id=org["accessToken"],
            api_version=self.info.api_version or self.default_api_version,
            timeout=self.request_timeout,
        )
        self.log = get_logger(
            __name__,
            context={"org_id": self.info.org_id, "instance_url": self.info.instance_url},
        )
        self.log.info(f"Connected to {self.info.instance_url} as {self.info.username}")
        return self.info

    def connection_info(self) -> Optional[ConnectionInfo]:
        return self.info

    def _require_api(self) -> MetadataApiClient:
        if self.api is None:
            raise NotConnectedError()
        return self.api

    async def list_items(self, category: CategoryDescriptor) -> List[MetadataItem]:
        api = self._require_api()
        self.log.debug(f"{category.list_operation}: listing {category.key}")
        try:
            return await api.list_metadata(category.key)
        except ListOperationError:
            raise
        except BrowserError as e:
            raise ListOperationError(
                f"Failed to list {category.display_name}: {e.message}",
                details={"type": category.key},
            ) from e

    async def read_item(
        self, category: CategoryDescriptor, full_name: str
    ) -> Optional[MetadataItem]:
        api = self._require_api()
        self.log.debug(f"{category.detail_operation}: reading {category.key} {full_name}")
        try:
            return await api.read_metadata(category.key, full_name)
        except DetailOperationError:
            raise
        except BrowserError as e:
            raise DetailOperationError(
                f"Failed to read {full_name}: {e.message}",
                details={"type": category.key, "fullName": full_name},
            ) from e

    @async_log_call
    async def export(
        self,
        export_type: str,
        full_names: Union[str, Sequence[str]],
        working_dir: Path,
    ) -> ExportResult:
        """Retrieve components into the local project; per-name failures are collected."""
        self._require_api()
        names = [full_names] if isinstance(full_names, str) else list(full_names)
        result = ExportResult(export_type=export_type, requested=names)

        for name in names:
            self.log.info(f"Exporting {export_type}:{name}")
            outcome = await self.sf_cli.retrieve(export_type, name, working_dir)
            if outcome.ok:
                result.succeeded.append(name)
            else:
                reason = outcome.error_text()
                self.log.info(f"Failed to export {export_type}:{name}: {reason}")
                result.failed.append((name, reason))

        log_event(
            "export",
            f"Exported {len(result.succeeded)}/{len(names)} {export_type} component(s)",
            export_type=export_type,
            succeeded=result.succeeded,
            failed=[name for name, _ in result.failed],
            working_dir=str(working_dir),
        )
        return result

    async def disconnect(self) -> None:
        """Release the HTTP session; the sf CLI keeps its own login."""
        if self.api is not None:
            await self.api.close()
        self.api = None
        self.info = None
        self.log = logger

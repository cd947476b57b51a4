"""Minimal Metadata API (SOAP) client for listing and reading components.

Only the two calls the browser needs are implemented: ``listMetadata`` and
``readMetadata``. Responses are converted into plain dictionaries keyed by
element name; repeated elements become lists and every leaf stays a string,
so component names such as ``true`` survive untouched.
"""

import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional
from xml.sax.saxutils import escape

import httpx

from sforg_browser.utils.errors import (
    DetailOperationError,
    ListOperationError,
    MetadataOperationError,
)
from sforg_browser.utils.logging import async_log_call, get_logger

logger = get_logger(__name__)

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"
METADATA_NS = "http://soap.sforce.com/2006/04/metadata"
XSI_NIL = "{http://www.w3.org/2001/XMLSchema-instance}nil"

_ENVELOPE = (
    '<?xml version="1.0" encoding="utf-8"?>'
    f'<soapenv:Envelope xmlns:soapenv="{SOAP_ENV_NS}" xmlns:met="{METADATA_NS}">'
    "<soapenv:Header><met:SessionHeader><met:sessionId>{session_id}</met:sessionId>"
    "</met:SessionHeader></soapenv:Header>"
    "<soapenv:Body>{body}</soapenv:Body>"
    "</soapenv:Envelope>"
)


class SoapFault(MetadataOperationError):
    """Raised when the Metadata API answers with a SOAP fault."""

    user_message = "Salesforce rejected the request"

    def __init__(self, code: str, message: str):
        super().__init__(message=f"{code}: {message}", details={"faultcode": code})
        self.code = code


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def element_to_value(element: ET.Element) -> Any:
    """Convert a response element into dicts, lists and scalars."""
    if element.get(XSI_NIL) == "true":
        return None

    children = list(element)
    if not children:
        return (element.text or "").strip()

    result: Dict[str, Any] = {}
    for child in children:
        name = _local_name(child.tag)
        value = element_to_value(child)
        if name in result:
            existing = result[name]
            if isinstance(existing, list):
                existing.append(value)
            else:
                result[name] = [existing, value]
        else:
            result[name] = value
    return result


def parse_response(content: bytes, operation: str) -> List[ET.Element]:
    """Return the ``result`` elements of a ``<operation>Response`` body.

    Raises:
        SoapFault: the body holds a SOAP fault
        MetadataOperationError: the document is not a SOAP response
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise MetadataOperationError(f"Malformed Metadata API response: {e}") from e

    body = root.find(f"{{{SOAP_ENV_NS}}}Body")
    if body is None:
        raise MetadataOperationError("Metadata API response has no SOAP body")

    fault = body.find(f"{{{SOAP_ENV_NS}}}Fault")
    if fault is not None:
        code = (fault.findtext("faultcode") or "UNKNOWN").split(":")[-1]
        raise SoapFault(code, fault.findtext("faultstring") or "Unknown fault")

    response = body.find(f"{{{METADATA_NS}}}{operation}Response")
    if response is None:
        raise MetadataOperationError(f"Missing {operation}Response in Metadata API reply")

    return response.findall(f"{{{METADATA_NS}}}result")


class MetadataApiClient:
    """Issues Metadata API calls for one authenticated session."""

    def __init__(
        self,
        instance_url: str,
        session_id: str,
        api_version: str,
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoint = f"{instance_url.rstrip('/')}/services/Soap/m/{api_version}"
        self.api_version = api_version
        self._session_id = session_id
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        await self._client.aclose()

    async def _call(self, operation: str, body: str) -> List[ET.Element]:
        envelope = _ENVELOPE.format(session_id=escape(self._session_id), body=body)
        response = await self._client.post(
            self.endpoint,
            content=envelope.encode("utf-8"),
            headers={"Content-Type": "text/xml; charset=utf-8", "SOAPAction": '""'},
        )
        logger.debug(f"{operation} -> HTTP {response.status_code}")

        # Faults arrive as HTTP 500 with a SOAP body, so parse before checking status.
        if response.content.lstrip().startswith(b"<"):
            return parse_response(response.content, operation)

        response.raise_for_status()
        raise MetadataOperationError(f"Unexpected {operation} response: HTTP {response.status_code}")

    @async_log_call
    async def list_metadata(self, metadata_type: str) -> List[Dict[str, Any]]:
        """List all components of ``metadata_type``."""
        body = (
            "<met:listMetadata>"
            f"<met:queries><met:type>{escape(metadata_type)}</met:type></met:queries>"
            f"<met:asOfVersion>{escape(self.api_version)}</met:asOfVersion>"
            "</met:listMetadata>"
        )
        try:
            results = await self._call("listMetadata", body)
        except httpx.HTTPError as e:
            raise ListOperationError(
                f"Failed to list {metadata_type}: {e}", details={"type": metadata_type}
            ) from e

        items = [element_to_value(r) for r in results]
        return [item for item in items if isinstance(item, dict) and item.get("fullName")]

    @async_log_call
    async def read_metadata(self, metadata_type: str, full_name: str) -> Optional[Dict[str, Any]]:
        """Read one component; ``None`` when it does not exist."""
        body = (
            "<met:readMetadata>"
            f"<met:type>{escape(metadata_type)}</met:type>"
            f"<met:fullNames>{escape(full_name)}</met:fullNames>"
            "</met:readMetadata>"
        )
        try:
            results = await self._call("readMetadata", body)
        except httpx.HTTPError as e:
            raise DetailOperationError(
                f"Failed to read {metadata_type} {full_name}: {e}",
                details={"type": metadata_type, "fullName": full_name},
            ) from e

        for result in results:
            for record in result.findall(f"{{{METADATA_NS}}}records"):
                value = element_to_value(record)
                if isinstance(value, dict) and value.get("fullName"):
                    return value
        return None

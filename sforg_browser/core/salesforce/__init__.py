"""Salesforce backend: sf CLI session, Metadata API calls and exports."""

from .connector import SalesforceConnector
from .metadata_api import MetadataApiClient, SoapFault
from .sf_cli import CommandResult, SfCli, extract_json

__all__ = [
    "SalesforceConnector",
    "MetadataApiClient",
    "SoapFault",
    "CommandResult",
    "SfCli",
    "extract_json",
]

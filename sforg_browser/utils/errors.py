"""Centralized error handling module."""

from enum import Enum
from typing import Any, Dict, Optional

from sforg_browser.utils.logging import get_logger

_logger = None


def _get_logger():
    """Get logger with lazy initialisation."""
    global _logger
    if _logger is None:
        _logger = get_logger(__name__)
    return _logger


## Error Categories


class ErrorCategory(Enum):
    """Categories of errors for better handling."""

    CONNECTION = "connection"
    OPERATION = "operation"
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


## Custom Exceptions


class BrowserError(Exception):
    """Base exception for all org browser errors."""

    category = ErrorCategory.UNKNOWN
    user_message = "An error occurred"

    def __init__(
        self, message: str | None = None, details: Dict[str, Any] | None = None
    ):
        """Initialise BrowserError with optional message and details."""
        self.message = message or self.user_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error details to a dictionary."""
        return {
            "error_type": self.__class__.__name__,
            "category": self.category.value,
            "message": self.message,
            "details": self.details,
        }


## Connection Errors


class OrgConnectionError(BrowserError):
    """Base exception for failures to establish an org session."""

    category = ErrorCategory.CONNECTION
    user_message = "Failed to connect to Salesforce"


class CliNotFoundError(OrgConnectionError):
    """Exception when the sf CLI cannot be executed."""

    user_message = "Salesforce CLI (sf) is not installed or not on PATH"


class SessionNotFoundError(OrgConnectionError):
    """Exception when no default org is configured for the directory."""

    user_message = "No default org configured for this directory. Please run: sf org login web"


class MalformedSessionError(OrgConnectionError):
    """Exception when the sf CLI session output cannot be understood."""

    user_message = "Could not parse org display output"


## Operation Errors


class MetadataOperationError(BrowserError):
    """Base exception for failed list/detail/export operations."""

    category = ErrorCategory.OPERATION
    user_message = "A metadata operation failed"


class NotConnectedError(MetadataOperationError):
    """Exception when an operation is attempted without a session."""

    user_message = "Not connected to Salesforce"


class ListOperationError(MetadataOperationError):
    """Exception for failures while listing metadata."""

    user_message = "Failed to list metadata"


class DetailOperationError(MetadataOperationError):
    """Exception for failures while reading metadata."""

    user_message = "Failed to read metadata"


class ExportError(MetadataOperationError):
    """Exception for failures while exporting metadata."""

    user_message = "Export failed"


## Validation Errors


class ValidationError(BrowserError):
    """Base exception for validation-related errors."""

    category = ErrorCategory.VALIDATION
    user_message = "Invalid input"


class EmptySearchTermError(ValidationError):
    """Exception for blank search terms."""

    user_message = "Please enter a search term"


## Configuration Errors


class ConfigurationError(BrowserError):
    """Base exception for configuration-related errors."""

    category = ErrorCategory.CONFIGURATION
    user_message = "A configuration error occurred"


class InvalidConfigError(ConfigurationError):
    """Exception for invalid configuration settings."""

    user_message = "Invalid configuration settings"


## Error Handler


class ErrorHandler:
    """Centralized error handling and logging."""

    @staticmethod
    def handle(
        error: Exception, context: str = "", log_traceback: bool = True
    ) -> Dict[str, Any]:
        """Handle errors with logging and user-friendly message."""
        if isinstance(error, BrowserError):
            _get_logger().error(f"{context}: {error.message}", extra={"context": error.details})
            if log_traceback:
                _get_logger().exception(error)
            return error.to_dict()
        else:
            _get_logger().error(f"{context}: {str(error)}")
            if log_traceback:
                _get_logger().exception(error)
            return {
                "error_type": "UnknownError",
                "category": ErrorCategory.UNKNOWN.value,
                "message": str(error),
                "details": {"context": context},
            }


## Utility Functions


def format_error_message(error: Optional[BaseException]) -> str:
    """Format an error message for display."""
    if isinstance(error, BrowserError):
        return error.message
    if error is None:
        return "An unexpected error occurred"
    return str(error) or "An unexpected error occurred - check logs for details."

"""
Tests for the error hierarchy and error handling helpers
"""
import pytest

from sforg_browser.utils.errors import (
    BrowserError,
    CliNotFoundError,
    DetailOperationError,
    EmptySearchTermError,
    ErrorCategory,
    ErrorHandler,
    ExportError,
    InvalidConfigError,
    ListOperationError,
    MetadataOperationError,
    OrgConnectionError,
    SessionNotFoundError,
    format_error_message,
)


class TestHierarchy:
    """Tests for error classification"""

    @pytest.mark.parametrize(
        "error_class, category",
        [
            (CliNotFoundError, ErrorCategory.CONNECTION),
            (SessionNotFoundError, ErrorCategory.CONNECTION),
            (ListOperationError, ErrorCategory.OPERATION),
            (DetailOperationError, ErrorCategory.OPERATION),
            (ExportError, ErrorCategory.OPERATION),
            (EmptySearchTermError, ErrorCategory.VALIDATION),
            (InvalidConfigError, ErrorCategory.CONFIGURATION),
        ],
    )
    def test_categories(self, error_class, category):
        error = error_class()
        assert error.category is category
        assert isinstance(error, BrowserError)

    def test_connection_errors_share_a_base(self):
        assert issubclass(SessionNotFoundError, OrgConnectionError)
        assert issubclass(ExportError, MetadataOperationError)

    def test_default_message(self):
        assert str(SessionNotFoundError()) == (
            "No default org configured for this directory. Please run: sf org login web"
        )

    def test_to_dict(self):
        error = ListOperationError("Failed to list Flows", details={"type": "Flow"})
        assert error.to_dict() == {
            "error_type": "ListOperationError",
            "category": "operation",
            "message": "Failed to list Flows",
            "details": {"type": "Flow"},
        }


class TestErrorHandler:
    """Tests for centralised error handling"""

    def test_handle_browser_error(self, caplog):
        info = ErrorHandler.handle(ExportError("Export of X failed"), "Exporting", log_traceback=False)

        assert info["error_type"] == "ExportError"
        assert "Exporting: Export of X failed" in caplog.text

    def test_handle_unknown_error(self):
        info = ErrorHandler.handle(RuntimeError("boom"), "Listing", log_traceback=False)

        assert info["category"] == "unknown"
        assert info["details"] == {"context": "Listing"}


class TestFormatErrorMessage:
    """Tests for user-facing error text"""

    def test_browser_error_uses_message(self):
        assert format_error_message(DetailOperationError("Failed to read Account")) == "Failed to read Account"

    def test_plain_exception(self):
        assert format_error_message(RuntimeError("socket closed")) == "socket closed"

    def test_empty_exception(self):
        assert "unexpected error" in format_error_message(RuntimeError())

    def test_none(self):
        assert format_error_message(None) == "An unexpected error occurred"

"""Interactive terminal browser for Salesforce org metadata."""

__version__ = "0.1.0"

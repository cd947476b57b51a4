"""Command-line entry point for the org browser."""

from .cli import main, run_browser

__all__ = ["main", "run_browser"]

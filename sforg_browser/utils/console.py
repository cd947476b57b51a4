"""Centralised console management module"""

from typing import Optional

from rich.console import Console

_console: Optional[Console] = None


def get_console() -> Console:
    """Get the shared Console instance"""
    global _console

    if _console is None:
        _console = Console()

    return _console


def reset_console() -> None:
    """Reset the shared Console instance (for testing purposes)"""
    global _console
    _console = None


def clear_screen(console: Optional[Console] = None) -> None:
    """Clear the terminal when attached to one."""
    output_console = console or get_console()
    if output_console.is_terminal:
        output_console.clear()

"""Argument parser configuration for the org browser."""

import argparse

from sforg_browser import __version__

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def setup_argument_parser() -> argparse.ArgumentParser:
    """Setup and return the argument parser."""

    parser = argparse.ArgumentParser(
        prog="sforg-browser",
        description=(
            "Interactive terminal browser for Salesforce org metadata. "
            "Uses the sf CLI default org of the current directory."
        ),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Console log level (default: from config, WARNING)",
    )
    return parser

"""Centralized path definitions for the org browser.

Single source of truth for the few locations the application touches outside
the current working directory.
"""

from pathlib import Path

# Base application directory
BROWSER_DIR = Path.home() / ".sforg_browser"

# Subdirectories
LOGS_DIR = BROWSER_DIR / "logs"

# Specific files
CONFIG_PATH = BROWSER_DIR / "config.json"

# Directory the sf CLI materialises retrieved source into
DEFAULT_PACKAGE_DIR = "force-app"

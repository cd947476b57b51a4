"""
Shared test fixtures and configuration for pytest
"""
from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console

from sforg_browser.core.registry import lookup_by_key
from sforg_browser.features.base import BrowserContext
from sforg_browser.utils.config import ConfigManager
from sforg_browser.utils.console import reset_console
from sforg_browser.utils.logging import reset_logging

from .test_helpers import ScriptedPrompter, StubSource


@pytest.fixture(autouse=True)
def reset_singletons():
    """Give every test a fresh config, console and logging setup"""
    ConfigManager.reset()
    reset_console()
    reset_logging()
    yield
    ConfigManager.reset()
    reset_console()
    reset_logging()


@pytest.fixture
def console():
    """Console writing to an in-memory buffer"""
    return Console(file=StringIO(), force_terminal=False, width=120)


@pytest.fixture
def source():
    """Metadata source with no items in any category"""
    return StubSource()


@pytest.fixture
def prompter():
    """Prompter that answers from a script"""
    return ScriptedPrompter()


@pytest.fixture
def context(source, prompter, console, tmp_path):
    """Browser context wired to the stubs"""
    return BrowserContext(
        source=source,
        prompter=prompter,
        console=console,
        working_dir=tmp_path,
        clear_screen=False,
    )


@pytest.fixture
def objects():
    return lookup_by_key("CustomObject")


@pytest.fixture
def flows():
    return lookup_by_key("Flow")


@pytest.fixture
def tmp_config(tmp_path) -> Path:
    """Path for a throwaway config file"""
    return tmp_path / "config.json"

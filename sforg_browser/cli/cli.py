"""Main CLI entry point: connect to the org, then hand over to the navigator."""

import asyncio
from pathlib import Path
from typing import Optional

from rich.console import Console

from sforg_browser.core.salesforce import SalesforceConnector, SfCli
from sforg_browser.features.base import BrowserContext
from sforg_browser.tui.navigator import Navigator
from sforg_browser.ui.components import (
    ActivityIndicator,
    ConnectionPanel,
    HeaderPanel,
    StatusMessage,
)
from sforg_browser.utils.config import AppConfig, ConfigManager
from sforg_browser.utils.console import get_console
from sforg_browser.utils.errors import (
    BrowserError,
    ConfigurationError,
    ErrorHandler,
    OrgConnectionError,
    format_error_message,
)
from sforg_browser.utils.logging import async_log_call, get_logger, init_logging

from .cli_parser import setup_argument_parser

logger = get_logger(__name__)


def build_connector(config: AppConfig) -> SalesforceConnector:
    return SalesforceConnector(
        sf_cli=SfCli(command=config.salesforce.sf_command),
        default_api_version=config.salesforce.api_version,
        request_timeout=config.salesforce.request_timeout,
    )


@async_log_call
async def run_browser(
    config: AppConfig,
    console: Console,
    connector: Optional[SalesforceConnector] = None,
    working_dir: Optional[Path] = None,
) -> int:
    """Connect, show the org summary and run the navigation loop.

    Returns:
        Exit code (0 = normal exit, 1 = connection failure)
    """
    connector = connector or build_connector(config)
    working_dir = working_dir or Path.cwd()
    activity = ActivityIndicator(console)
    message = StatusMessage(console)

    HeaderPanel(console).banner("Explore metadata in your connected org")

    try:
        info = await activity.track(
            "Connecting to Salesforce...", connector.connect(working_dir)
        )
    except OrgConnectionError as e:
        logger.info(f"Connection failed: {e.message}")
        activity.fail("Failed to connect to Salesforce")
        message.error(format_error_message(e))
        message.warning("Please check your credentials or run: sf org login web")
        return 1

    activity.succeed("Connected to Salesforce")
    ConnectionPanel(console).display(info)

    context = BrowserContext(
        source=connector,
        console=console,
        working_dir=working_dir,
        field_preview_limit=config.ui.field_preview_limit,
        clear_screen=config.ui.clear_screen,
    )
    try:
        return await Navigator(context).run()
    finally:
        await connector.disconnect()


def main(argv=None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code
    """
    console = get_console()

    try:
        parser = setup_argument_parser()
        args = parser.parse_args(argv)

        try:
            manager = ConfigManager()
        except ConfigurationError as e:
            console.print(f"[red]Configuration error: {e.message}[/red]")
            return 1

        log_manager = init_logging(
            manager.get("logging.log_level", "WARNING"),
            manager.get("logging.file_logging", True),
        )
        if args.log_level:
            log_manager.set_level(args.log_level)

        return asyncio.run(run_browser(manager.config, console))

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        return 130  # Standard SIGINT exit code

    except BrowserError as e:
        ErrorHandler.handle(e, "Fatal error", log_traceback=False)
        console.print(f"[red]Error: {format_error_message(e)}[/red]")
        return 1

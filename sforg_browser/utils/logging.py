"""Logging utility for the org browser"""

import json
import logging
import re
from datetime import datetime, timezone
from functools import wraps
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, MutableMapping, Optional

from rich.logging import RichHandler

from .paths import LOGS_DIR

ROOT_LOGGER_NAME = "sforg_browser"

_LOG_DIR: Optional[Path] = None


def _get_log_dir() -> Path:
    """Get log directory, creating it on first access."""

    from .errors import ConfigurationError

    global _LOG_DIR

    if _LOG_DIR is None:
        _LOG_DIR = LOGS_DIR
        try:
            _LOG_DIR.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigurationError(f"Failed to create log directory: {_LOG_DIR}") from e

    return _LOG_DIR


## Custom JSON Formatter


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for log records."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "context"):
            log_entry["context"] = record.context

        if hasattr(record, "event_type"):
            log_entry["event_type"] = record.event_type

        return json.dumps(log_entry, default=str)


class ContextAdapter(logging.LoggerAdapter):
    """Logger adapter to add contextual information."""

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        if "extra" not in kwargs:
            kwargs["extra"] = {}

        kwargs["extra"].update(self.extra)
        return msg, kwargs


## Log Masking


class SensitiveDataMasker:
    """Utility to mask session credentials in log messages.

    ``sf org display --json`` hands back a live access token; anything that
    looks like one must never reach a log file.
    """

    PATTERNS = {
        "access_token": re.compile(
            r'(access_?token["\']?\s*[:=]\s*["\']?)([^"\'}\s,]+)', re.IGNORECASE
        ),
        "session_id": re.compile(
            r'(session_?id["\']?\s*[:=>]\s*["\']?)([^"\'}\s,<]+)', re.IGNORECASE
        ),
        "password": re.compile(
            r'(password["\']?\s*[:=]\s*["\']?)([^"\'}\s,]+)', re.IGNORECASE
        ),
        "authorization": re.compile(
            r'(authorization["\']?\s*[:=]\s*["\']?(?:bearer\s+)?)([^"\'}\s,]+)',
            re.IGNORECASE,
        ),
        # Salesforce session ids: 15/18 char org id, '!', opaque token
        "sf_session": re.compile(r"(\b00D[a-zA-Z0-9]{12,15})(![A-Za-z0-9._-]{20,})"),
    }

    SENSITIVE_FIELDS = {
        "password",
        "secret",
        "token",
        "authorization",
        "accesstoken",
        "access_token",
        "refresh_token",
        "sessionid",
        "session_id",
        "sfdx_auth_url",
    }

    MASK_STRATEGIES = {
        "full": lambda x: "[REDACTED]",
        "partial": lambda x: x[:3] + "*" * (len(x) - 6) + x[-3:]
        if len(x) > 6
        else "[REDACTED]",
    }

    def __init__(self, strategy: str = "full"):
        """Initialize masker with specified strategy."""

        self.strategy = strategy
        self.mask_func = self.MASK_STRATEGIES[strategy]

    def mask_string(self, text: str) -> str:
        """Mask sensitive data in a string message."""

        if not text or not isinstance(text, str):
            return text

        masked = text
        for pattern in self.PATTERNS.values():
            masked = pattern.sub(
                lambda m: m.group(1) + self.mask_func(m.group(2)), masked
            )

        return masked

    def mask_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Mask sensitive data in a dictionary."""

        if not isinstance(data, dict):
            return data

        masked = {}

        for key, value in data.items():
            if str(key).lower() in self.SENSITIVE_FIELDS:
                masked[key] = self.mask_func(str(value))
            elif isinstance(value, dict):
                masked[key] = self.mask_dict(value)
            elif isinstance(value, str):
                masked[key] = self.mask_string(value)
            else:
                masked[key] = value

        return masked


class SensitiveDataFilter(logging.Filter):
    """Logging filter to mask sensitive data in log records."""

    def __init__(self, strategy: str = "full"):
        """Initialize filter with specified masking strategy."""

        super().__init__()
        self.masker = SensitiveDataMasker(strategy)

    def filter(self, record) -> bool:
        """Filter log record to mask sensitive data."""

        if record.args:
            record.msg = record.getMessage()
            record.args = None

        if isinstance(record.msg, str):
            record.msg = self.masker.mask_string(record.msg)

        context = getattr(record, "context", None)
        if isinstance(context, dict):
            record.context = self.masker.mask_dict(context)

        return True


## Main Log Manager


class LogManager:
    """Manages logging configuration and provides logger instances."""

    def __init__(self, log_level: str = "WARNING", file_logging: bool = True):
        self.log_level = _parse_level(log_level)
        self.file_logging = file_logging
        self.root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        self.root_logger.setLevel(logging.DEBUG)
        self.root_logger.propagate = False
        self._setup_handlers()

    def _setup_handlers(self) -> None:
        """Setup console and file handlers with sensitive data filtering."""

        from .errors import BrowserError, ConfigurationError

        sensitive_filter = SensitiveDataFilter(strategy="full")

        try:
            self.root_logger.handlers.clear()

            console_handler = RichHandler(
                show_time=True,
                show_path=False,
                markup=False,
                rich_tracebacks=True,
            )

            console_handler.setLevel(self.log_level)
            console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
            console_handler.addFilter(sensitive_filter)
            self.root_logger.addHandler(console_handler)

            if not self.file_logging:
                return

            log_dir = _get_log_dir()
            try:
                app_handler = RotatingFileHandler(
                    log_dir / "app.log",
                    maxBytes=5_242_880,
                    backupCount=5,
                    encoding="utf-8",
                )
                event_handler = RotatingFileHandler(
                    log_dir / "events.log",
                    maxBytes=2_048_000,
                    backupCount=3,
                    encoding="utf-8",
                )

            except OSError as e:
                raise ConfigurationError(
                    f"Failed to create log file handlers: {str(e)}"
                ) from e

            app_handler.setLevel(logging.DEBUG)
            app_handler.setFormatter(JSONFormatter())
            app_handler.addFilter(sensitive_filter)

            event_handler.setLevel(logging.INFO)
            event_handler.setFormatter(JSONFormatter())
            event_handler.addFilter(lambda record: hasattr(record, "event_type"))
            event_handler.addFilter(sensitive_filter)

            self.root_logger.addHandler(app_handler)
            self.root_logger.addHandler(event_handler)

        except BrowserError:
            raise

        except Exception as e:
            raise ConfigurationError(f"Failed to setup logging handlers: {str(e)}") from e

    def get_logger(
        self, name: Optional[str] = None, **context
    ) -> logging.Logger | ContextAdapter:
        """Get a logger with optional context."""

        if name and not name.startswith(ROOT_LOGGER_NAME):
            name = f"{ROOT_LOGGER_NAME}.{name}"

        logger = logging.getLogger(name or ROOT_LOGGER_NAME)

        if context:
            return ContextAdapter(logger, context)

        return logger

    def set_level(self, level: str) -> None:
        """Set console logging level at runtime"""

        self.log_level = _parse_level(level)
        for handler in self.root_logger.handlers:
            if isinstance(handler, RichHandler):
                handler.setLevel(self.log_level)

    def log_event(self, event_type: str, message: str, level: str = "INFO", **extra):
        """Log an event with specific type and extra context."""

        self.root_logger.log(
            _parse_level(level),
            message,
            extra={"event_type": event_type, "context": extra},
        )


def _parse_level(level: str) -> int:
    """Translate a level name into its numeric value."""

    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Invalid logging level: {level}")
    return value


## Decorators for Logging


def async_log_call(func):
    """Async decorator to log function calls with their duration."""

    @wraps(func)
    async def wrapper(*args, **kwargs):
        logger = logging.getLogger(ROOT_LOGGER_NAME)
        func_name = f"{func.__module__}.{func.__qualname__}"
        logger.debug(f"-> Entering {func_name} (async)")
        start_time = datetime.now()

        try:
            result = await func(*args, **kwargs)
            duration = (datetime.now() - start_time).total_seconds()
            logger.debug(f"<- Exiting {func_name} (Duration: {duration:.3f}s)")
            return result

        except Exception as e:
            duration = (datetime.now() - start_time).total_seconds()
            logger.debug(f"<- Error in {func_name} after {duration:.3f}s: {e}")
            raise

    return wrapper


## Module-level LogManager Instance and Helper Functions

_log_manager: Optional[LogManager] = None


def init_logging(log_level: str = "WARNING", file_logging: bool = True) -> LogManager:
    """Initialize logging system and return LogManager instance."""

    global _log_manager

    if _log_manager is None:
        _log_manager = LogManager(log_level, file_logging)

    return _log_manager


def reset_logging() -> None:
    """Drop the LogManager so the next call reconfigures (for testing purposes)."""

    global _log_manager
    if _log_manager is not None:
        for handler in _log_manager.root_logger.handlers:
            handler.close()
        _log_manager.root_logger.handlers.clear()
        _log_manager.root_logger.propagate = True
    _log_manager = None


def get_logger(
    name: Optional[str] = None, **context
) -> logging.Logger | ContextAdapter:
    """Get a logger instance with optional context.

    Loggers are namespaced under ``sforg_browser`` and only gain handlers once
    ``init_logging`` has run, so importing a module never touches the disk.
    """

    if _log_manager is not None:
        return _log_manager.get_logger(name, **context)

    if name and not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    logger = logging.getLogger(name or ROOT_LOGGER_NAME)
    if context:
        return ContextAdapter(logger, context)
    return logger


def log_event(event_type: str, message: str, **extra) -> None:
    """Log an event with specific type and extra context (module-level wrapper)."""

    if _log_manager is None:
        logging.getLogger(ROOT_LOGGER_NAME).info(
            message, extra={"event_type": event_type, "context": extra}
        )
        return

    _log_manager.log_event(event_type, message, **extra)

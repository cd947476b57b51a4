"""Configuration manager for optional user settings stored as JSON.

The browser works with no configuration at all: every setting has a default,
and ``~/.sforg_browser/config.json`` is only read when it exists. The file is
never written by the application.
"""

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .errors import BrowserError, ConfigurationError, InvalidConfigError
from .logging import get_logger
from .paths import CONFIG_PATH

logger = get_logger(__name__)


class SalesforceConfig(BaseModel):
    """Pydantic model for org access settings."""

    sf_command: str = "sf"
    api_version: str = "60.0"  # used when sf org display omits apiVersion
    request_timeout: float = 120.0  # in seconds


class UIConfig(BaseModel):
    """Pydantic model for UI settings."""

    field_preview_limit: int = Field(default=10, ge=1)
    clear_screen: bool = True


class LoggingConfig(BaseModel):
    """Pydantic model for logging settings."""

    log_level: str = "WARNING"
    file_logging: bool = True

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return value


class AppConfig(BaseModel):
    """Pydantic model for overall application configuration."""

    salesforce: SalesforceConfig = Field(default_factory=SalesforceConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class ConfigManager:
    """Loads application configuration once per process."""

    _instance = None
    _initialized = False

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None):
        if not ConfigManager._initialized:
            self.path = config_path or CONFIG_PATH
            self.config = self._load_config()
            ConfigManager._initialized = True

    @classmethod
    def reset(cls) -> None:
        """Forget the loaded configuration (for testing purposes)."""
        cls._instance = None
        cls._initialized = False

    def _load_config(self) -> AppConfig:
        """Load configuration from file, or defaults if no file is present."""

        from pydantic import ValidationError

        if not self.path.exists():
            logger.debug(f"No config file at {self.path}, using defaults.")
            return AppConfig()

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            config = AppConfig(**data)
            logger.debug(f"Configuration loaded from {self.path}")
            return config

        except json.JSONDecodeError as e:
            raise InvalidConfigError(f"Configuration file is not valid JSON: {str(e)}") from e
        except ValidationError as e:
            raise InvalidConfigError(
                f"Configuration data does not match expected schema: {str(e)}"
            ) from e
        except BrowserError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Failed to load configuration: {str(e)}") from e

    def get(self, key_path: str, default=None):
        """Get a configuration value using dot notation (e.g. 'ui.clear_screen')."""

        value = self.config
        for key in key_path.split("."):
            if not hasattr(value, key):
                return default
            value = getattr(value, key)
        return value

"""Reusable UI components for metadata display and prompting."""

from .activity import ActivityIndicator
from .messages import StatusMessage
from .panels import ConnectionPanel, HeaderPanel
from .prompts import (
    SEPARATOR,
    InputPrompt,
    MenuOption,
    MenuSeparator,
    Prompter,
    SelectPrompt,
)
from .tables import PropertyTable

__all__ = [
    "ActivityIndicator",
    "StatusMessage",
    "ConnectionPanel",
    "HeaderPanel",
    "SEPARATOR",
    "InputPrompt",
    "MenuOption",
    "MenuSeparator",
    "Prompter",
    "SelectPrompt",
    "PropertyTable",
]

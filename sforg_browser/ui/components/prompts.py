"""User prompt components built on questionary (prompt_toolkit)."""

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Union

import questionary
from questionary import Choice, Separator, Style

from sforg_browser.utils.logging import get_logger

logger = get_logger(__name__)

MENU_STYLE = Style(
    [
        ("qmark", "fg:cyan bold"),
        ("question", "bold"),
        ("answer", "fg:cyan bold"),
        ("pointer", "fg:cyan bold"),
        ("highlighted", "fg:cyan bold"),
        ("separator", "fg:#6c6c6c"),
    ]
)


@dataclass(frozen=True)
class MenuOption:
    """One selectable entry: what the user sees and what the caller gets back."""

    label: str
    value: Any


class MenuSeparator:
    """Visual divider between groups of options."""


SEPARATOR = MenuSeparator()

MenuEntry = Union[MenuOption, MenuSeparator]

Validator = Callable[[str], Union[bool, str]]


class SelectPrompt:
    """Single-select menu.

    Used by: every navigation state.
    """

    def __init__(self, style: Style = MENU_STYLE):
        self.style = style

    async def ask(
        self, message: str, entries: Sequence[MenuEntry], cancel_value: Any = None
    ) -> Any:
        """Show ``entries`` and return the chosen option's value.

        Args:
            message: Question shown above the menu
            entries: Options and separators in display order
            cancel_value: Returned when the user presses Ctrl+C

        Returns:
            The selected ``MenuOption.value`` or ``cancel_value``
        """
        choices: List[Union[Choice, Separator]] = []
        for entry in entries:
            if isinstance(entry, MenuSeparator):
                choices.append(Separator())
            else:
                choices.append(Choice(title=entry.label, value=entry.value))

        try:
            answer = await questionary.select(
                message, choices=choices, style=self.style
            ).ask_async()
        except (KeyboardInterrupt, EOFError):
            answer = None

        if answer is None:
            logger.debug(f"Menu '{message}' cancelled")
            return cancel_value
        return answer


class InputPrompt:
    """Free-text input with validation.

    Used by: search workflows.
    """

    def __init__(self, style: Style = MENU_STYLE):
        self.style = style

    async def ask(self, message: str, validate: Optional[Validator] = None) -> Optional[str]:
        """Ask for text input; invalid input re-prompts until it passes.

        Returns:
            User input or None if cancelled
        """
        try:
            answer = await questionary.text(
                message, validate=validate, style=self.style
            ).ask_async()
        except (KeyboardInterrupt, EOFError):
            return None
        return answer


class Prompter:
    """Bundle of the two prompt kinds the navigation layer uses."""

    def __init__(
        self,
        select_prompt: Optional[SelectPrompt] = None,
        input_prompt: Optional[InputPrompt] = None,
    ):
        self.select_prompt = select_prompt or SelectPrompt()
        self.input_prompt = input_prompt or InputPrompt()

    async def select(
        self, message: str, entries: Sequence[MenuEntry], cancel_value: Any = None
    ) -> Any:
        return await self.select_prompt.ask(message, entries, cancel_value)

    async def text(self, message: str, validate: Optional[Validator] = None) -> Optional[str]:
        return await self.input_prompt.ask(message, validate)

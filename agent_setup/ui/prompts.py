"""
Interactive prompts with validation for the setup wizard.
"""

import getpass
from typing import Callable, List, Optional, Tuple

from rich.markup import escape

from agent_setup.ui.console import Console
from agent_setup.utils.secrets import mask_sensitive_value

Validator = Callable[[str], Tuple[bool, Optional[str]]]


class Prompts:
    """Interactive prompts with validation."""

    def __init__(self, console: Optional[Console] = None):
        """
        Initialize prompts.

        Args:
            console: Console instance for output
        """
        self.console = console or Console()

    def _input(self, prompt: str) -> str:
        return input(prompt)

    def _secret_input(self, prompt: str) -> str:
        return getpass.getpass(prompt)

    def ask(
        self,
        prompt: str,
        validator: Optional[Validator] = None,
        default: str = "",
        allow_empty: bool = False,
        sensitive: bool = False,
    ) -> str:
        """
        Ask for user input with optional validation.

        Invalid input is reported and asked for again, it never propagates.

        Args:
            prompt: The prompt to display
            validator: Optional validation function that returns (is_valid, error_message)
            default: Default value if user presses Enter
            allow_empty: Allow empty input
            sensitive: If True, mask input (like passwords)

        Returns:
            User input (or default value)
        """
        while True:
            if default:
                display_default = mask_sensitive_value(default) if sensitive else default
                full_prompt = f"{prompt} [{display_default}]: "
            else:
                full_prompt = f"{prompt}: "

            if sensitive:
                value = self._secret_input(full_prompt).strip()
            else:
                value = self._input(full_prompt).strip()

            if not value and default:
                value = default

            if not value and not allow_empty:
                self.console.error("This field cannot be empty.")
                continue

            if validator and value:
                is_valid, error = validator(value)
                if not is_valid:
                    self.console.error(error or "Invalid input.")
                    continue

            return value

    def ask_secret(
        self,
        prompt: str,
        validator: Optional[Validator] = None,
        default: str = "",
        allow_empty: bool = False,
    ) -> str:
        """Ask for a secret (like an API key or password) with masked input."""
        return self.ask(
            prompt,
            validator=validator,
            default=default,
            allow_empty=allow_empty,
            sensitive=True,
        )

    def select(
        self,
        prompt: str,
        choices: List[Tuple[str, str]],
        default: Optional[str] = None,
    ) -> str:
        """
        Ask user to choose from a numbered list of options.

        Args:
            prompt: The prompt to display
            choices: List of (value, label) tuples
            default: Default choice value

        Returns:
            The value of the selected choice
        """
        self.console.print()
        self.console.print(escape(prompt), style="cyan")
        for number, (value, label) in enumerate(choices, start=1):
            marker = " (default)" if value == default else ""
            self.console.print(f"  [{number}] {escape(label)}{marker}")
        self.console.print()

        values = [value for value, _ in choices]

        while True:
            raw = self._input("Enter your choice: ").strip()

            if not raw and default is not None:
                return default
            if raw.isdigit() and 1 <= int(raw) <= len(choices):
                return values[int(raw) - 1]
            if raw in values:
                return raw

            self.console.error(f"Invalid choice. Please enter a number from 1 to {len(choices)}.")

    def ask_yes_no(
        self,
        prompt: str,
        default: Optional[bool] = None,
    ) -> bool:
        """
        Ask a yes/no question.

        Args:
            prompt: The prompt to display
            default: Default answer (True for yes, False for no)

        Returns:
            True for yes, False for no
        """
        if default is True:
            hint = "(Y/n)"
        elif default is False:
            hint = "(y/N)"
        else:
            hint = "(y/n)"

        while True:
            value = self._input(f"{prompt} {hint}: ").strip().lower()

            if not value and default is not None:
                return default

            if value in ["y", "yes"]:
                return True
            if value in ["n", "no"]:
                return False

            self.console.error("Please enter 'y' for yes or 'n' for no.")

    def press_enter_to_continue(self, message: str = "Press Enter to continue...") -> None:
        """Wait for user to press Enter."""
        self._input(message)

"""Interface for interacting with the user (input/output).

Defines the contract for displaying results, errors, warnings,
and getting input from the user, allowing different UI implementations
(e.g., console, GUI).
"""

import abc
from typing import Any, Iterable, Tuple

# Import relevant domain models
from skillbridge.domain.models.coaching import CoachingResult
from skillbridge.domain.models.common import PromptText, ProcessedOutput

class UserInterface(abc.ABC):
    """Abstract Base Class for user interaction."""

    @abc.abstractmethod
    def display_output(self, output: ProcessedOutput, **kwargs: Any) -> None:
        """Displays standard output to the user.

        Args:
            output: The processed output string to display.
            **kwargs: Additional arguments for formatting (e.g., title).
        """
        pass

    @abc.abstractmethod
    def display_result(self, result: CoachingResult, **kwargs: Any) -> None:
        """Displays a coaching result, flagging demo or fallback data.

        Args:
            result: The result to render.
            **kwargs: Additional arguments for formatting (e.g., title).
        """
        pass

    @abc.abstractmethod
    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message to the user."""
        pass

    @abc.abstractmethod
    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        """Displays a warning message to the user."""
        pass

    @abc.abstractmethod
    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message to the user."""
        pass

    @abc.abstractmethod
    def display_menu(self, options: Iterable[Tuple[str, str]]) -> None:
        """Displays a list of (command, description) choices."""
        pass

    @abc.abstractmethod
    def get_prompt(self, prompt_message: str = "Input: ") -> PromptText:
        """Gets input from the user synchronously.

        Args:
            prompt_message: The message to display before the input cursor.

        Returns:
            The text entered by the user.
        """
        pass

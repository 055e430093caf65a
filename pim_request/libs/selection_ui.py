"""
Role Selection UI

Interactive terminal prompts for choosing PIM roles. Menus and prompts are
written to stderr so that stdout only carries the selected roles.
"""

import logging
import re
import sys
from typing import List, Optional, TextIO

from .core.constants import ErrorMessages, UIConstants
from .core.exceptions import SelectionError
from .core.utils import is_interactive_terminal
from .pim.models import Role

logger = logging.getLogger(__name__)

_RANGE_PATTERN = re.compile(r'^(\d+)-(\d+)$')


class RoleSelectionUI:
    """Handles interactive role selection and user interface concerns."""

    def __init__(self, prompt_stream: Optional[TextIO] = None, output_stream: Optional[TextIO] = None):
        """
        Initialize the selection UI

        Args:
            prompt_stream: Stream for menus and prompts (defaults to stderr)
            output_stream: Stream for the selection result (defaults to stdout)
        """
        self._prompt_stream = prompt_stream
        self._output_stream = output_stream

    @property
    def prompt_stream(self) -> TextIO:
        return self._prompt_stream or sys.stderr

    @property
    def output_stream(self) -> TextIO:
        return self._output_stream or sys.stdout

    def select_roles(self, roles: List[Role], message: str = UIConstants.SELECTION_PROMPT) -> List[Role]:
        """
        Let the user pick any number of roles.

        Args:
            roles: Roles to choose from
            message: Question shown above the list

        Returns:
            Selected roles in list order (may be empty)

        Raises:
            SelectionError: If the terminal is not interactive or the user cancels
        """
        if not is_interactive_terminal():
            raise SelectionError(ErrorMessages.SelectionError.NOT_INTERACTIVE.value)

        self._display_role_list(roles, message)

        while True:
            choice = self._ask("Select roles (e.g. 1,3 or 2-4), 'a' for all, Enter for none, 'q' to quit: ")

            if choice.lower() in UIConstants.QUIT_CHOICES:
                raise SelectionError(ErrorMessages.SelectionError.CANCELLED.value)

            try:
                indexes = self.parse_selection(choice, len(roles))
            except ValueError as e:
                print(f"Invalid input: {e}", file=self.prompt_stream)
                continue

            selected = [roles[i] for i in indexes]
            logger.debug(f"Selected {len(selected)} of {len(roles)} roles")
            return selected

    @staticmethod
    def parse_selection(choice: str, count: int) -> List[int]:
        """
        Parse a selection string into zero-based indexes.

        Accepts numbers and ranges separated by commas or whitespace,
        'a'/'all' for every item and an empty string for none.

        Args:
            choice: Raw user input
            count: Number of items on offer

        Returns:
            Sorted, de-duplicated zero-based indexes

        Raises:
            ValueError: If a token is not a number/range or is out of bounds
        """
        choice = choice.strip().lower()
        if not choice:
            return []
        if choice in UIConstants.ALL_CHOICES:
            return list(range(count))

        indexes = set()
        for token in re.split(r'[,\s]+', choice):
            if not token:
                continue

            range_match = _RANGE_PATTERN.match(token)
            if range_match:
                start, end = int(range_match.group(1)), int(range_match.group(2))
                if start > end:
                    start, end = end, start
                numbers = range(start, end + 1)
            elif token.isdigit():
                numbers = [int(token)]
            else:
                raise ValueError(f"'{token}' is not a number or range")

            for number in numbers:
                if not 1 <= number <= count:
                    raise ValueError(f"{number} is out of range, choose between 1 and {count}")
                indexes.add(number - 1)

        return sorted(indexes)

    def confirm(self, message: str, default: bool = False) -> bool:
        """
        Ask a yes/no question.

        Args:
            message: Question to ask
            default: Answer used when the user just presses Enter

        Returns:
            bool: The user's answer

        Raises:
            SelectionError: If the terminal is not interactive or the user cancels
        """
        if not is_interactive_terminal():
            raise SelectionError(ErrorMessages.SelectionError.NOT_INTERACTIVE.value)

        hint = "Y/n" if default else "y/N"
        while True:
            answer = self._ask(f"{message} ({hint}): ").lower()
            if not answer:
                return default
            if answer in UIConstants.YES_CHOICES:
                return True
            if answer in UIConstants.NO_CHOICES:
                return False
            print("Please answer 'y' or 'n'", file=self.prompt_stream)

    def print_selection(self, roles: List[Role]) -> None:
        """Print the selected roles, one per line"""
        print(UIConstants.SELECTION_HEADER, file=self.output_stream)
        for role in roles:
            print(UIConstants.SELECTED_ROLE_FORMAT.format(name=role.name), file=self.output_stream)

    def _display_role_list(self, roles: List[Role], message: str) -> None:
        """Display the numbered role list."""
        print(f"\n{message}", file=self.prompt_stream)
        print("-" * 60, file=self.prompt_stream)
        for i, role in enumerate(roles, 1):
            print(f"{i:>3}. {role.name}", file=self.prompt_stream)
        print("-" * 60, file=self.prompt_stream)

    def _ask(self, prompt: str) -> str:
        """Read one answer, turning Ctrl+C and EOF into SelectionError"""
        print(prompt, end='', file=self.prompt_stream, flush=True)
        try:
            return input().strip()
        except KeyboardInterrupt:
            print(file=self.prompt_stream)
            raise SelectionError(ErrorMessages.SelectionError.INTERRUPTED.value)
        except EOFError:
            print(file=self.prompt_stream)
            raise SelectionError(ErrorMessages.SelectionError.CANCELLED.value)

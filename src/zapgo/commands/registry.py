"""
Command registry for ZapGo.

Holds the active commands in registration order plus one optional fallback
command, and resolves the trigger word of palette input to a command.
Registration order is match priority: the first registered command with a
qualifying trigger wins.

The registry is not thread-safe. It is mutated only on configuration reload,
which must run on the same event loop as input resolution.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional

from .command import Command
from ..plugins.parser import extract_trigger
from ..utils.logging import get_logger


class MatchType(Enum):
    """How a command was found for the current input."""
    EXACT_MATCH = "exactMatch"
    PREFIX_MATCH = "prefixMatch"
    FALLBACK = "fallback"


@dataclass
class MatchResult:
    """Outcome of resolving input to a command."""
    command: Optional[Command]
    match_type: MatchType


class CommandRegistry:
    """Ordered collection of commands with an optional fallback."""

    def __init__(self):
        self.logger = get_logger(__name__)
        self._commands: List[Command] = []
        self._fallback: Optional[Command] = None

    def register(self, command: Command) -> None:
        """Append a command. Overlapping triggers are allowed; earlier wins."""
        self._commands.append(command)
        self.logger.debug(f"Registered command: {command.name} {command.triggers}")

    def set_fallback(self, command: Optional[Command]) -> None:
        """Replace the fallback command."""
        self._fallback = command
        if command is not None:
            self.logger.debug(f"Fallback command: {command.name}")

    @property
    def fallback(self) -> Optional[Command]:
        return self._fallback

    def get_commands(self) -> List[Command]:
        return list(self._commands)

    def clear(self) -> None:
        """Drop all commands and the fallback, ahead of a configuration reload."""
        self._commands = []
        self._fallback = None

    def find_matching_command(self, input_text: str) -> MatchResult:
        """Resolve the trigger word of the input.

        Exact trigger matches beat prefix matches; both search in
        registration order. An empty trigger never prefix-matches. Without a
        match the fallback (possibly None) is returned.
        """
        trigger = extract_trigger(input_text).lower()

        for command in self._commands:
            if any(t.lower() == trigger for t in command.triggers):
                return MatchResult(command, MatchType.EXACT_MATCH)

        if trigger:
            for command in self._commands:
                if any(t.lower().startswith(trigger) for t in command.triggers):
                    return MatchResult(command, MatchType.PREFIX_MATCH)

        return MatchResult(self._fallback, MatchType.FALLBACK)

    def commands_containing(self, fragment: str) -> List[Command]:
        """Commands with a trigger containing the fragment, case-insensitively."""
        fragment = fragment.lower()
        return [
            command for command in self._commands
            if any(fragment in t.lower() for t in command.triggers)
        ]

    def complete_trigger(self, fragment: str) -> Optional[str]:
        """First trigger strictly extending the fragment, in registration order."""
        fragment = fragment.lower()
        if not fragment:
            return None

        for command in self._commands:
            for trigger in command.triggers:
                lowered = trigger.lower()
                if lowered.startswith(fragment) and lowered != fragment:
                    return trigger
        return None

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[Command]:
        return iter(list(self._commands))

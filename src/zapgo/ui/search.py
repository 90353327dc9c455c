"""
Resolution engine for the ZapGo palette.

Turns the raw input value into derived view-state: the matched command,
suggestion list, inline autocomplete, parameter hints and result history.
Input changes are debounced on the running event loop; only the last input
of a burst is resolved. Execution runs the matched command asynchronously
and records its result.

Usage:
    engine = ResolutionEngine(registry)
    engine.set_input("time 简")       # resolved after the quiet period
    result = await engine.execute_command()
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .debounce import DebounceTimer
from ..commands.command import Command
from ..commands.registry import CommandRegistry, MatchResult, MatchType
from ..config.models import EngineSettings
from ..plugins.types import ExecutionResult, SuggestionItem
from ..utils.logging import get_logger, log_performance

DEFAULT_DEBOUNCE_MS = 150
DEFAULT_TIME_FORMAT = "%H:%M"


class EngineState(Enum):
    """Lifecycle of the palette input."""
    IDLE = "idle"
    TYPING = "typing"
    EXACT_MATCHED = "exact_matched"
    PREFIX_MATCHED = "prefix_matched"
    FALLBACK = "fallback"
    EXECUTING = "executing"


_MATCH_STATES = {
    MatchType.EXACT_MATCH: EngineState.EXACT_MATCHED,
    MatchType.PREFIX_MATCH: EngineState.PREFIX_MATCHED,
    MatchType.FALLBACK: EngineState.FALLBACK,
}


@dataclass
class ResultEntry:
    """An execution result stamped with the time it was recorded."""
    result: ExecutionResult
    time: str


def unknown_command_result(input_text: str) -> ExecutionResult:
    return ExecutionResult(
        icon="❓",
        title="未知命令",
        content=f'无法识别命令: "{input_text}"\n\n请尝试输入有效的命令。',
    )


def error_result(message: str) -> ExecutionResult:
    return ExecutionResult(icon="❌", title="执行错误", content=message, error=True)


Listener = Callable[["ResolutionEngine"], None]


class ResolutionEngine:
    """
    Debounced command resolution and execution for palette input.

    All methods must be called from the thread running the event loop.
    set_input and select_suggestion additionally need a running loop, since
    they schedule work on it.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        clock: Optional[Callable[[], str]] = None,
        time_format: str = DEFAULT_TIME_FORMAT,
    ):
        """Initialize the engine.

        Args:
            registry: Commands to resolve input against
            debounce_ms: Quiet period before input is re-resolved
            clock: Returns the timestamp recorded with each result
            time_format: strftime format used when no clock is given
        """
        self.registry = registry
        self.logger = get_logger(__name__)
        self._clock = clock or (lambda: datetime.now().strftime(time_format))
        self._debouncer = DebounceTimer(debounce_ms / 1000)
        self._executing = False
        self._execution_task: Optional[asyncio.Task] = None
        self._listeners: List[Listener] = []

        self.input_value = ""
        self.results: List[ResultEntry] = []
        self.show_results = False
        self._reset_derived_state()

    @classmethod
    def from_settings(cls, registry: CommandRegistry, settings: EngineSettings) -> "ResolutionEngine":
        return cls(
            registry,
            debounce_ms=settings.debounce_ms,
            time_format=settings.result_time_format,
        )

    # View-state

    @property
    def state(self) -> EngineState:
        if self._executing:
            return EngineState.EXECUTING
        if not self.input_value.strip():
            return EngineState.IDLE
        if self._debouncer.pending or self.match_type is None:
            return EngineState.TYPING
        return _MATCH_STATES[self.match_type]

    @property
    def is_executing(self) -> bool:
        return self._executing

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener(engine) after every view-state change.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception as e:
                self.logger.error(f"View-state listener failed: {e}", exc_info=True)

    def _reset_derived_state(self) -> None:
        self.current_command: Optional[Command] = None
        self.match_type: Optional[MatchType] = None
        self.suggestions: List[SuggestionItem] = []
        self.selected_suggestion_index = -1
        self.show_suggestions = False
        self.auto_suggestion = ""
        self.suggestion_display_text = ""
        self.param_hints: List[str] = []
        self.current_param_index = -1

    # Input

    def set_input(self, value: str) -> None:
        """Store a new input value and schedule its resolution.

        Whitespace-only input resets the derived state immediately.
        """
        self.input_value = value
        if not value.strip():
            self._debouncer.cancel()
            self._reset_derived_state()
        else:
            self._debouncer.schedule(self.process_input, value)
        self._notify()

    def process_input(self, value: Optional[str] = None) -> None:
        """Resolve input now and recompute the derived view-state.

        A given value replaces the stored input first, so the input and
        the state derived from it always agree.
        """
        if value is None:
            value = self.input_value
        else:
            self.input_value = value

        if not value.strip():
            self._reset_derived_state()
            self._notify()
            return

        with log_performance("Input resolution"):
            match = self.registry.find_matching_command(value)
            self.current_command = match.command
            self.match_type = match.match_type

            if match.match_type == MatchType.EXACT_MATCH:
                self._update_param_hints(value, match.command)
                suggestions = self._exact_match_suggestions(value, match.command)
            else:
                self.param_hints = []
                self.current_param_index = -1
                if match.match_type == MatchType.PREFIX_MATCH:
                    suggestions = self._command_suggestions(value)
                elif match.command is not None:
                    suggestions = [SuggestionItem(match.command, value, match.command.can_execute(value))]
                else:
                    suggestions = []

            self.suggestions = suggestions
            self.selected_suggestion_index = 0 if suggestions else -1
            self.show_suggestions = bool(suggestions)
            self._update_auto_suggestion(value, match)

        self._notify()

    def clear_input(self) -> None:
        """Empty the input and reset all derived suggestion state."""
        self._debouncer.cancel()
        self.input_value = ""
        self._reset_derived_state()
        self._notify()

    @staticmethod
    def _cursor(value: str) -> Tuple[int, str]:
        """Index of the parameter being typed and its partial token.

        Trailing whitespace means the next parameter has been started.
        """
        tokens = value.split()
        if value[-1:].isspace():
            return len(tokens) - 1, ""
        return len(tokens) - 2, tokens[-1] if tokens else ""

    def _update_param_hints(self, value: str, command: Command) -> None:
        params = command.params
        if not params:
            self.param_hints = []
            self.current_param_index = -1
            return

        typed = max(len(value.split()) - 1, 0)
        self.param_hints = [f"<{param.name}>" for param in params[typed:]]
        self.current_param_index = 0 if typed < len(params) else -1

    def _exact_match_suggestions(self, value: str, command: Command) -> List[SuggestionItem]:
        param_index, partial = self._cursor(value)
        params = command.params

        if 0 <= param_index < len(params) and params[param_index].suggestions:
            matching = [s for s in params[param_index].suggestions if partial.lower() in s.lower()]
            if matching:
                head = value[:len(value) - len(partial)]
                return [
                    SuggestionItem(command, head + s, command.can_execute(head + s))
                    for s in matching
                ]

        return [SuggestionItem(command, value, command.can_execute(value))]

    def _command_suggestions(self, value: str) -> List[SuggestionItem]:
        fragment = value.split()[0]
        return [
            SuggestionItem(command, command.primary_trigger, command.can_execute(command.primary_trigger))
            for command in self.registry.commands_containing(fragment)
        ]

    def _update_auto_suggestion(self, value: str, match: MatchResult) -> None:
        self.auto_suggestion = ""
        self.suggestion_display_text = ""
        tokens = value.split()

        if len(tokens) == 1 and not value[-1].isspace():
            if match.match_type == MatchType.FALLBACK:
                return
            trigger = self.registry.complete_trigger(tokens[0])
            if trigger:
                self.auto_suggestion = trigger[len(tokens[0]):]
                self.suggestion_display_text = trigger
            return

        if match.match_type != MatchType.EXACT_MATCH or match.command is None:
            return

        param_index, partial = self._cursor(value)
        params = match.command.params
        if not partial or not 0 <= param_index < len(params):
            return

        for suggestion in params[param_index].suggestions or []:
            lowered = suggestion.lower()
            if lowered.startswith(partial.lower()) and lowered != partial.lower():
                self.auto_suggestion = suggestion[len(partial):]
                self.suggestion_display_text = suggestion
                return

    # Suggestions

    def accept_auto_suggestion(self) -> bool:
        """Append the inline autocomplete to the input and re-resolve.

        A space is appended as well unless the completed input is already
        executable, so the user can go straight on to the arguments.

        Returns:
            True if there was an autocomplete to accept
        """
        if not self.auto_suggestion:
            return False

        completed = self.input_value + self.auto_suggestion
        command = self.current_command
        if command is None or not command.can_execute(completed):
            completed += " "

        self._debouncer.cancel()
        self.process_input(completed)
        return True

    def navigate_suggestions(self, direction: int) -> None:
        """Move the selection by direction (+1 or -1), wrapping at the ends."""
        count = len(self.suggestions)
        if count == 0:
            return
        self.selected_suggestion_index = (self.selected_suggestion_index + direction) % count
        self._notify()

    def select_suggestion(self, index: int) -> Optional[asyncio.Task]:
        """Put a suggestion's value into the input.

        Executable suggestions are executed right away. The suggestion panel
        stays hidden until the next input change.

        Returns:
            The execution task for executable suggestions, otherwise None
        """
        if not 0 <= index < len(self.suggestions):
            self.logger.debug(f"Ignoring selection of missing suggestion {index}")
            return None

        item = self.suggestions[index]
        self._debouncer.cancel()
        self.process_input(item.value)
        self.current_command = item.command
        self.show_suggestions = False
        self.selected_suggestion_index = -1
        self._notify()

        if not item.can_execute:
            return None

        self._execution_task = asyncio.get_running_loop().create_task(self.execute_command())
        return self._execution_task

    # Execution

    async def execute_command(self) -> Optional[ExecutionResult]:
        """Execute the matched command with the current input.

        Without a matched command an informational result is recorded
        instead. Failures become error results. The input is cleared
        afterwards in every case.

        Returns:
            The recorded result, or None if nothing was executed
        """
        input_text = self.input_value.strip()
        if not input_text:
            return None

        if self._executing:
            self.logger.warning("Execution already in progress, ignoring request")
            return None

        if self._debouncer.cancel():
            self.process_input(self.input_value)

        command = self.current_command
        self._executing = True
        self._notify()

        try:
            if command is None:
                result = unknown_command_result(input_text)
            else:
                self.logger.info(f"Executing '{command.name}': {input_text[:50]}")
                try:
                    result = await command.execute(input_text)
                except Exception as e:
                    self.logger.error(f"Command '{command.name}' failed: {e}")
                    result = error_result(str(e))

            self._add_result(result)
            return result
        finally:
            self._executing = False
            self.clear_input()

    def _add_result(self, result: ExecutionResult) -> None:
        self.results.append(ResultEntry(result=result, time=self._clock()))
        self.show_results = True

    def clear_results(self) -> None:
        self.results = []
        self.show_results = False
        self._notify()

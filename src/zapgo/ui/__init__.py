"""
Palette resolution layer for ZapGo.

The resolution engine owns the input value of the palette and derives
everything a presentation layer renders from it.
"""

from .debounce import DebounceTimer
from .search import (
    EngineState,
    ResolutionEngine,
    ResultEntry,
    error_result,
    unknown_command_result,
)

__all__ = [
    "DebounceTimer",
    "EngineState",
    "ResolutionEngine",
    "ResultEntry",
    "error_result",
    "unknown_command_result",
]

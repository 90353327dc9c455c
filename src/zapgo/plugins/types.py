"""
Plugin type definitions for ZapGo.

This module defines the parameter schema, parse results and execution
results shared by plugins, commands and the resolution engine.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..commands.command import Command


@dataclass
class ParamDefinition:
    """Declarative description of one positional command argument."""
    name: str
    required: bool = False
    suggestions: Optional[List[str]] = None
    description: str = ""
    validator: Optional[Callable[[str], bool]] = None


@dataclass
class ArgumentInfo:
    """Binding of one schema parameter to the token at its position."""
    value: Optional[str]
    name: str
    required: bool
    valid: bool
    missing: bool
    description: str = ""


@dataclass
class ParsedInput:
    """Result of parsing raw input against a parameter schema."""
    trigger: str
    arguments: List[ArgumentInfo] = field(default_factory=list)
    bound_params: Dict[str, str] = field(default_factory=dict)
    missing_params: List[str] = field(default_factory=list)
    invalid_params: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.missing_params and not self.invalid_params


@dataclass
class ExecutionResult:
    """Outcome of executing a command, rendered by the presentation layer."""
    icon: str
    title: str
    content: str
    error: bool = False


@dataclass
class SuggestionItem:
    """One entry of the suggestion list."""
    command: "Command"
    value: str
    can_execute: bool = False

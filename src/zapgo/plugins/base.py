"""
Abstract base class for all plugins in ZapGo.

A plugin is a reusable capability: it declares trigger words and a
positional parameter schema, parses palette input against that schema and
executes an asynchronous action. Commands wrap plugins with user-facing
triggers and display metadata.
"""

import uuid
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from .parser import parse_input
from .types import ExecutionResult, ParamDefinition, ParsedInput
from ..utils.logging import get_logger


class BasePlugin(ABC):
    """
    Abstract base class for all plugins.

    Subclasses must implement execute(). can_execute(), set_config_params()
    and get_config_params() are optional hooks with conservative defaults.
    """

    def __init__(
        self,
        name: str,
        description: str,
        triggers: List[str],
        params: Optional[List[ParamDefinition]] = None,
        icon: str = "⚡",
        plugin_params: Optional[Dict[str, str]] = None,
    ):
        """Initialize the base plugin.

        Args:
            name: Display name
            description: One-line description
            triggers: Default trigger words
            params: Ordered positional parameter schema
            icon: Display icon
            plugin_params: Plugin specific configuration values
        """
        self.id = uuid.uuid4().hex
        self.name = name
        self.description = description
        self.triggers = list(triggers)
        self.params: List[ParamDefinition] = list(params or [])
        self.icon = icon
        self.plugin_params: Dict[str, str] = dict(plugin_params or {})
        self.logger = get_logger(f"{__name__}.{self.__class__.__name__}")

    def parse_input(self, input_text: str) -> ParsedInput:
        """Parse input against this plugin's parameter schema."""
        return parse_input(input_text, self.params)

    @abstractmethod
    async def execute(self, input_text: str) -> ExecutionResult:
        """Execute the plugin for the given raw input.

        Args:
            input_text: Full input including the trigger word

        Returns:
            ExecutionResult to show in the result log

        Raises:
            Exception: Any failure; the caller converts it into an error result
        """

    def can_execute(self, input_text: str) -> bool:
        """Whether accepting a suggestion with this input should run it at once.

        Plugins without a meaningful answer are never executed straight from
        a suggestion.
        """
        return False

    def set_config_params(self, params: Optional[Dict[str, str]]) -> None:
        """Apply user configuration; may rewrite the parameter schema."""
        if params:
            self.plugin_params = dict(params)

    def get_config_params(self) -> List[str]:
        """Configuration keys this plugin understands."""
        return []

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, triggers={self.triggers!r})"

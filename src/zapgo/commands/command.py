"""
User-facing commands for ZapGo.

A Command binds one plugin instance to the trigger words and display
metadata chosen in the configuration document.
"""

import uuid
from typing import Dict, List, Optional

from ..plugins.base import BasePlugin
from ..plugins.types import ExecutionResult, ParamDefinition, ParsedInput
from ..utils.error_handling import handle_plugin_execution
from ..utils.logging import get_logger


class Command:
    """
    A plugin wrapped with its own triggers, name, description and icon.

    Display fields left unset are copied from the plugin when the command is
    created. The command's triggers decide matching; the plugin's own
    defaults are not consulted.
    """

    def __init__(
        self,
        plugin: BasePlugin,
        triggers: List[str],
        name: Optional[str] = None,
        description: Optional[str] = None,
        icon: Optional[str] = None,
        plugin_params: Optional[Dict[str, str]] = None,
        command_id: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize the command.

        Args:
            plugin: Plugin instance owned by this command
            triggers: Trigger words, first one is the primary trigger
            name: Display name override
            description: Description override
            icon: Icon override
            plugin_params: Plugin configuration, passed to set_config_params
            command_id: Identifier from the configuration document
            timeout: Optional execution timeout in seconds
        """
        self.plugin = plugin
        self.name = name or plugin.name
        self.description = description or plugin.description
        self.icon = icon or plugin.icon
        self.triggers = list(triggers)
        self.timeout = timeout
        self.logger = get_logger(__name__)

        plugin.set_config_params(plugin_params)

        self.id = command_id or uuid.uuid4().hex

    @property
    def params(self) -> List[ParamDefinition]:
        """Current parameter schema of the wrapped plugin."""
        return self.plugin.params

    @property
    def primary_trigger(self) -> str:
        return self.triggers[0] if self.triggers else ""

    def parse_input(self, input_text: str) -> ParsedInput:
        return self.plugin.parse_input(input_text)

    async def execute(self, input_text: str) -> ExecutionResult:
        """Run the plugin, normalising failures to PluginExecutionError."""
        operation = f"{self.plugin.__class__.__name__}.execute"
        run = handle_plugin_execution(operation, self.logger, self.timeout)(self.plugin.execute)
        return await run(input_text)

    def can_execute(self, input_text: str) -> bool:
        try:
            return bool(self.plugin.can_execute(input_text))
        except Exception as e:
            self.logger.warning(f"can_execute failed for command '{self.name}': {e}", exc_info=True)
            return False

    def __repr__(self) -> str:
        return f"Command(name={self.name!r}, triggers={self.triggers!r})"

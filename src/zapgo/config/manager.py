"""
In-memory owner of the command configuration document.

ConfigManager sits between the configuration UI and the config store: it
keeps the current document, applies edits and persists them. It is created
explicitly and passed to whoever needs it; there is no module-level instance.
"""

import uuid
from typing import Any, Dict, List, Optional, Protocol

from .models import AppConfig, CommandConfig, default_app_config
from ..utils.error_handling import ConfigurationError
from ..utils.logging import get_logger


class ConfigStore(Protocol):
    """Persistence collaborator for the configuration document."""

    def load(self) -> Optional[AppConfig]:
        ...

    def save(self, config: AppConfig) -> bool:
        ...


class ConfigManager:
    """Loads, edits and saves the command configuration document."""

    def __init__(self, store: ConfigStore):
        self.store = store
        self.logger = get_logger(__name__)
        self._config = default_app_config()

    def load_config(self) -> AppConfig:
        """Load from the store, falling back to defaults on any failure."""
        try:
            loaded = self.store.load()
        except Exception as e:
            self.logger.error(f"Failed to load configuration: {e}", exc_info=True)
            loaded = None

        self._config = loaded if loaded is not None else default_app_config()
        return self.get_config()

    def get_config(self) -> AppConfig:
        return self._config.model_copy(deep=True)

    def set_config(self, config: AppConfig) -> None:
        """Replace and persist the document.

        Raises:
            ConfigurationError: If the store could not save it
        """
        self._config = config.model_copy(deep=True)
        if not self.store.save(self._config):
            raise ConfigurationError("保存配置失败", details={"commands": len(config.commands)})

    def get_enabled_commands(self) -> List[CommandConfig]:
        return [cmd for cmd in self._config.commands if cmd.enabled]

    def get_fallback_command(self) -> Optional[CommandConfig]:
        return self._config.fallback_command

    def get_commands_by_plugin(self, plugin_id: str) -> List[CommandConfig]:
        return [cmd for cmd in self._config.commands if cmd.plugin_id == plugin_id]

    def update_command_config(self, command_id: str, updates: Dict[str, Any]) -> None:
        """Update a command, or append it if unknown and not the fallback."""
        config = self.get_config()

        for index, cmd in enumerate(config.commands):
            if cmd.id == command_id:
                config.commands[index] = _merge(cmd, updates)
                self.set_config(config)
                return

        fallback = config.fallback_command
        if fallback is not None and fallback.id == command_id:
            return

        new_command = CommandConfig.model_validate({
            "id": command_id,
            "plugin_id": updates.get("plugin_id", ""),
            "enabled": True,
            "triggers": [],
            **updates,
        })
        config.commands.append(new_command)
        self.set_config(config)

    def update_fallback_command(self, updates: Dict[str, Any]) -> None:
        config = self.get_config()

        if config.fallback_command is not None:
            config.fallback_command = _merge(config.fallback_command, updates)
        else:
            config.fallback_command = CommandConfig.model_validate({
                "id": updates.get("id") or f"fallback_{uuid.uuid4().hex[:12]}",
                "plugin_id": updates.get("plugin_id", ""),
                "enabled": True,
                "triggers": updates.get("triggers") or ["fallback"],
                **{k: v for k, v in updates.items() if k not in ("id", "triggers")},
            })
        self.set_config(config)

    def set_fallback_command(self, command: Optional[CommandConfig]) -> None:
        config = self.get_config()
        config.fallback_command = command
        self.set_config(config)

    def add_command(self, plugin_id: str, **fields: Any) -> str:
        """Append a new command for a plugin and return its id."""
        command_id = f"{plugin_id}_{uuid.uuid4().hex[:12]}"
        command = CommandConfig.model_validate({
            "id": command_id,
            "plugin_id": plugin_id,
            "enabled": True,
            "triggers": [plugin_id],
            "plugin_params": {},
            **fields,
        })

        config = self.get_config()
        config.commands.append(command)
        self.set_config(config)
        self.logger.info(f"Added command {command.id} for plugin {plugin_id}")
        return command.id

    def remove_command(self, command_id: str) -> None:
        """Remove a command; a fallback with the same id is cleared too."""
        config = self.get_config()
        config.commands = [cmd for cmd in config.commands if cmd.id != command_id]
        if config.fallback_command is not None and config.fallback_command.id == command_id:
            config.fallback_command = None
        self.set_config(config)


def _merge(command: CommandConfig, updates: Dict[str, Any]) -> CommandConfig:
    return CommandConfig.model_validate({**command.model_dump(), **updates})

"""
Builds the command registry from the configuration document.

Every reload clears the registry and creates fresh plugin instances, so
commands never accumulate across reloads.
"""

from typing import Optional

from .command import Command
from .registry import CommandRegistry
from ..config.models import AppConfig, CommandConfig
from ..host import HostBridge
from ..plugins.registry import PluginCatalog
from ..utils.error_handling import ConfigurationError
from ..utils.logging import get_logger

logger = get_logger(__name__)


def create_command(
    command_config: CommandConfig,
    catalog: PluginCatalog,
    host: HostBridge,
    timeout: Optional[float] = None,
) -> Command:
    """Instantiate the plugin for a command entry and wrap it.

    Raises:
        ConfigurationError: If the plugin id is unknown
    """
    plugin = catalog.create(command_config.plugin_id, host)
    return Command(
        plugin,
        triggers=command_config.triggers,
        name=command_config.name,
        description=command_config.description,
        icon=command_config.icon,
        plugin_params=command_config.plugin_params,
        command_id=command_config.id or None,
        timeout=timeout,
    )


def build_command_registry(
    config: AppConfig,
    catalog: PluginCatalog,
    host: HostBridge,
    registry: Optional[CommandRegistry] = None,
    timeout: Optional[float] = None,
) -> CommandRegistry:
    """(Re)populate a registry from configuration.

    Disabled commands are skipped. Entries naming an unknown plugin are
    logged and skipped so one bad entry cannot empty the palette.

    Args:
        config: Command configuration document
        catalog: Plugin factories
        host: Bridge handed to plugins needing the host shell
        registry: Registry to reload in place; a new one if omitted
        timeout: Execution timeout applied to every command

    Returns:
        The populated registry
    """
    registry = registry if registry is not None else CommandRegistry()
    registry.clear()

    for command_config in config.commands:
        if not command_config.enabled:
            continue
        try:
            registry.register(create_command(command_config, catalog, host, timeout))
        except ConfigurationError as e:
            logger.warning(f"Skipping command '{command_config.id}': {e.message}")

    fallback_config = config.fallback_command
    if fallback_config is not None:
        try:
            registry.set_fallback(create_command(fallback_config, catalog, host, timeout))
        except ConfigurationError as e:
            logger.warning(f"Skipping fallback command: {e.message}")

    logger.info(
        f"Loaded {len(registry)} commands"
        f"{' with fallback ' + registry.fallback.name if registry.fallback else ''}"
    )
    return registry

"""
Plugin catalog for ZapGo.

The catalog maps the plugin ids used in the configuration document
(`pluginId`) to factories, so commands can be rebuilt from configuration
whenever it is reloaded.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List

from .base import BasePlugin
from .ai_plugin import AIPlugin
from .config_plugin import ConfigPlugin
from .link_opener import LinkOpenerPlugin
from .time_plugin import TimePlugin
from ..host import HostBridge
from ..utils.error_handling import ConfigurationError
from ..utils.logging import get_logger

PluginFactory = Callable[[HostBridge], BasePlugin]


@dataclass
class PluginEntry:
    """Catalog entry describing how to create a plugin."""
    plugin_id: str
    name: str
    description: str
    factory: PluginFactory
    configurable: bool = False


class PluginCatalog:
    """Registry of plugin factories keyed by plugin id."""

    def __init__(self):
        self.logger = get_logger(__name__)
        self._entries: Dict[str, PluginEntry] = {}

    def register(
        self,
        plugin_id: str,
        name: str,
        description: str,
        factory: PluginFactory,
        configurable: bool = False,
    ) -> None:
        """Register or replace the factory for a plugin id."""
        if plugin_id in self._entries:
            self.logger.warning(f"Replacing plugin factory: {plugin_id}")

        self._entries[plugin_id] = PluginEntry(
            plugin_id=plugin_id,
            name=name,
            description=description,
            factory=factory,
            configurable=configurable,
        )
        self.logger.debug(f"Registered plugin: {plugin_id}")

    def create(self, plugin_id: str, host: HostBridge) -> BasePlugin:
        """Create a fresh plugin instance.

        Raises:
            ConfigurationError: If no plugin is registered under the id
        """
        entry = self._entries.get(plugin_id)
        if entry is None:
            raise ConfigurationError(
                f"Unknown plugin: {plugin_id}",
                details={"plugin_id": plugin_id, "available": sorted(self._entries)}
            )
        return entry.factory(host)

    def available(self) -> List[PluginEntry]:
        """All entries in registration order."""
        return list(self._entries.values())

    def get(self, plugin_id: str) -> PluginEntry:
        return self._entries[plugin_id]

    def __contains__(self, plugin_id: str) -> bool:
        return plugin_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def default_catalog() -> PluginCatalog:
    """Catalog holding the built-in plugins."""
    catalog = PluginCatalog()
    catalog.register("ai", "AI 助手", "智能对话和查询", lambda host: AIPlugin(), configurable=True)
    catalog.register(
        "link_opener", "链接打开器", "打开网站链接或应用协议链接",
        LinkOpenerPlugin, configurable=True,
    )
    catalog.register("config", "配置设置", "打开应用配置窗口", ConfigPlugin)
    catalog.register("time", "时间查询", "获取当前时间和日期", lambda host: TimePlugin())
    return catalog

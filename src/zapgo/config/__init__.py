"""
ZapGo Configuration System

Two kinds of configuration live here:

    from zapgo.config import ConfigManager, JsonConfigStore, load_settings

    settings = load_settings()                       # YAML + ZAPGO_* env vars
    manager = ConfigManager(JsonConfigStore(settings.store.config_file))
    config = manager.load_config()                   # command document
    print([cmd.triggers for cmd in config.commands])
"""

from .loader import (
    SettingsLoader,
    load_settings,
    validate_settings_file,
)

from .manager import ConfigManager, ConfigStore
from .store import JsonConfigStore

from .models import (
    AppConfig,
    CommandConfig,
    default_app_config,
    default_fallback_command,
    ZapgoSettings,
    AppSettings,
    EngineSettings,
    StoreSettings,
    LogLevel,
)

from ..utils.error_handling import ConfigurationError

__all__ = [
    # Settings
    "SettingsLoader",
    "load_settings",
    "validate_settings_file",

    # Command document
    "ConfigManager",
    "ConfigStore",
    "JsonConfigStore",

    # Exception
    "ConfigurationError",

    # Models
    "AppConfig",
    "CommandConfig",
    "default_app_config",
    "default_fallback_command",
    "ZapgoSettings",
    "AppSettings",
    "EngineSettings",
    "StoreSettings",
    "LogLevel",
]

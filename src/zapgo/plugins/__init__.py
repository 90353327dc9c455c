"""
Plugin system for ZapGo.

Plugins are the capabilities behind palette commands: they declare a
positional parameter schema, parse input against it and run an async action.

Usage:
    from zapgo.plugins import default_catalog
    from zapgo.host import DefaultHostBridge

    plugin = default_catalog().create("time", DefaultHostBridge())
    result = await plugin.execute("time 简短")
"""

from .types import (
    ParamDefinition,
    ArgumentInfo,
    ParsedInput,
    ExecutionResult,
    SuggestionItem,
)

from .parser import parse_input, split_tokens, extract_trigger
from .base import BasePlugin
from .time_plugin import TimePlugin
from .ai_plugin import AIPlugin
from .link_opener import LinkOpenerPlugin
from .config_plugin import ConfigPlugin
from .registry import PluginCatalog, PluginEntry, default_catalog

__all__ = [
    # Types
    "ParamDefinition",
    "ArgumentInfo",
    "ParsedInput",
    "ExecutionResult",
    "SuggestionItem",

    # Parsing
    "parse_input",
    "split_tokens",
    "extract_trigger",

    # Plugins
    "BasePlugin",
    "TimePlugin",
    "AIPlugin",
    "LinkOpenerPlugin",
    "ConfigPlugin",

    # Catalog
    "PluginCatalog",
    "PluginEntry",
    "default_catalog",
]

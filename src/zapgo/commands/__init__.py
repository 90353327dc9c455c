"""
Command layer for ZapGo.

Commands bind plugins to user-chosen trigger words; the registry resolves
palette input to a command.

Usage:
    from zapgo.commands import build_command_registry

    registry = build_command_registry(config, default_catalog(), host)
    match = registry.find_matching_command("time 简短")
"""

from .command import Command
from .registry import CommandRegistry, MatchResult, MatchType
from .loader import build_command_registry, create_command

__all__ = [
    "Command",
    "CommandRegistry",
    "MatchResult",
    "MatchType",
    "build_command_registry",
    "create_command",
]

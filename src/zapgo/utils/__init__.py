"""
ZapGo Utilities

This module provides utility functions and classes used throughout ZapGo.
"""

from .logging import (
    setup_logging,
    get_logger,
    log_performance,
    is_logging_initialized,
)

from .error_handling import (
    ZapgoError,
    PluginExecutionError,
    ConfigurationError,
    handle_plugin_execution,
)

__all__ = [
    # Logging utilities
    "setup_logging",
    "get_logger",
    "log_performance",
    "is_logging_initialized",

    # Error handling utilities
    "ZapgoError",
    "PluginExecutionError",
    "ConfigurationError",
    "handle_plugin_execution",
]

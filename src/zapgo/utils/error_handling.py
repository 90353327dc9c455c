"""
Unified error handling utilities for ZapGo.

Plugins fail by raising; the helpers here normalise those failures into a
small exception hierarchy so the resolution engine can turn them into
visible result entries.
"""

import functools
import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Dict

from .logging import get_logger


class ZapgoError(Exception):
    """Base exception for all ZapGo errors."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class PluginExecutionError(ZapgoError):
    """Error raised while a plugin executes a command.

    The message is the plugin's own error message; the failing operation
    is kept in details.
    """
    pass


class ConfigurationError(ZapgoError):
    """Configuration-related error."""
    pass


def handle_plugin_execution(
    operation_name: str,
    logger: Optional[logging.Logger] = None,
    timeout: Optional[float] = None,
):
    """
    Decorator to standardize error handling of async plugin calls.

    Args:
        operation_name: Human-readable name of the operation
        logger: Optional logger instance (defaults to operation-specific logger)
        timeout: Optional timeout in seconds
    """
    def decorator(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            _logger = logger or get_logger(f"zapgo.plugins.{operation_name}")

            try:
                _logger.debug(f"Starting {operation_name}")
                if timeout:
                    result = await asyncio.wait_for(func(*args, **kwargs), timeout=timeout)
                else:
                    result = await func(*args, **kwargs)
                _logger.info(f"{operation_name} completed successfully")
                return result

            except PluginExecutionError:
                raise

            except asyncio.TimeoutError as e:
                _logger.error(f"{operation_name} timed out after {timeout}s")
                raise PluginExecutionError(
                    f"{operation_name} timed out after {timeout}s",
                    details={
                        "operation": operation_name,
                        "error_type": "timeout",
                        "timeout_seconds": timeout,
                    }
                ) from e

            except Exception as e:
                _logger.error(f"{operation_name} failed: {e}", exc_info=True)
                raise PluginExecutionError(
                    str(e) or type(e).__name__,
                    details={"operation": operation_name, "error_type": type(e).__name__}
                ) from e

        return wrapper

    return decorator

"""
Host shell bridge for ZapGo.

The engine never talks to windows, hotkeys or the desktop directly. Plugins
that need the outside world go through a HostBridge handed to them when
they are created.
"""

import webbrowser
from abc import ABC, abstractmethod

from .utils.logging import get_logger


class HostBridge(ABC):
    """Side effects a host shell offers to plugins."""

    @abstractmethod
    def open_config_window(self) -> None:
        """Ask the host to show its configuration surface (fire-and-forget)."""

    @abstractmethod
    def open_url(self, url: str) -> None:
        """Open a URL or application protocol link."""


class DefaultHostBridge(HostBridge):
    """Bridge for shells without a configuration window of their own."""

    def __init__(self):
        self.logger = get_logger(__name__)

    def open_config_window(self) -> None:
        self.logger.info("Configuration window requested")

    def open_url(self, url: str) -> None:
        self.logger.info(f"Opening URL: {url}")
        if not webbrowser.open(url):
            self.logger.warning(f"No browser available to open {url}")

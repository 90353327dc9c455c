"""
Shared pytest configuration for ZapGo tests.

This file provides fake plugins, a recording host bridge and ready-made
registries and engines for the test modules.
"""

from datetime import datetime
from typing import List, Optional

import pytest

from zapgo.commands import Command, CommandRegistry
from zapgo.host import HostBridge
from zapgo.plugins import BasePlugin, ExecutionResult, ParamDefinition, TimePlugin
from zapgo.ui import ResolutionEngine


class RecordingHost(HostBridge):
    """Host bridge that remembers every request."""

    def __init__(self):
        self.opened_urls: List[str] = []
        self.config_window_requests = 0

    def open_config_window(self) -> None:
        self.config_window_requests += 1

    def open_url(self, url: str) -> None:
        self.opened_urls.append(url)


class EchoPlugin(BasePlugin):
    """Plugin that records its inputs and echoes them back."""

    def __init__(self, triggers=None, params=None, executable: bool = False, name: str = "echo"):
        super().__init__(
            name=name,
            description="Echo input",
            triggers=triggers or ["echo"],
            params=params,
            icon="E",
        )
        self.executable = executable
        self.calls: List[str] = []

    def can_execute(self, input_text: str) -> bool:
        return self.executable

    async def execute(self, input_text: str) -> ExecutionResult:
        self.calls.append(input_text)
        return ExecutionResult(icon="E", title=self.name, content=input_text)


class FailingPlugin(BasePlugin):
    """Plugin whose execution always raises."""

    def __init__(self, message: str = "boom"):
        super().__init__(name="failing", description="Always fails", triggers=["fail"])
        self.message = message

    async def execute(self, input_text: str) -> ExecutionResult:
        raise RuntimeError(self.message)


def fixed_clock() -> datetime:
    return datetime(2024, 1, 15, 14, 30, 45)


def make_command(plugin: BasePlugin, triggers: Optional[List[str]] = None, **kwargs) -> Command:
    return Command(plugin, triggers=triggers or plugin.triggers, **kwargs)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


@pytest.fixture
def host():
    """Provide a recording host bridge."""
    return RecordingHost()


@pytest.fixture
def palette_registry():
    """Registry with an AI-like command, a time command and a fallback.

    Commands: "ask"/"a" (echo, requires a question), "time" (time plugin
    with format suggestions), "timer" (echo). Fallback: "echo".
    """
    registry = CommandRegistry()
    registry.register(make_command(
        EchoPlugin(
            triggers=["ask", "a"],
            params=[ParamDefinition(name="question", required=True)],
            name="ask",
        )
    ))
    registry.register(make_command(TimePlugin(clock=fixed_clock)))
    registry.register(make_command(EchoPlugin(triggers=["timer"], name="timer")))
    registry.set_fallback(make_command(EchoPlugin(triggers=["fallback"], name="fallback")))
    return registry


@pytest.fixture
def engine(palette_registry):
    """Engine with a short debounce and a fixed result clock."""
    return ResolutionEngine(palette_registry, debounce_ms=10, clock=lambda: "14:30")

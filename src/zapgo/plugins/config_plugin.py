"""
Opens the host's configuration window.
"""

from .base import BasePlugin
from .types import ExecutionResult
from ..host import HostBridge


class ConfigPlugin(BasePlugin):
    """Signals the host shell to show its settings. Takes no parameters."""

    def __init__(self, host: HostBridge):
        super().__init__(
            name="配置设置",
            description="打开应用配置窗口",
            triggers=["config"],
            params=[],
            icon="⚙️",
        )
        self.host = host

    def can_execute(self, input_text: str) -> bool:
        # Whole-trigger matches only; "con" must not open settings.
        text = input_text.strip().lower()
        return any(trigger.lower() == text for trigger in self.triggers)

    async def execute(self, input_text: str) -> ExecutionResult:
        self.host.open_config_window()

        return ExecutionResult(
            icon="⚙️",
            title="配置窗口",
            content="正在打开配置设置窗口...",
        )

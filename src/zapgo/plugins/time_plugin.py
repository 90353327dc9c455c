"""
Current date/time lookup.
"""

from datetime import datetime
from typing import Callable, Optional

from .base import BasePlugin
from .types import ExecutionResult, ParamDefinition

FORMAT_DETAILED = "详细"
FORMAT_SHORT = "简短"
FORMAT_TIMESTAMP = "时间戳"

WEEKDAYS = ["星期一", "星期二", "星期三", "星期四", "星期五", "星期六", "星期日"]


def format_detailed(now: datetime) -> str:
    """Full date, weekday and time, e.g. 2024年1月15日星期一 14:30:45."""
    return f"{now.year}年{now.month}月{now.day}日{WEEKDAYS[now.weekday()]} {now:%H:%M:%S}"


def format_short(now: datetime) -> str:
    return f"{now:%H:%M:%S}"


def format_timestamp(now: datetime) -> str:
    return f"Unix时间戳: {int(now.timestamp())}"


class TimePlugin(BasePlugin):
    """Shows the current time in one of three formats."""

    FORMATTERS = {
        FORMAT_DETAILED: format_detailed,
        FORMAT_SHORT: format_short,
        FORMAT_TIMESTAMP: format_timestamp,
    }

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        super().__init__(
            name="时间查询",
            description="获取当前时间和日期",
            triggers=["time", "时间"],
            params=[
                ParamDefinition(
                    name="格式",
                    required=False,
                    suggestions=[FORMAT_DETAILED, FORMAT_SHORT, FORMAT_TIMESTAMP],
                    description="时间显示格式",
                )
            ],
            icon="⏰",
        )
        self.clock = clock or datetime.now

    async def execute(self, input_text: str) -> ExecutionResult:
        parsed = self.parse_input(input_text)
        fmt = parsed.bound_params.get("格式", FORMAT_DETAILED)
        formatter = self.FORMATTERS.get(fmt, format_detailed)

        return ExecutionResult(
            icon="⏰",
            title="当前时间",
            content=formatter(self.clock()),
        )

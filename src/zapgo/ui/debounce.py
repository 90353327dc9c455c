"""
Cancel-and-replace scheduling on the running asyncio event loop.
"""

import asyncio
from typing import Any, Callable, Optional, Tuple


class DebounceTimer:
    """
    Single-slot cancellable timer.

    Scheduling a new call cancels the pending one, so at most one call is
    outstanding per burst and a superseded call never runs.
    """

    def __init__(self, delay: float):
        """
        Args:
            delay: Quiet period in seconds
        """
        self.delay = delay
        self._handle: Optional[asyncio.TimerHandle] = None

    def schedule(self, callback: Callable[..., Any], *args: Any) -> None:
        """Replace any pending call with callback(*args) after the delay.

        Raises:
            RuntimeError: If called outside a running event loop
        """
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, callback, args)

    def cancel(self) -> bool:
        """Cancel the pending call. Returns True if one was pending."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        return True

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def _fire(self, callback: Callable[..., Any], args: Tuple[Any, ...]) -> None:
        self._handle = None
        callback(*args)

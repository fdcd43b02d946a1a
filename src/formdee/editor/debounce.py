"""Cancellable trailing-edge timer on the asyncio event loop."""

from __future__ import annotations

import asyncio
from typing import Callable

DEFAULT_DEBOUNCE_MS = 300


class Debouncer:
    """Collapse a burst of ``arm`` calls into one trailing callback.

    Each ``arm`` cancels the pending callback before scheduling a new one,
    so at most one callback is pending at a time. The loop is looked up on
    the first ``arm`` unless one is passed in.
    """

    def __init__(
        self,
        delay_ms: int = DEFAULT_DEBOUNCE_MS,
        *,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        if delay_ms <= 0:
            raise ValueError(f"delay_ms must be positive, got {delay_ms}")
        self.delay_ms = delay_ms
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._callback: Callable[[], None] | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def arm(self, callback: Callable[[], None]) -> None:
        """Schedule ``callback`` after the quiet period, replacing any pending one."""
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._callback = callback
        self._handle = loop.call_later(self.delay_ms / 1000, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._callback = None

    def flush(self) -> bool:
        """Run the pending callback now. Returns whether one was pending."""
        callback = self._callback
        if callback is None:
            return False
        self.cancel()
        callback()
        return True

    def _fire(self) -> None:
        callback = self._callback
        self._handle = None
        self._callback = None
        if callback is not None:
            callback()

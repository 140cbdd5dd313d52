"""Per-connection rate-window timer.

Each connection gets a ConnectionLifecycle that owns the background task
resetting its FixedWindowRateLimiter:

1. ``start()`` launches the task; it sleeps one window, resets the counter,
   and repeats for as long as the connection lives
2. ``stop()`` cancels the task and waits for it, so no scheduled work outlives
   the connection

The lifecycle is also an async context manager, which is how the connection
manager holds it: the timer is released on every exit path.

Usage:
    async with ConnectionLifecycle(limiter):
        await run_message_loop(...)
"""

from __future__ import annotations

import asyncio
import contextlib
import logging

from ..limits import FixedWindowRateLimiter

logger = logging.getLogger(__name__)


class ConnectionLifecycle:
    """Runs the window-reset timer for one connection's rate limiter.

    Attributes:
        _limiter: The limiter whose counter is reset each window.
        _window_s: Seconds between resets.
        _task: Background timer task, None until started.
    """

    def __init__(
        self,
        limiter: FixedWindowRateLimiter,
        window_s: float | None = None,
    ):
        """Initialize the timer for ``limiter``.

        Args:
            limiter: Per-connection rate limiter.
            window_s: Override for the reset period (defaults to the limiter's window).
        """
        self._limiter = limiter
        self._window_s = float(window_s if window_s is not None else limiter.window_seconds)
        self._task: asyncio.Task | None = None
        self.resets = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task | None:
        """Start the reset timer (idempotent; no timer when limiting is off)."""
        if self._task is None and self._limiter.enabled and self._window_s > 0:
            self._task = asyncio.create_task(self._window_loop())
        return self._task

    async def stop(self) -> None:
        """Cancel the reset timer and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    async def __aenter__(self) -> ConnectionLifecycle:
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()

    async def _window_loop(self) -> None:
        while True:
            await asyncio.sleep(self._window_s)
            if self._limiter.count > self._limiter.limit:
                logger.debug("rate window closed over budget (%s msgs)", self._limiter.count)
            self._limiter.reset()
            self.resets += 1


__all__ = ["ConnectionLifecycle"]

"""Fixed-window message counter for per-connection abuse containment.

Each connection owns one limiter. Every inbound frame calls ``consume()``,
which bumps the counter and raises once it goes past ``limit``. The counter
is not time-aware on its own: the connection's lifecycle task calls
``reset()`` at every window boundary, whether or not the window was exceeded.

Example:
    limiter = FixedWindowRateLimiter(limit=500, window_seconds=60)

    try:
        limiter.consume()
    except RateLimitError:
        await handle.close(1008, "rate limit exceeded")
"""

from __future__ import annotations

import time
from collections.abc import Callable

from rendezvous.errors import RateLimitError

# Type alias for injectable time functions (used in testing)
TimeFn = Callable[[], float]


class FixedWindowRateLimiter:
    """Count messages in the current window and reject past the ceiling.

    The limiter can be disabled by setting limit=0 or window_seconds=0,
    in which case consume() always succeeds.

    Attributes:
        limit: Maximum messages allowed per window.
        window_seconds: Window duration; also the reset period of the timer.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: float,
        now_fn: TimeFn | None = None,
    ) -> None:
        self.limit = max(0, int(limit))
        self.window_seconds = max(0.0, float(window_seconds))
        self._now = now_fn or time.monotonic
        self._count = 0
        self._window_started = self._now()
        self._enabled = self.limit > 0 and self.window_seconds > 0

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def count(self) -> int:
        return self._count

    @property
    def window_started(self) -> float:
        return self._window_started

    @property
    def window_elapsed(self) -> float:
        """Seconds since the current window opened."""
        return max(0.0, self._now() - self._window_started)

    def consume(self) -> None:
        """Record one inbound message.

        Raises:
            RateLimitError: If this message takes the window past ``limit``.
        """
        if not self._enabled:
            return
        self._count += 1
        if self._count > self.limit:
            raise RateLimitError(
                limit=self.limit,
                window_seconds=self.window_seconds,
                count=self._count,
                elapsed_seconds=self.window_elapsed,
            )

    def reset(self) -> None:
        """Start a new window with a zeroed counter."""
        self._count = 0
        self._window_started = self._now()


__all__ = ["RateLimitError", "FixedWindowRateLimiter"]

"""Rate limit enforcement for inbound signaling frames.

Every frame counts, including malformed ones. Going over budget is fatal for
the connection: it is closed with a policy-violation code and the frame that
tipped it over is never routed.
"""

from __future__ import annotations

import logging

from ...config.websocket import WS_CLOSE_RATE_LIMIT_CODE, WS_CLOSE_RATE_LIMIT_REASON
from ..limits import RateLimitError, FixedWindowRateLimiter
from .connection import ConnectionHandle

logger = logging.getLogger(__name__)


async def consume_limiter(handle: ConnectionHandle, limiter: FixedWindowRateLimiter) -> bool:
    """Count one inbound frame; close the connection and return False when over budget."""
    try:
        limiter.consume()
    except RateLimitError as err:
        logger.warning(
            "rate limit exceeded: %s messages %.1fs into a %ss window (limit %s); closing",
            err.count,
            err.elapsed_seconds,
            int(err.window_seconds),
            err.limit,
        )
        await handle.close(WS_CLOSE_RATE_LIMIT_CODE, WS_CLOSE_RATE_LIMIT_REASON)
        return False
    return True


__all__ = ["consume_limiter"]

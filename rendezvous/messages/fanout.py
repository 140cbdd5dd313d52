"""Best-effort delivery of one frame to a set of connections."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..handlers.websocket.connection import ConnectionHandle


logger = logging.getLogger(__name__)


async def fan_out(targets: Iterable[ConnectionHandle], raw: str) -> int:
    """Send ``raw`` unchanged to every open target; return how many got it.

    Closed targets are skipped. Nothing is queued or retried, and a failing
    target never affects delivery to the others.
    """
    live = [target for target in targets if target.is_open]
    if not live:
        return 0
    results = await asyncio.gather(
        *(target.send_text(raw) for target in live),
        return_exceptions=True,
    )
    delivered = 0
    for target, result in zip(live, results):
        if isinstance(result, BaseException):
            logger.error(
                "forward to %s failed: %r",
                target.connection_id,
                result,
                exc_info=result,
            )
            continue
        if result:
            delivered += 1
    return delivered


__all__ = ["fan_out"]

"""Forwarding of negotiation and passthrough messages."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..config.websocket import ROLE_CLIENT, ROLE_HOST
from ..handlers.session.registry import SessionRegistry
from .fanout import fan_out

if TYPE_CHECKING:
    from ..handlers.websocket.connection import ConnectionHandle

logger = logging.getLogger(__name__)


async def handle_forward_message(
    handle: ConnectionHandle,
    msg_type: str,
    raw: str,
    *,
    registry: SessionRegistry,
) -> int:
    """Relay ``raw`` to the sender's counterpart role; return deliveries.

    Senders that have not joined, and sessions with nobody on the other side,
    are routing misses: the frame is dropped without telling the sender.
    """
    if not handle.joined:
        logger.debug("dropping %s from connection that has not joined", msg_type)
        return 0

    session = registry.get(handle.session_id or "")
    targets = registry.resolve_targets(session, handle.role)
    delivered = await fan_out(targets, raw)
    if not targets:
        logger.debug("no %s peers for %s", ROLE_CLIENT if handle.role == ROLE_HOST else ROLE_HOST, msg_type)
    else:
        logger.debug("forwarded %s to %s/%s peers", msg_type, delivered, len(targets))
    return delivered


__all__ = ["handle_forward_message"]

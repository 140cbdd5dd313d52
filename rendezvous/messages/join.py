"""Join message handling."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..config.websocket import MSG_JOINED
from ..handlers.session.registry import SessionRegistry
from .fanout import fan_out

if TYPE_CHECKING:
    from ..handlers.websocket.connection import ConnectionHandle

logger = logging.getLogger(__name__)


async def handle_join_message(
    handle: ConnectionHandle,
    msg: dict[str, Any],
    raw: str,
    *,
    registry: SessionRegistry,
) -> int:
    """Register ``handle`` in its session and announce it to the other side.

    The joiner is confirmed first, then the untouched join frame goes to the
    opposite role (host join -> all clients, client join -> host) so a peer
    that is already connected knows to negotiate again.

    Returns:
        Number of peers the join was forwarded to.

    Raises:
        AlreadyJoinedError: If the connection already joined elsewhere.
    """
    session_id: str = msg["session_id"]
    role: str = msg["client_type"]

    handle.mark_joined(session_id, role)
    session = await registry.join(session_id, handle, role)
    logger.info(
        "%s joined session %s (host=%s clients=%s)",
        role,
        session_id,
        session.has_host,
        len(session.clients),
    )

    await handle.send_json({
        "type": MSG_JOINED,
        "session_id": session_id,
        "client_type": role,
    })

    peers = registry.resolve_targets(session, role)
    return await fan_out(peers, raw)


__all__ = ["handle_join_message"]

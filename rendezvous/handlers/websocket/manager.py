"""Primary WebSocket connection handler orchestration.

This module contains the entry point for every signaling connection:

1. Connection Setup:
   - Admission against the concurrency ceiling (1013 when full)
   - Per-connection rate limiter and its window-reset timer

2. Message Routing:
   - join: session membership, confirmation, peer notification
   - anything else: verbatim relay to the counterpart role

3. Cleanup (every exit path, including transport errors):
   - Rate-window timer cancelled
   - Membership removed; the session is dropped once empty
   - Connection slot released

State per connection: connected -> joined -> closed. A connection that
never joined has no membership to remove.
"""

from __future__ import annotations

import logging

from fastapi import WebSocket

from ...config.websocket import (
    WS_CLOSE_BUSY_CODE,
    WS_ERROR_AT_CAPACITY,
    WS_CLOSE_INTERNAL_ERROR_CODE,
)
from ...logging import log_context
from ...runtime.dependencies import RuntimeDeps
from ..connections import ConnectionHandler
from ..limits import FixedWindowRateLimiter
from ..session.registry import SessionRegistry
from .connection import ConnectionHandle
from .disconnects import is_expected_disconnect
from .errors import reject_connection
from .lifecycle import ConnectionLifecycle
from .message_loop import run_message_loop

logger = logging.getLogger(__name__)


async def _prepare_connection(handle: ConnectionHandle, connections: ConnectionHandler) -> bool:
    """Admit and accept the connection, or reject it when at capacity."""
    if not await connections.connect(handle):
        await reject_connection(
            handle.websocket,
            message=WS_ERROR_AT_CAPACITY,
            close_code=WS_CLOSE_BUSY_CODE,
        )
        return False

    try:
        await handle.websocket.accept()
    except BaseException:
        await connections.disconnect(handle)
        raise
    return True


async def _cleanup_connection(
    handle: ConnectionHandle,
    registry: SessionRegistry,
    connections: ConnectionHandler,
) -> None:
    """Move the connection to closed and undo its session membership."""
    was_joined = handle.joined
    handle.mark_closed()
    if was_joined:
        session_removed = await registry.leave(handle)
        logger.info(
            "%s left session %s%s",
            handle.role,
            handle.session_id,
            " (session cleaned up)" if session_removed else "",
        )
    await connections.disconnect(handle)


async def handle_websocket_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    """Serve one signaling connection from handshake to cleanup.

    Args:
        ws: The incoming WebSocket connection from FastAPI.
        runtime_deps: Process-wide registry, connection tracker and limits.
    """
    handle = ConnectionHandle(ws)
    connections = runtime_deps.connections
    registry = runtime_deps.registry

    with log_context(connection_id=handle.connection_id):
        if not await _prepare_connection(handle, connections):
            return

        logger.info(
            "WebSocket connection accepted. Active: %s",
            connections.get_connection_count(),
        )
        limiter = FixedWindowRateLimiter(
            limit=runtime_deps.max_messages_per_window,
            window_seconds=runtime_deps.message_window_seconds,
        )
        try:
            async with ConnectionLifecycle(limiter):
                await run_message_loop(handle, limiter, registry)
        except Exception as exc:
            if is_expected_disconnect(exc):
                logger.debug("peer disconnected: %r", exc)
            else:
                logger.exception("WebSocket error")
                await handle.close(WS_CLOSE_INTERNAL_ERROR_CODE, "internal error")
        finally:
            await _cleanup_connection(handle, registry, connections)
            logger.info(
                "WebSocket connection closed. Active: %s",
                connections.get_connection_count(),
            )


__all__ = ["handle_websocket_connection"]

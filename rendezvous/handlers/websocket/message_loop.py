"""WebSocket message loop and dispatch helpers.

Each frame runs to completion, including its whole fan-out, before the next
frame from the same connection is read. That is what keeps one sender's
messages in order at every receiver.
"""

from __future__ import annotations

import logging

from fastapi import WebSocket, WebSocketDisconnect

from ...config.websocket import MSG_JOIN, WS_ERROR_ALREADY_JOINED
from ...errors import AlreadyJoinedError, MessageFormatError
from ...logging import log_context
from ...messages.forward import handle_forward_message
from ...messages.join import handle_join_message
from ..limits import FixedWindowRateLimiter
from ..session.registry import SessionRegistry
from .connection import ConnectionHandle
from .errors import send_error
from .limits import consume_limiter
from .parser import parse_client_message

logger = logging.getLogger(__name__)


async def receive_frame(ws: WebSocket) -> str | None:
    """Wait for the next frame; None for a binary frame that is not UTF-8.

    Raises:
        WebSocketDisconnect: When the peer closes the transport.
    """
    message = await ws.receive()
    if message["type"] == "websocket.disconnect":
        raise WebSocketDisconnect(message.get("code", 1000), message.get("reason"))
    text = message.get("text")
    if text is not None:
        return text
    data = message.get("bytes")
    if data is None:
        return None
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None


async def dispatch_message(
    handle: ConnectionHandle,
    raw: str | None,
    *,
    registry: SessionRegistry,
) -> None:
    """Parse one frame and route it; protocol errors are answered, not raised."""
    try:
        msg = parse_client_message(raw)
    except MessageFormatError as exc:
        logger.info("invalid message: %s", exc.detail)
        await send_error(handle, exc.wire_message)
        return

    msg_type: str = msg["type"]
    if msg_type == MSG_JOIN:
        try:
            await handle_join_message(handle, msg, raw or "", registry=registry)
        except AlreadyJoinedError as exc:
            logger.info("join refused: %s", exc)
            await send_error(handle, WS_ERROR_ALREADY_JOINED)
        return

    await handle_forward_message(handle, msg_type, raw or "", registry=registry)


async def run_message_loop(
    handle: ConnectionHandle,
    limiter: FixedWindowRateLimiter,
    registry: SessionRegistry,
) -> None:
    """Receive, rate limit and dispatch frames until the connection ends."""
    ws = handle.websocket
    while True:
        raw = await receive_frame(ws)
        if not await consume_limiter(handle, limiter):
            break
        with log_context(session_id=handle.session_id, client_type=handle.role):
            await dispatch_message(handle, raw, registry=registry)


__all__ = ["dispatch_message", "receive_frame", "run_message_loop"]

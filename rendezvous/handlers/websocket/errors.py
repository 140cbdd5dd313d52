"""Shared response helpers for WebSocket error handling.

Error frames sent to peers follow the original signaling contract:

    {"type": "error", "message": "Human-readable description"}

Clients match on ``message`` for malformed input ("Invalid message format").
"""

from __future__ import annotations

import contextlib
import json

from fastapi import WebSocket

from ...config.websocket import MSG_ERROR
from .connection import ConnectionHandle


def build_error_payload(message: str) -> dict[str, str]:
    return {"type": MSG_ERROR, "message": message}


async def send_error(handle: ConnectionHandle, message: str) -> bool:
    """Send an error frame to the peer; False if it could not be delivered."""
    return await handle.send_json(build_error_payload(message))


async def reject_connection(ws: WebSocket, *, message: str, close_code: int) -> None:
    """Accept connection briefly to send an error, then close immediately.

    The peer receives a readable reason rather than just a raw close code.
    """
    with contextlib.suppress(Exception):
        await ws.accept()
        await ws.send_text(json.dumps(build_error_payload(message)))
        await ws.close(code=close_code)


__all__ = ["build_error_payload", "send_error", "reject_connection"]

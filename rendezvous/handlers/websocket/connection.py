"""Connection handle wrapping one signaling WebSocket.

The handle is what the registry stores and what the router fans out to.
It exposes exactly the surface the relay needs from a transport:

- ``send_text`` / ``send_json``: best-effort delivery, returning False when the
  peer is gone instead of raising
- ``close``: idempotent close with a code and reason
- ``is_open``: liveness used to skip dead targets during fan-out

Role and session are recorded here on the first successful join and are
immutable afterwards.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import uuid
from typing import Any

from fastapi import WebSocket
from fastapi.websockets import WebSocketState

from ...errors import AlreadyJoinedError
from ...state.connection import ConnectionState
from .disconnects import is_expected_disconnect

logger = logging.getLogger(__name__)


class ConnectionHandle:
    """One duplex signaling connection plus its join state.

    Attributes:
        connection_id: Short random id used in logs.
        role: ``"host"`` or ``"client"`` once joined, else None.
        session_id: Token of the joined session, else None.
        state: Lifecycle state (connected, joined, closed).
    """

    def __init__(self, websocket: WebSocket, connection_id: str | None = None) -> None:
        self._ws = websocket
        self.connection_id = connection_id or uuid.uuid4().hex[:8]
        self.role: str | None = None
        self.session_id: str | None = None
        self.state = ConnectionState.CONNECTED
        self._transport_open = True
        self._send_lock = asyncio.Lock()  # Serializes frames from concurrent fan-outs

    def __repr__(self) -> str:
        return (
            f"ConnectionHandle(id={self.connection_id}, role={self.role}, "
            f"session={self.session_id}, state={self.state.value})"
        )

    @property
    def websocket(self) -> WebSocket:
        return self._ws

    @property
    def joined(self) -> bool:
        return self.state is ConnectionState.JOINED

    @property
    def is_open(self) -> bool:
        """True while frames can still be delivered to the peer."""
        if not self._transport_open or self.state is ConnectionState.CLOSED:
            return False
        return (
            self._ws.client_state == WebSocketState.CONNECTED
            and self._ws.application_state == WebSocketState.CONNECTED
        )

    def mark_joined(self, session_id: str, role: str) -> None:
        """Record the session and role of a successful join.

        A repeated join for the same session and role is accepted as-is.

        Raises:
            AlreadyJoinedError: If the connection already joined elsewhere.
        """
        if self.state is ConnectionState.JOINED:
            if (self.session_id, self.role) != (session_id, role):
                raise AlreadyJoinedError(
                    session_id=self.session_id or "",
                    role=self.role or "",
                    requested_session_id=session_id,
                    requested_role=role,
                )
            return
        self.session_id = session_id
        self.role = role
        self.state = ConnectionState.JOINED

    def mark_closed(self) -> None:
        """Enter the terminal state; the handle never delivers again."""
        self.state = ConnectionState.CLOSED
        self._transport_open = False

    async def send_text(self, text: str) -> bool:
        """Send one frame, returning False if the peer is no longer reachable."""
        if not self.is_open:
            return False
        async with self._send_lock:
            try:
                await self._ws.send_text(text)
            except Exception as exc:
                if not is_expected_disconnect(exc):
                    raise
                self._transport_open = False
                logger.info("peer %s went away while sending %s bytes", self.connection_id, len(text))
                return False
        return True

    async def send_json(self, payload: dict[str, Any]) -> bool:
        return await self.send_text(json.dumps(payload))

    async def close(self, code: int, reason: str = "") -> None:
        """Close the transport once; later calls are no-ops."""
        if not self._transport_open:
            return
        self._transport_open = False
        with contextlib.suppress(Exception):
            await self._ws.close(code=code, reason=reason)


__all__ = ["ConnectionHandle"]

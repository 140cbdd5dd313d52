"""Connection admission and tracking for the signaling socket.

This module manages the pool of live connections and enforces the
MAX_CONCURRENT_CONNECTIONS limit:

1. Semaphore acquisition (with timeout) reserves a slot
2. Lock-protected set addition tracks the handle

The tracked handles are also what shutdown closes with "going away".

Example:
    handler = ConnectionHandler(max_connections=100)

    if not await handler.connect(handle):
        await reject(...)  # 1013, try again later
        return
    try:
        ...
    finally:
        await handler.disconnect(handle)
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ..config import MAX_CONCURRENT_CONNECTIONS
from ..config.websocket import WS_HANDSHAKE_ACQUIRE_TIMEOUT_S

if TYPE_CHECKING:
    from .websocket.connection import ConnectionHandle

logger = logging.getLogger(__name__)


class ConnectionHandler:
    """Tracks live connections and enforces the concurrency ceiling.

    Attributes:
        max_connections: Maximum allowed concurrent connections.
        acquire_timeout: Max seconds to wait for a connection slot.
        active_connections: Handles currently admitted.
    """

    def __init__(
        self,
        max_connections: int | None = None,
        acquire_timeout: float = WS_HANDSHAKE_ACQUIRE_TIMEOUT_S,
    ):
        if max_connections is None:
            max_connections = MAX_CONCURRENT_CONNECTIONS
        self.max_connections = max_connections
        self.acquire_timeout = acquire_timeout
        self.active_connections: set[ConnectionHandle] = set()
        self._lock = asyncio.Lock()  # Protects active_connections set
        self._semaphore = asyncio.Semaphore(max_connections)  # Limits concurrency

    async def connect(self, handle: ConnectionHandle) -> bool:
        """Admit ``handle``; return False if the relay is at capacity."""
        try:
            await asyncio.wait_for(self._semaphore.acquire(), timeout=self.acquire_timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Connection rejected: at capacity (%s/%s)",
                len(self.active_connections),
                self.max_connections,
            )
            return False

        try:
            async with self._lock:
                self.active_connections.add(handle)
                logger.info(
                    "Connection accepted: %s/%s active",
                    len(self.active_connections),
                    self.max_connections,
                )
                return True
        except BaseException:
            self._semaphore.release()
            raise

    async def disconnect(self, handle: ConnectionHandle) -> None:
        """Release the slot held by ``handle`` (no-op if never admitted)."""
        should_release = False
        async with self._lock:
            if handle in self.active_connections:
                self.active_connections.remove(handle)
                should_release = True
                logger.info(
                    "Connection removed: %s/%s active",
                    len(self.active_connections),
                    self.max_connections,
                )
        if should_release:
            self._semaphore.release()

    async def close_all(self, code: int, reason: str) -> int:
        """Close every admitted connection; returns how many were closed."""
        async with self._lock:
            handles = list(self.active_connections)
        for handle in handles:
            await handle.close(code, reason)
        return len(handles)

    def get_connection_count(self) -> int:
        return len(self.active_connections)

    def get_capacity_info(self) -> dict:
        """Active, max, and available connection counts for the health probe."""
        active = len(self.active_connections)
        return {
            "active": active,
            "max": self.max_connections,
            "available": self.max_connections - active,
            "at_capacity": active >= self.max_connections,
        }


__all__ = ["ConnectionHandler"]

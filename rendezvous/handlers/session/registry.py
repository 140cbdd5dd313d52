"""Session registry: the only state shared across connections.

The registry maps session tokens to ``Session`` records and upholds one
invariant: a token is registered iff its session has a host or at least one
client. Sessions are created on the first join for a token and removed the
moment their last member leaves.

Concurrency:
    Every membership mutation for a token runs under that token's lock, so a
    join racing a departure on the same session can never lose an update or
    delete a session someone just joined. Locks are per token and reference
    counted; unrelated sessions never wait on each other.

    Target resolution for fan-out does not take the lock. It reads whatever
    membership was last committed, which is all best-effort delivery needs.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from ...config.websocket import ROLE_HOST
from ...state.locks import KeyLock
from ...state.session import Session

if TYPE_CHECKING:
    from ..websocket.connection import ConnectionHandle

logger = logging.getLogger(__name__)


class SessionRegistry:
    """In-memory mapping of session token to ``Session``."""

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}
        self._locks: dict[str, KeyLock] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, token: object) -> bool:
        return token in self._sessions

    def __iter__(self) -> Iterator[Session]:
        return iter(list(self._sessions.values()))

    def get(self, token: str) -> Session | None:
        return self._sessions.get(token)

    @asynccontextmanager
    async def locked(self, token: str) -> AsyncIterator[None]:
        """Hold the per-token write lock for the duration of the block."""
        entry = self._locks.get(token)
        if entry is None:
            entry = KeyLock()
            self._locks[token] = entry
        entry.users += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.users -= 1
            if entry.users == 0 and self._locks.get(token) is entry:
                del self._locks[token]

    def get_or_create(self, token: str) -> Session:
        """Return the session for ``token``, creating an empty one if needed.

        Callers mutating membership must hold ``locked(token)``.
        """
        session = self._sessions.get(token)
        if session is None:
            session = Session(token=token)
            self._sessions[token] = session
            logger.info("session created: %s (total=%s)", token, len(self._sessions))
        return session

    def remove(self, token: str) -> bool:
        """Delete the session only if it is empty; return True if deleted."""
        session = self._sessions.get(token)
        if session is None or not session.is_empty():
            return False
        del self._sessions[token]
        logger.info("session removed: %s (total=%s)", token, len(self._sessions))
        return True

    def resolve_targets(self, session: Session | None, sender_role: str | None) -> set[ConnectionHandle]:
        """Fan-out targets for a message sent by ``sender_role``.

        Host senders reach every client; client senders reach the host.
        """
        if session is None:
            return set()
        if sender_role == ROLE_HOST:
            return set(session.clients)
        if session.host is None:
            return set()
        return {session.host}

    async def join(self, token: str, handle: ConnectionHandle, role: str) -> Session:
        """Add ``handle`` to the session for ``token`` under ``role``.

        A host join always takes the host slot, displacing any current host
        without notice.
        """
        async with self.locked(token):
            session = self.get_or_create(token)
            if role == ROLE_HOST:
                previous = session.host
                session.host = handle
                if previous is not None and previous is not handle:
                    logger.warning(
                        "host slot of session %s taken over by %s (was %s)",
                        token,
                        handle.connection_id,
                        previous.connection_id,
                    )
            else:
                session.clients.add(handle)
            return session

    async def leave(self, handle: ConnectionHandle) -> bool:
        """Drop ``handle`` from its session; return True if the session went away."""
        token = handle.session_id
        if token is None:
            return False
        async with self.locked(token):
            session = self._sessions.get(token)
            if session is None:
                return False
            if handle.role == ROLE_HOST:
                # A displaced host must not clear its successor
                if session.host is handle:
                    session.host = None
            else:
                session.clients.discard(handle)
            return self.remove(token)

    def snapshot(self) -> dict[str, object]:
        """Read-only status view of all sessions."""
        sessions = [session.describe() for session in self]
        return {
            "sessions": sessions,
            "total_sessions": len(sessions),
        }


__all__ = ["SessionRegistry"]

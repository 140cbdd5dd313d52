"""Session record held by the registry."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..handlers.websocket.connection import ConnectionHandle


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(eq=False)
class Session:
    """Rendezvous unit: one host slot plus a set of client connections.

    The registry holds non-owning references to the handles; the transport
    endpoint owns their lifetime.
    """

    token: str
    host: ConnectionHandle | None = None
    clients: set[ConnectionHandle] = field(default_factory=set)
    created_at: int = field(default_factory=_now_ms)  # epoch milliseconds

    @property
    def has_host(self) -> bool:
        return self.host is not None

    def is_empty(self) -> bool:
        return self.host is None and not self.clients

    def describe(self) -> dict[str, object]:
        """Status-endpoint view of this session."""
        return {
            "id": self.token,
            "has_host": self.has_host,
            "client_count": len(self.clients),
            "created_at": self.created_at,
        }


__all__ = ["Session"]

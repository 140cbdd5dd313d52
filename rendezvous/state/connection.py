"""Per-connection lifecycle states."""

from __future__ import annotations

import enum


class ConnectionState(enum.Enum):
    """Connected (pre-join) -> Joined -> Closed (terminal)."""

    CONNECTED = "connected"
    JOINED = "joined"
    CLOSED = "closed"


__all__ = ["ConnectionState"]

"""Runtime dependency container.

All long-lived relay services are assembled at startup and passed explicitly
to the websocket handler, so tests can build their own isolated set.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..config.limits import WS_MAX_MESSAGES_PER_WINDOW, WS_MESSAGE_WINDOW_SECONDS
from ..config.websocket import WS_CLOSE_GOING_AWAY_CODE, WS_CLOSE_GOING_AWAY_REASON

if TYPE_CHECKING:
    from ..handlers.connections import ConnectionHandler
    from ..handlers.session.registry import SessionRegistry


@dataclass(slots=True)
class RuntimeDeps:
    """Process-wide relay services initialized during startup."""

    connections: ConnectionHandler
    registry: SessionRegistry
    max_messages_per_window: int = WS_MAX_MESSAGES_PER_WINDOW
    message_window_seconds: float = WS_MESSAGE_WINDOW_SECONDS

    def health(self) -> dict[str, object]:
        return {
            "sessions": len(self.registry),
            "connections": self.connections.get_connection_count(),
            "capacity": self.connections.get_capacity_info(),
        }

    async def shutdown(self) -> int:
        """Close every live connection with "going away"."""
        return await self.connections.close_all(
            WS_CLOSE_GOING_AWAY_CODE,
            WS_CLOSE_GOING_AWAY_REASON,
        )

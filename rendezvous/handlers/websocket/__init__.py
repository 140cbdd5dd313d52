"""WebSocket handler exports."""

from .connection import ConnectionHandle
from .lifecycle import ConnectionLifecycle
from .manager import handle_websocket_connection

__all__ = [
    "ConnectionHandle",
    "ConnectionLifecycle",
    "handle_websocket_connection",
]

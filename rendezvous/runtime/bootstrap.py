"""Runtime dependency bootstrap."""

from __future__ import annotations

from rendezvous.handlers.connections import ConnectionHandler
from rendezvous.handlers.session.registry import SessionRegistry

from .dependencies import RuntimeDeps


def build_runtime_deps(
    *,
    max_connections: int | None = None,
    max_messages_per_window: int | None = None,
    message_window_seconds: float | None = None,
) -> RuntimeDeps:
    """Build a fresh registry and connection tracker; overrides are for tests."""
    deps = RuntimeDeps(
        connections=ConnectionHandler(max_connections=max_connections),
        registry=SessionRegistry(),
    )
    if max_messages_per_window is not None:
        deps.max_messages_per_window = max_messages_per_window
    if message_window_seconds is not None:
        deps.message_window_seconds = message_window_seconds
    return deps


__all__ = ["build_runtime_deps"]

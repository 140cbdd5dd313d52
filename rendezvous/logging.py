"""Per-peer log fields for the relay.

Every record emitted while a connection is being serviced carries the
session token, the role and a short connection id, so interleaved output
from many sockets can still be followed per peer.

The fields live in one immutable ``PeerLogContext`` held by a context
variable. ``log_context`` layers fields on top of the current value: the
manager binds the connection id once, and the message loop adds session and
role once the peer has joined. ``PeerContextFilter`` copies the current
value onto records at the root handlers, which also covers uvicorn's own
loggers since they propagate to root.
"""

from __future__ import annotations

import contextlib
import dataclasses
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

_UNSET = "-"


@dataclasses.dataclass(frozen=True)
class PeerLogContext:
    session_id: str = _UNSET
    client_type: str = _UNSET
    connection_id: str = _UNSET


_PEER: ContextVar[PeerLogContext] = ContextVar("peer_log_context", default=PeerLogContext())


def current_log_context() -> PeerLogContext:
    return _PEER.get()


@contextmanager
def log_context(
    *,
    session_id: str | None = None,
    client_type: str | None = None,
    connection_id: str | None = None,
) -> Iterator[PeerLogContext]:
    """Apply peer fields within a block; None leaves a field as it was."""
    changes = {
        name: value
        for name, value in (
            ("session_id", session_id),
            ("client_type", client_type),
            ("connection_id", connection_id),
        )
        if value is not None
    }
    ctx = dataclasses.replace(_PEER.get(), **changes)
    token = _PEER.set(ctx)
    try:
        yield ctx
    finally:
        _PEER.reset(token)


class PeerContextFilter(logging.Filter):
    """Stamp the current peer fields on each record passing a handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        ctx = _PEER.get()
        record.session_id = ctx.session_id
        record.client_type = ctx.client_type
        record.connection_id = ctx.connection_id
        return True


def _ensure_peer_filter(handler: logging.Handler) -> None:
    if not any(isinstance(existing, PeerContextFilter) for existing in handler.filters):
        handler.addFilter(PeerContextFilter())


def configure_logging() -> None:
    """Initialize root logging configuration once per process."""
    from rendezvous.config.logging import APP_LOG_LEVEL, APP_LOG_FORMAT, APP_LOG_DATEFMT  # noqa: PLC0415

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=APP_LOG_LEVEL, format=APP_LOG_FORMAT, datefmt=APP_LOG_DATEFMT)
    else:
        root_logger.setLevel(APP_LOG_LEVEL)
        for handler in root_logger.handlers:
            with contextlib.suppress(Exception):
                handler.setLevel(APP_LOG_LEVEL)
                handler.setFormatter(logging.Formatter(APP_LOG_FORMAT, datefmt=APP_LOG_DATEFMT))

    for handler in root_logger.handlers:
        _ensure_peer_filter(handler)
    logging.getLogger("rendezvous").setLevel(APP_LOG_LEVEL)


__all__ = [
    "PeerContextFilter",
    "PeerLogContext",
    "configure_logging",
    "current_log_context",
    "log_context",
]

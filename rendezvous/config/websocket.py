"""WebSocket-specific runtime configuration values.

This module defines constants for the signaling socket contract:

Timeouts:
    WS_HANDSHAKE_ACQUIRE_TIMEOUT_S: Max time to wait for a connection slot.
        If the relay is at capacity, connections wait this long before
        being rejected.

Close Codes (RFC 6455):
    1001: Going away (relay shutting down)
    1008: Policy violation (message rate limit exceeded)
    1011: Internal error (unexpected failure while serving the socket)
    1013: Try again later (relay at capacity)

Message Types:
    Only join, joined and error are interpreted. Every other type string
    (offer, answer, ice-candidate, ...) is forwarded verbatim.

Environment Variables:
    Close codes and reasons can be overridden, but clients in the field
    match on the defaults.
"""

from __future__ import annotations

import os

# ============================================================================
# Timeout Configuration
# ============================================================================

WS_HANDSHAKE_ACQUIRE_TIMEOUT_S = float(os.getenv("WS_HANDSHAKE_ACQUIRE_TIMEOUT_S", "0.5"))

# ============================================================================
# WebSocket Close Codes
# ============================================================================

WS_CLOSE_RATE_LIMIT_CODE = int(os.getenv("WS_CLOSE_RATE_LIMIT_CODE", "1008"))  # Policy violation
WS_CLOSE_RATE_LIMIT_REASON = os.getenv("WS_CLOSE_RATE_LIMIT_REASON", "rate limit exceeded")
WS_CLOSE_BUSY_CODE = int(os.getenv("WS_CLOSE_BUSY_CODE", "1013"))  # Try again later
WS_CLOSE_INTERNAL_ERROR_CODE = int(os.getenv("WS_CLOSE_INTERNAL_ERROR_CODE", "1011"))
WS_CLOSE_GOING_AWAY_CODE = int(os.getenv("WS_CLOSE_GOING_AWAY_CODE", "1001"))
WS_CLOSE_GOING_AWAY_REASON = os.getenv("WS_CLOSE_GOING_AWAY_REASON", "server shutting down")

# ============================================================================
# Protocol
# ============================================================================

ROLE_HOST = "host"
ROLE_CLIENT = "client"
ROLES = frozenset({ROLE_HOST, ROLE_CLIENT})

MSG_JOIN = "join"
MSG_JOINED = "joined"
MSG_ERROR = "error"

WS_ERROR_INVALID_FORMAT = "Invalid message format"
WS_ERROR_ALREADY_JOINED = "Connection already joined a different session or role"
WS_ERROR_AT_CAPACITY = "Server is at capacity"

__all__ = [
    "WS_HANDSHAKE_ACQUIRE_TIMEOUT_S",
    "WS_CLOSE_RATE_LIMIT_CODE",
    "WS_CLOSE_RATE_LIMIT_REASON",
    "WS_CLOSE_BUSY_CODE",
    "WS_CLOSE_INTERNAL_ERROR_CODE",
    "WS_CLOSE_GOING_AWAY_CODE",
    "WS_CLOSE_GOING_AWAY_REASON",
    "ROLE_HOST",
    "ROLE_CLIENT",
    "ROLES",
    "MSG_JOIN",
    "MSG_JOINED",
    "MSG_ERROR",
    "WS_ERROR_INVALID_FORMAT",
    "WS_ERROR_ALREADY_JOINED",
    "WS_ERROR_AT_CAPACITY",
]

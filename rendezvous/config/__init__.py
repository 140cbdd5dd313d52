"""Aggregator of configuration modules.

This module re-exports the config API from smaller modules:
- server: bind address and CORS
- limits: message-rate and concurrency limits
- websocket: close codes, protocol constants
- logging: log level and format
"""

from .server import (
    HOST,
    PORT,
    CORS_ALLOW_ORIGINS,
)
from .limits import (
    WS_MESSAGE_WINDOW_SECONDS,
    WS_MAX_MESSAGES_PER_WINDOW,
    MAX_CONCURRENT_CONNECTIONS,
)
from .websocket import (
    WS_HANDSHAKE_ACQUIRE_TIMEOUT_S,
    WS_CLOSE_RATE_LIMIT_CODE,
    WS_CLOSE_RATE_LIMIT_REASON,
    WS_CLOSE_BUSY_CODE,
    WS_CLOSE_GOING_AWAY_CODE,
    WS_CLOSE_GOING_AWAY_REASON,
    ROLE_HOST,
    ROLE_CLIENT,
    ROLES,
)
from .logging import (
    APP_LOG_LEVEL,
    APP_LOG_FORMAT,
    APP_LOG_DATEFMT,
    ACCESS_LOG,
)


def validate_env() -> None:
    """Validate configuration once during startup."""
    errors: list[str] = []
    if not 0 < PORT < 65536:
        errors.append(f"PORT must be between 1 and 65535, got {PORT}")
    if WS_MAX_MESSAGES_PER_WINDOW < 0:
        errors.append("WS_MAX_MESSAGES_PER_WINDOW must be >= 0 (0 disables the limit)")
    if WS_MESSAGE_WINDOW_SECONDS < 0:
        errors.append("WS_MESSAGE_WINDOW_SECONDS must be >= 0 (0 disables the limit)")
    if MAX_CONCURRENT_CONNECTIONS <= 0:
        errors.append("MAX_CONCURRENT_CONNECTIONS must be a positive integer")
    if not CORS_ALLOW_ORIGINS:
        errors.append("CORS_ALLOW_ORIGINS must list at least one origin")
    if errors:
        raise ValueError("; ".join(errors))


__all__ = [
    "HOST",
    "PORT",
    "CORS_ALLOW_ORIGINS",
    "WS_MESSAGE_WINDOW_SECONDS",
    "WS_MAX_MESSAGES_PER_WINDOW",
    "MAX_CONCURRENT_CONNECTIONS",
    "WS_HANDSHAKE_ACQUIRE_TIMEOUT_S",
    "WS_CLOSE_RATE_LIMIT_CODE",
    "WS_CLOSE_RATE_LIMIT_REASON",
    "WS_CLOSE_BUSY_CODE",
    "WS_CLOSE_GOING_AWAY_CODE",
    "WS_CLOSE_GOING_AWAY_REASON",
    "ROLE_HOST",
    "ROLE_CLIENT",
    "ROLES",
    "APP_LOG_LEVEL",
    "APP_LOG_FORMAT",
    "APP_LOG_DATEFMT",
    "ACCESS_LOG",
    "validate_env",
]

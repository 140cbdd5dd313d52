"""Message-rate and concurrency limits configuration."""

import os


# WebSocket message rate limit (fixed window, reset by the per-connection timer)
WS_MESSAGE_WINDOW_SECONDS = float(os.getenv("WS_MESSAGE_WINDOW_SECONDS", "60"))
WS_MAX_MESSAGES_PER_WINDOW = int(os.getenv("WS_MAX_MESSAGES_PER_WINDOW", "500"))

# Maximum concurrent WebSocket connections admitted by the relay
_max_concurrent_raw = os.getenv("MAX_CONCURRENT_CONNECTIONS", "1000")
try:
    MAX_CONCURRENT_CONNECTIONS = int(_max_concurrent_raw)
except ValueError as exc:
    raise ValueError(
        f"MAX_CONCURRENT_CONNECTIONS must be an integer, got '{_max_concurrent_raw}'."
    ) from exc


__all__ = [
    "WS_MESSAGE_WINDOW_SECONDS",
    "WS_MAX_MESSAGES_PER_WINDOW",
    "MAX_CONCURRENT_CONNECTIONS",
]

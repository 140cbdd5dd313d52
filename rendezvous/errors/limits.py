"""Rate limiting exception with window metadata."""


class RateLimitError(Exception):
    """Raised when a connection exceeds its message budget.

    Attributes:
        limit: The maximum allowed messages per window.
        window_seconds: The duration of the rate limit window.
        count: How many messages were seen in the current window.
        elapsed_seconds: How far into the window the limit was crossed.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: float,
        count: int,
        elapsed_seconds: float = 0.0,
        message: str | None = None,
    ) -> None:
        super().__init__(message or "rate limit exceeded")
        self.limit = max(0, int(limit))
        self.window_seconds = max(0.0, float(window_seconds))
        self.count = max(0, int(count))
        self.elapsed_seconds = max(0.0, float(elapsed_seconds))


__all__ = ["RateLimitError"]

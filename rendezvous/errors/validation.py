"""Protocol errors raised while decoding inbound control messages."""

from __future__ import annotations

from ..config.websocket import WS_ERROR_INVALID_FORMAT


class MessageFormatError(ValueError):
    """Inbound frame is not a well-formed signaling message.

    ``detail`` is kept for logs only; the peer always receives the generic
    wire message so clients can match on it.
    """

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail
        self.wire_message = WS_ERROR_INVALID_FORMAT


__all__ = ["MessageFormatError"]

"""Signaling message handlers.

- join: session membership plus peer notification
- forward: offer/answer/ice-candidate and any other type, relayed verbatim
"""

from .fanout import fan_out
from .join import handle_join_message
from .forward import handle_forward_message

__all__ = [
    "fan_out",
    "handle_forward_message",
    "handle_join_message",
]

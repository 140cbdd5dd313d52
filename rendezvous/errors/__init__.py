"""Centralized exception classes for the relay.

Organization:
    - limits.py: Message-rate limiting errors
    - validation.py: Malformed inbound messages
    - session.py: Session membership errors
"""

from .limits import RateLimitError
from .session import AlreadyJoinedError
from .validation import MessageFormatError

__all__ = [
    "AlreadyJoinedError",
    "MessageFormatError",
    "RateLimitError",
]

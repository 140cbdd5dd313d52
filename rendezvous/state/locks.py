"""Reference-counted lock entry for per-key serialization."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field


@dataclass
class KeyLock:
    """Lock plus the number of coroutines holding or waiting on it.

    The owner drops the entry only when ``users`` falls back to zero, so a
    waiter can never end up on a lock that a newcomer no longer sees.
    """

    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    users: int = 0


__all__ = ["KeyLock"]

"""Centralized state definitions for the relay."""

from .locks import KeyLock
from .session import Session
from .connection import ConnectionState

__all__ = [
    "ConnectionState",
    "KeyLock",
    "Session",
]

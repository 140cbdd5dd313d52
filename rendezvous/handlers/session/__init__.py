"""Session registry exports."""

from .registry import SessionRegistry

__all__ = ["SessionRegistry"]

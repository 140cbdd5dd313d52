"""Environment parsing helpers shared by the config modules."""

from __future__ import annotations

import os

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def env_flag(name: str, default: bool) -> bool:
    """Return True/False for typical truthy env encodings."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def env_list(name: str, default: str) -> list[str]:
    """Split a comma separated env value, dropping blank entries."""
    raw = os.getenv(name, default) or default
    return [item.strip() for item in raw.split(",") if item.strip()]


__all__ = ["env_flag", "env_list"]

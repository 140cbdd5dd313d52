"""Shared fakes and polling helpers for the unit tests."""

__all__ = ["fakes"]

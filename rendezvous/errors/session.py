"""Session membership errors."""

from __future__ import annotations


class AlreadyJoinedError(Exception):
    """A joined connection asked to join a different session or role.

    Role and session are fixed once a connection has joined, so the request
    is refused without touching the registry.
    """

    def __init__(self, *, session_id: str, role: str, requested_session_id: str, requested_role: str) -> None:
        super().__init__(
            f"connection already joined session={session_id!r} as {role!r}; "
            f"refused session={requested_session_id!r} as {requested_role!r}"
        )
        self.session_id = session_id
        self.role = role
        self.requested_session_id = requested_session_id
        self.requested_role = requested_role


__all__ = ["AlreadyJoinedError"]

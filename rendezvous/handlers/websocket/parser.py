"""Client payload parsing for the signaling socket.

Only the envelope is checked here. ``join`` must name a session and a role.
Every other type is opaque and gets forwarded verbatim, so new negotiation
messages need no parser changes.
"""

from __future__ import annotations

import json
from typing import Any

from ...config.websocket import MSG_JOIN, ROLES
from ...errors import MessageFormatError


def parse_client_message(raw: str | None) -> dict[str, Any]:
    """Decode one inbound frame into a message dict.

    Raises:
        MessageFormatError: If the frame is not a JSON object with a string
            ``type``, or a join lacks a valid ``session_id``/``client_type``.
    """
    text = (raw or "").strip()
    if not text:
        raise MessageFormatError("Empty message.")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MessageFormatError("Message must be valid JSON.") from exc

    if not isinstance(data, dict):
        raise MessageFormatError("Message must be a JSON object.")

    msg_type = data.get("type")
    if not isinstance(msg_type, str) or not msg_type:
        raise MessageFormatError("Missing 'type' in message.")

    if msg_type == MSG_JOIN:
        _validate_join(data)
    return data


def _validate_join(data: dict[str, Any]) -> None:
    session_id = data.get("session_id")
    if not isinstance(session_id, str) or not session_id:
        raise MessageFormatError("join requires a non-empty 'session_id'.")
    client_type = data.get("client_type")
    if client_type not in ROLES:
        raise MessageFormatError(f"join 'client_type' must be one of {sorted(ROLES)}.")


__all__ = ["parse_client_message"]

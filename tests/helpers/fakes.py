"""In-memory stand-ins for FastAPI websockets used by the unit tests."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable
from typing import Any

from fastapi.websockets import WebSocketState


class FakeWebSocket:
    """Scriptable websocket: frames are pushed in, sends and closes recorded."""

    def __init__(self, frames: list[str | None] | None = None) -> None:
        self.client_state = WebSocketState.CONNECTED
        self.application_state = WebSocketState.CONNECTED
        self.accepted = False
        self.sent: list[str] = []
        self.close_calls: list[tuple[int, str]] = []
        self._inbox: asyncio.Queue[dict[str, Any]] = asyncio.Queue()
        for frame in frames or []:
            self.push(frame)

    def push(self, frame: str | None) -> None:
        """Queue an inbound text frame; None queues a peer disconnect."""
        if frame is None:
            self._inbox.put_nowait({"type": "websocket.disconnect", "code": 1000})
        else:
            self._inbox.put_nowait({"type": "websocket.receive", "text": frame})

    def push_json(self, payload: dict[str, Any]) -> None:
        self.push(json.dumps(payload))

    def push_bytes(self, data: bytes) -> None:
        self._inbox.put_nowait({"type": "websocket.receive", "bytes": data})

    def disconnect(self) -> None:
        self.push(None)

    async def accept(self) -> None:
        self.accepted = True

    async def receive(self) -> dict[str, Any]:
        message = await self._inbox.get()
        if message["type"] == "websocket.disconnect":
            self.client_state = WebSocketState.DISCONNECTED
        return message

    async def send_text(self, text: str) -> None:
        if self.application_state != WebSocketState.CONNECTED:
            raise RuntimeError('Cannot call "send" once a close message has been sent.')
        self.sent.append(text)

    async def close(self, code: int = 1000, reason: str | None = None) -> None:
        self.close_calls.append((code, reason or ""))
        self.application_state = WebSocketState.DISCONNECTED

    def sent_json(self) -> list[dict[str, Any]]:
        return [json.loads(text) for text in self.sent]

    def sent_of_type(self, msg_type: str) -> list[dict[str, Any]]:
        return [msg for msg in self.sent_json() if msg.get("type") == msg_type]


class ExplodingWebSocket(FakeWebSocket):
    """Fake whose sends fail with a configurable exception."""

    def __init__(self, exc: BaseException) -> None:
        super().__init__()
        self._exc = exc

    async def send_text(self, text: str) -> None:
        raise self._exc


async def wait_until(predicate: Callable[[], bool], timeout: float = 2.0) -> None:
    """Poll ``predicate`` on the running loop until it holds or time runs out."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not reached before timeout")
        await asyncio.sleep(0.001)


__all__ = ["ExplodingWebSocket", "FakeWebSocket", "wait_until"]

"""End-to-end tests for the websocket connection handler with fake sockets."""

from __future__ import annotations

import asyncio
import json
from typing import Any

from rendezvous.handlers.websocket.manager import handle_websocket_connection
from rendezvous.runtime import RuntimeDeps, build_runtime_deps
from tests.helpers.fakes import FakeWebSocket, wait_until


def _join(session_id: str, client_type: str) -> str:
    return json.dumps({"type": "join", "session_id": session_id, "client_type": client_type})


def _offer(sdp: str, session_id: str = "S") -> str:
    return json.dumps({"type": "offer", "sdp": sdp, "session_id": session_id})


def _serve(ws: FakeWebSocket, deps: RuntimeDeps) -> asyncio.Task:
    return asyncio.create_task(handle_websocket_connection(ws, deps))


async def _joined(ws: FakeWebSocket) -> None:
    await wait_until(lambda: bool(ws.sent_of_type("joined")))


class _ResettingWebSocket(FakeWebSocket):
    """Drains its scripted frames, then fails the way a dropped TCP link does."""

    def __init__(self, frames: list[str | None], exc: BaseException) -> None:
        super().__init__(frames)
        self._exc = exc

    async def receive(self) -> dict[str, Any]:
        if self._inbox.empty():
            raise self._exc
        return await super().receive()


class _UnevenSendWebSocket(FakeWebSocket):
    """Every other send stalls briefly, so concurrent senders would reorder."""

    async def send_text(self, text: str) -> None:
        if len(self.sent) % 2:
            await asyncio.sleep(0.002)
        await super().send_text(text)


def test_host_client_offer_and_cleanup_scenario() -> None:
    async def _run() -> None:
        deps = build_runtime_deps()
        host_ws = FakeWebSocket([_join("S", "host")])
        host_task = _serve(host_ws, deps)
        await _joined(host_ws)

        client_ws = FakeWebSocket([_join("S", "client")])
        client_task = _serve(client_ws, deps)
        await _joined(client_ws)
        await wait_until(lambda: bool(host_ws.sent_of_type("join")))

        host_ws.push(_offer("v=0..."))
        await wait_until(lambda: bool(client_ws.sent_of_type("offer")))
        assert client_ws.sent_of_type("offer") == [{"type": "offer", "sdp": "v=0...", "session_id": "S"}]

        client_ws.disconnect()
        await client_task
        assert "S" in deps.registry
        assert deps.registry.get("S").clients == set()

        host_ws.disconnect()
        await host_task
        assert "S" not in deps.registry
        assert deps.connections.get_connection_count() == 0

    asyncio.run(_run())


def test_exceeding_message_budget_closes_with_policy_violation() -> None:
    async def _run() -> None:
        deps = build_runtime_deps()  # 500 messages per 60s window
        client_ws = FakeWebSocket([_join("S", "client")])
        client_task = _serve(client_ws, deps)
        await _joined(client_ws)

        frames = [_join("S", "host")] + [_offer(str(i)) for i in range(499)] + [_offer("over-budget")]
        host_ws = FakeWebSocket(frames)
        await _serve(host_ws, deps)

        assert host_ws.close_calls == [(1008, "rate limit exceeded")]
        offers = client_ws.sent_of_type("offer")
        assert len(offers) == 499
        assert all(offer["sdp"] != "over-budget" for offer in offers)
        # The rest of the session is unaffected
        assert deps.registry.get("S").host is None
        assert len(deps.registry.get("S").clients) == 1

        client_ws.disconnect()
        await client_task
        assert len(deps.registry) == 0

    asyncio.run(_run())


def test_sending_exactly_the_budget_keeps_connection_open() -> None:
    async def _run() -> None:
        deps = build_runtime_deps()
        client_ws = FakeWebSocket([_join("S", "client")])
        client_task = _serve(client_ws, deps)
        await _joined(client_ws)

        host_ws = FakeWebSocket([_join("S", "host")] + [_offer(str(i)) for i in range(499)])
        host_task = _serve(host_ws, deps)
        await wait_until(lambda: len(client_ws.sent_of_type("offer")) == 499)

        assert host_ws.close_calls == []
        assert not host_task.done()
        assert deps.registry.get("S").has_host

        host_ws.disconnect()
        client_ws.disconnect()
        await asyncio.gather(host_task, client_task)

    asyncio.run(_run())


def test_malformed_frames_count_toward_budget() -> None:
    async def _run() -> FakeWebSocket:
        deps = build_runtime_deps(max_messages_per_window=3)
        ws = FakeWebSocket(["garbage"] * 4)
        await _serve(ws, deps)
        return ws

    ws = asyncio.run(_run())
    assert len(ws.sent_of_type("error")) == 3
    assert ws.close_calls == [(1008, "rate limit exceeded")]


def test_budget_is_restored_at_each_window() -> None:
    async def _run() -> None:
        deps = build_runtime_deps(max_messages_per_window=2, message_window_seconds=0.02)
        ws = FakeWebSocket(["garbage", "garbage"])
        task = _serve(ws, deps)
        await wait_until(lambda: len(ws.sent_of_type("error")) == 2)

        await asyncio.sleep(0.08)
        ws.push("garbage")
        ws.push("garbage")
        await wait_until(lambda: len(ws.sent_of_type("error")) == 4)
        assert ws.close_calls == []

        ws.disconnect()
        await task

    asyncio.run(_run())


def test_connection_rejected_when_at_capacity() -> None:
    async def _run() -> tuple[FakeWebSocket, FakeWebSocket]:
        deps = build_runtime_deps(max_connections=1)
        deps.connections.acquire_timeout = 0.01
        first = FakeWebSocket()
        first_task = _serve(first, deps)
        await wait_until(lambda: first.accepted)

        second = FakeWebSocket()
        await _serve(second, deps)

        first.disconnect()
        await first_task
        assert deps.connections.get_connection_count() == 0
        return first, second

    first, second = asyncio.run(_run())
    assert first.close_calls == []
    assert second.sent_json() == [{"type": "error", "message": "Server is at capacity"}]
    assert second.close_calls == [(1013, "")]


def test_transport_failure_cleans_up_like_close() -> None:
    async def _run() -> None:
        deps = build_runtime_deps()
        host_ws = FakeWebSocket([_join("S", "host")])
        host_task = _serve(host_ws, deps)
        await _joined(host_ws)

        client_ws = _ResettingWebSocket([_join("S", "client")], ConnectionResetError("link dropped"))
        await _serve(client_ws, deps)

        assert deps.registry.get("S").clients == set()
        assert client_ws.close_calls == []

        host_ws.disconnect()
        await host_task
        assert len(deps.registry) == 0

    asyncio.run(_run())


def test_unexpected_error_closes_with_internal_error_and_cleans_up() -> None:
    async def _run() -> _ResettingWebSocket:
        deps = build_runtime_deps()
        ws = _ResettingWebSocket([_join("S", "client")], ValueError("decoder bug"))
        await _serve(ws, deps)
        assert len(deps.registry) == 0
        assert deps.connections.get_connection_count() == 0
        return ws

    ws = asyncio.run(_run())
    assert ws.close_calls == [(1011, "internal error")]


def test_shutdown_closes_live_connections() -> None:
    async def _run() -> FakeWebSocket:
        deps = build_runtime_deps()
        ws = FakeWebSocket([_join("S", "host")])
        task = _serve(ws, deps)
        await _joined(ws)

        assert await deps.shutdown() == 1
        ws.disconnect()
        await task
        assert len(deps.registry) == 0
        return ws

    ws = asyncio.run(_run())
    assert ws.close_calls == [(1001, "server shutting down")]


def test_candidates_from_one_sender_arrive_in_send_order() -> None:
    async def _run() -> list[str]:
        deps = build_runtime_deps()
        client_ws = _UnevenSendWebSocket([_join("S", "client")])
        client_task = _serve(client_ws, deps)
        await _joined(client_ws)

        candidates = [
            json.dumps({
                "type": "ice-candidate",
                "candidate": str(i),
                "sdp_mid": "0",
                "sdp_mline_index": 0,
                "session_id": "S",
            })
            for i in range(50)
        ]
        host_ws = FakeWebSocket([_join("S", "host"), *candidates])
        host_task = _serve(host_ws, deps)
        await wait_until(lambda: len(client_ws.sent_of_type("ice-candidate")) == 50)

        host_ws.disconnect()
        client_ws.disconnect()
        await asyncio.gather(host_task, client_task)
        assert len(deps.registry) == 0
        return [msg["candidate"] for msg in client_ws.sent_of_type("ice-candidate")]

    assert asyncio.run(_run()) == [str(i) for i in range(50)]

"""Main FastAPI server for the rendezvous signaling relay.

This module wires the relay into an ASGI app:

- WebSocket endpoint for signaling (/ws, /signaling, and / for clients that connect to
  the bare host like the original browser client)
- Read-only status endpoints (/healthz, /health, /sessions)
- Graceful shutdown that closes every live socket with 1001

Server Lifecycle:
    1. On startup: build the session registry and connection tracker
    2. Accept WebSocket connections and relay signaling messages
    3. On shutdown: close remaining connections ("going away")

Example:
    Run directly with uvicorn:
        $ uvicorn rendezvous.server:app --host 0.0.0.0 --port 3000

    Or through the console script:
        $ rendezvous-relay --port 3000
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, WebSocket
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from .config import CORS_ALLOW_ORIGINS, validate_env
from .logging import configure_logging
from .runtime import RuntimeDeps, build_runtime_deps
from .handlers.websocket import handle_websocket_connection

logger = logging.getLogger(__name__)

configure_logging()
validate_env()


def _runtime_deps(app_: FastAPI) -> RuntimeDeps:
    deps = getattr(app_.state, "runtime_deps", None)
    if deps is None:
        deps = build_runtime_deps()
        app_.state.runtime_deps = deps
    return deps


@asynccontextmanager
async def lifespan(app_: FastAPI) -> AsyncIterator[None]:
    """Build the registry before serving; close live sockets on the way out."""
    deps = _runtime_deps(app_)
    logger.info(
        "relay ready: max_connections=%s rate=%s msgs/%ss",
        deps.connections.max_connections,
        deps.max_messages_per_window,
        int(deps.message_window_seconds),
    )
    try:
        yield
    finally:
        closed = await deps.shutdown()
        logger.info("shutdown: closed %s connection(s)", closed)


app = FastAPI(default_response_class=ORJSONResponse, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """Root endpoint for load balancer health checks."""
    return {"status": "ok", "service": "rendezvous"}


@app.get("/healthz")
@app.get("/health")
async def healthz(request: Request):
    """Liveness probe with aggregate counts."""
    return {
        "status": "ok",
        **_runtime_deps(request.app).health(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/sessions")
async def sessions(request: Request):
    """Snapshot of every registered session."""
    return _runtime_deps(request.app).registry.snapshot()


@app.get("/favicon.ico", status_code=204)
async def favicon():
    """Suppress favicon requests from browsers/probes."""
    return None


@app.websocket("/ws")
@app.websocket("/signaling")
@app.websocket("/")
async def websocket_endpoint(websocket: WebSocket):
    """Signaling socket shared by hosts and clients."""
    await handle_websocket_connection(websocket, _runtime_deps(websocket.app))

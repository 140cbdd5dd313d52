"""Rendezvous signaling relay.

A control-plane message bus that lets one host endpoint and any number of
client endpoints sharing a session token exchange connection-negotiation
messages (offer, answer, ice-candidate, and any future type). Media flows
peer to peer; the relay never sees it.

Architecture Overview:
    - server.py: FastAPI application entry point
    - config/: Configuration modules (environment-based)
    - handlers/: Connection handles, session registry, rate limiting
    - messages/: Message type handlers (join, forward)
    - runtime/: Startup dependency wiring
    - state/: Session and connection state records

Example:
    Start the relay with uvicorn:

    $ uvicorn rendezvous.server:app --host 0.0.0.0 --port 3000

Environment Variables:
    Optional:
        - HOST / PORT: Bind address (default 0.0.0.0:3000)
        - WS_MAX_MESSAGES_PER_WINDOW: Per-connection message budget (default 500)
        - WS_MESSAGE_WINDOW_SECONDS: Budget window (default 60)
        - MAX_CONCURRENT_CONNECTIONS: Admission ceiling (default 1000)
        - CORS_ALLOW_ORIGINS: Comma separated origins (default *)
        - APP_LOG_LEVEL: Logging level (default INFO)
"""

__version__ = "0.1.0"

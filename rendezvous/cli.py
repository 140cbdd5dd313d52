"""Console entry point: run the relay under uvicorn."""

from __future__ import annotations

import argparse

import uvicorn

from .config import HOST, PORT, ACCESS_LOG, APP_LOG_LEVEL


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rendezvous-relay",
        description="Signaling relay pairing one host with its clients per session token.",
    )
    parser.add_argument("--host", default=HOST, help=f"Bind address (default: {HOST})")
    parser.add_argument("--port", type=int, default=PORT, help=f"Bind port (default: {PORT})")
    parser.add_argument(
        "--log-level",
        default=APP_LOG_LEVEL.lower(),
        choices=["critical", "error", "warning", "info", "debug"],
        help="uvicorn log level",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    # log_config=None keeps uvicorn on the root handlers set by configure_logging()
    uvicorn.run(
        "rendezvous.server:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        log_config=None,
        access_log=ACCESS_LOG,
    )


if __name__ == "__main__":
    main()

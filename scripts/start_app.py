#!/usr/bin/env python3
"""Serve the board API under uvicorn."""

import sys

import logfire
import uvicorn

from board.config import Settings
from board.util.logging import setup_logging
from board.util.observability import configure_logfire


def main() -> int:
    settings = Settings()

    # Before importing the app so container construction errors are reported
    configure_logfire(settings)
    setup_logging(settings)

    logfire.info(
        "Starting board API",
        host=settings.host,
        port=settings.port,
        git_sha=settings.git_sha,
    )
    try:
        uvicorn.run(
            "board.interface.api.app:app",
            host=settings.host,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
            # Logging is already routed through Logfire
            log_config=None,
        )
    except Exception:
        logfire.exception("Board API failed to start")
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())

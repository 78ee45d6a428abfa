"""Logging configuration for the application."""

import logging

import logfire

from board.config import Settings


def _level_for(settings: Settings) -> int:
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "test":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Route stdlib logging into Logfire.

    Library loggers (uvicorn, alembic, asyncpg) then show up next to the
    spans of the request that produced them. Call after ``configure_logfire``.
    """
    level = _level_for(settings)
    logging.basicConfig(
        level=level,
        handlers=[logfire.LogfireLoggingHandler()],
        force=True,
    )

    # SQL echo is controlled by the engine and its instrumentation
    for noisy in ("sqlalchemy.engine", "sqlalchemy.pool", "asyncpg"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
    logging.getLogger("board").setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s level=%s",
        settings.environment,
        logging.getLevelName(level),
    )

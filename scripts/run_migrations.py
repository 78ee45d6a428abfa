#!/usr/bin/env python3
"""Apply database migrations, waiting for PostgreSQL to accept connections."""

import logging
import sys

import logfire
from alembic import command
from alembic.config import Config
from sqlalchemy.exc import InterfaceError, OperationalError
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_delay,
    wait_fixed,
)

from board.config import Settings
from board.util.logging import setup_logging
from board.util.observability import configure_logfire

logger = logging.getLogger("board.migrations")


@retry(
    retry=retry_if_exception_type((OperationalError, InterfaceError, OSError)),
    stop=stop_after_delay(60),
    wait=wait_fixed(2),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
def upgrade_to_head(alembic_cfg: Config) -> None:
    """Upgrade to the latest revision; retried while the database starts up."""
    command.upgrade(alembic_cfg, "head")


def main() -> int:
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    with logfire.span("migrations.upgrade", environment=settings.environment):
        try:
            upgrade_to_head(Config("alembic.ini"))
        except Exception:
            logfire.exception("Database migration failed")
            # Fail the container rather than serve against a stale schema
            raise

    logfire.info("Database migrations completed")
    return 0


if __name__ == "__main__":
    sys.exit(main())

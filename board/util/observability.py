"""Logfire setup for the board service.

Services open their own spans (``logfire.span("engagement_store.create_reply",
...)``) and emit structured events with ``logfire.info``. This module only
wires the exporter and the framework integrations.
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from board.config import Settings

# Probed every few seconds by the orchestrator; not worth a trace each
UNTRACED_PATHS = "/health.*"


def _should_send(settings: Settings) -> bool:
    """An explicit flag wins, otherwise send only when a token is configured."""
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process.

    Set OBSERVABILITY__LOGFIRE_TOKEN to export to Logfire cloud. Console
    output is disabled in the test environment.
    """
    send_to_logfire = _should_send(settings)

    console: Any = False
    if settings.environment != "test":
        console = logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        )

    logfire.configure(
        service_name=settings.observability.service_name,
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        console=console,
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every API request except health probes."""

    def _request_attributes(request: Any, attributes: dict[str, Any]) -> dict[str, Any]:
        result = {**attributes}
        # Identity arrives from the gateway; keep the actor on the span
        actor_id = request.headers.get("x-actor-id")
        if actor_id:
            result["actor_id"] = actor_id
        return result

    logfire.instrument_fastapi(
        app,
        excluded_urls=UNTRACED_PATHS,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL statements issued through ``engine``."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)

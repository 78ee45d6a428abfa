"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from board.config import Settings
from board.interface.api.identity import ACTOR_ID_HEADER, ACTOR_NAME_HEADER
from board.interface.api.routes import discussions, health, likes, replies
from board.interface.error import register_error_handlers
from board.util.di.container import create_container, setup_di
from board.util.observability import instrument_fastapi

ROUTERS = (health.router, discussions.router, replies.router, likes.router)


def create_app() -> FastAPI:
    """Build the API with the production container.

    Logfire is configured by the caller (scripts/start_app.py, or the test
    session fixture) before this runs. Tests swap the container afterwards
    with ``setup_di``.
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Board API",
        description="Threaded discussions with nested replies, reactions and engagement counters",
        version="0.1.0",
    )
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", ACTOR_ID_HEADER, ACTOR_NAME_HEADER],
        max_age=600,
    )

    setup_di(app_instance, create_container())
    register_error_handlers(app_instance)

    for router in ROUTERS:
        app_instance.include_router(router)

    return app_instance


# Imported by uvicorn as board.interface.api.app:app
app = create_app()

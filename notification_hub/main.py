"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from notification_hub.application.use_cases.notifications import NotificationDispatcher
from notification_hub.config import get_settings
from notification_hub.infrastructure.database import SessionLocal, engine, initialize_database
from notification_hub.interfaces.api.dependencies import build_dispatcher
from notification_hub.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure the root logger once for the running process."""

    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(
    dispatcher: NotificationDispatcher | None = None,
    *,
    bind: Engine | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``bind`` replaces the engine built from ``DATABASE_URL`` and ``dispatcher``
    replaces the SQL and transport wiring, which is how tests run the HTTP
    surface against in-memory collaborators.
    """

    settings = get_settings()
    target = bind or engine
    session_factory = (
        sessionmaker(autocommit=False, autoflush=False, bind=bind) if bind else SessionLocal
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level)
        initialize_database(target)
        app.state.session_factory = session_factory
        app.state.dispatcher = dispatcher or build_dispatcher(settings, session_factory)
        yield
        pending = app.state.dispatcher.pending_deliveries
        if pending:
            logger.info("Waiting for %s notification deliveries to finish", pending)
        await app.state.dispatcher.drain()
        target.dispose()

    app = FastAPI(title="Notification Hub", lifespan=lifespan)
    register_routes(app)
    return app


app = create_app()

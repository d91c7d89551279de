"""FastAPI application factory."""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request

from application.services import ServiceContainer
from core.logging.context import context
from core.logging.logger import get_logger
from .errors import register_error_handlers
from .routes import router

logger = get_logger(__name__, service="api")


def create_app(services: Optional[ServiceContainer] = None) -> FastAPI:
    """Build the app.

    Without ``services`` the container is built from settings at startup and
    closed at shutdown; a container passed in belongs to the caller.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = getattr(app.state, "services", None) is None
        if owned:
            app.state.services = ServiceContainer.from_settings()
        logger.info(lambda: "api-started")
        try:
            yield
        finally:
            if owned:
                await app.state.services.close()
                app.state.services = None
            logger.info(lambda: "api-stopped")

    app = FastAPI(title="LoL Tracker Stats", version="1.0.0", lifespan=lifespan)
    app.state.services = services

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        with context(endpoint=request.url.path):
            return await call_next(request)

    register_error_handlers(app)
    app.include_router(router)
    return app

# Application factory and FastAPI setup.

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request, Response

from .handler import REQUEST_ID_HEADER, HandlerOptions, HealthHandler
from .routers.control import build_control_router
from .routers.health import build_health_router
from .settings import Settings, get_settings
from .state import HealthState, get_health_state

logger = logging.getLogger(__name__)

SHUTDOWN_REASON = "Server is shutting down"


def create_app(
    state: HealthState | None = None, settings: Settings | None = None
) -> FastAPI:
    """Create and configure the FastAPI application instance."""
    settings = settings if settings is not None else get_settings()
    state = state if state is not None else get_health_state()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Serving health status at %s (format=%s)",
            settings.health_path,
            "json" if settings.use_json else "text",
        )
        yield
        state.set_unhealthy(SHUTDOWN_REASON)
        logger.info("Marked service DOWN for shutdown")

    app = FastAPI(title="Health Status", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.health_state = state

    @app.middleware("http")
    async def assign_request_id(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request.state.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        return await call_next(request)

    handler = HealthHandler(state, HandlerOptions(use_json=settings.use_json))
    app.include_router(build_health_router(handler, prefix=settings.health_path))
    if settings.enable_toggle:
        app.include_router(build_control_router(prefix=settings.health_path))
    return app


__all__ = ["SHUTDOWN_REASON", "create_app"]

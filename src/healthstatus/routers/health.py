# Health-check endpoints.

from __future__ import annotations

from fastapi import APIRouter, Request, Response

from ..handler import HealthHandler

_RESPONSES = {
    200: {"description": "Service is UP."},
    503: {"description": "Service is DOWN; the body carries the reason."},
}


def build_health_router(handler: HealthHandler, *, prefix: str = "/health") -> APIRouter:
    """Expose ``handler`` at ``prefix`` and an always-JSON view at ``prefix/json``."""
    router = APIRouter(prefix=prefix, tags=["health"])
    json_handler = handler.with_options(use_json=True)

    @router.get("", response_class=Response, responses=_RESPONSES)
    async def read_health(request: Request) -> Response:
        """Health status in the configured format, used for readiness probes."""
        return handler.respond(request)

    @router.get("/json", response_class=Response, responses=_RESPONSES)
    async def read_health_json(request: Request) -> Response:
        """Health status as JSON regardless of the configured format."""
        return json_handler.respond(request)

    return router


__all__ = ["build_health_router"]

"""Process-wide health status exposed over HTTP."""

from .handler import HandlerOptions, HealthHandler
from .render import ContentType, RenderedResponse, render_health
from .state import (
    HealthSnapshot,
    HealthState,
    HealthStatus,
    get_health_state,
    get_reason,
    get_status,
    set_health_state,
    set_healthy,
    set_reason,
    set_status,
    set_unhealthy,
    snapshot,
)

__all__ = [
    "ContentType",
    "HandlerOptions",
    "HealthHandler",
    "HealthSnapshot",
    "HealthState",
    "HealthStatus",
    "RenderedResponse",
    "get_health_state",
    "get_reason",
    "get_status",
    "render_health",
    "set_health_state",
    "set_healthy",
    "set_reason",
    "set_status",
    "set_unhealthy",
    "snapshot",
]

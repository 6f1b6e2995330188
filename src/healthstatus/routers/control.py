"""Manual health status control endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from ..state import HealthSnapshot, HealthState, HealthStatus

TOGGLE_DOWN_REASON = "Service manually marked as unhealthy"


class HealthStatusView(BaseModel):
    status: HealthStatus = Field(..., description="Current health status.")
    reason: str = Field("", description="Reason for a DOWN status, if any.")

    @classmethod
    def from_snapshot(cls, snapshot: HealthSnapshot) -> "HealthStatusView":
        return cls(status=snapshot.status, reason=snapshot.reason)


class HealthStatusUpdate(BaseModel):
    status: HealthStatus = Field(..., description="Status to apply.")
    reason: str = Field(
        "", description="Reason recorded with a DOWN status; ignored for UP."
    )


def get_app_health_state(request: Request) -> HealthState:
    return request.app.state.health_state


def build_control_router(*, prefix: str = "/health") -> APIRouter:
    router = APIRouter(prefix=prefix, tags=["health"])

    @router.post("/toggle", response_model=HealthStatusView)
    def toggle_health(
        state: HealthState = Depends(get_app_health_state),
    ) -> HealthStatusView:
        """Flip the status between UP and DOWN."""
        if state.get_status() is HealthStatus.UP:
            state.set_unhealthy(TOGGLE_DOWN_REASON)
        else:
            state.set_healthy()
        return HealthStatusView.from_snapshot(state.snapshot())

    @router.put("/status", response_model=HealthStatusView)
    def update_health(
        update: HealthStatusUpdate,
        state: HealthState = Depends(get_app_health_state),
    ) -> HealthStatusView:
        """Apply an explicit status and reason."""
        if update.status is HealthStatus.UP:
            state.set_healthy()
        else:
            state.set_unhealthy(update.reason)
        return HealthStatusView.from_snapshot(state.snapshot())

    return router


__all__ = [
    "HealthStatusUpdate",
    "HealthStatusView",
    "TOGGLE_DOWN_REASON",
    "build_control_router",
    "get_app_health_state",
]

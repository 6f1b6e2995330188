"""HTTP handler serving the current health status."""

from __future__ import annotations

from dataclasses import dataclass, replace

from fastapi import Request, Response
from starlette.types import Receive, Scope, Send

from .render import RenderedResponse, render_health
from .state import HealthState, get_health_state

REQUEST_ID_HEADER = "X-Request-ID"
REQUEST_ID_STATE_KEY = "request_id"


@dataclass(frozen=True, slots=True)
class HandlerOptions:
    """Rendering options fixed at handler construction."""

    use_json: bool = False


def request_id_from(request: Request) -> str | None:
    """Return the correlation identifier stored on the request, if any."""
    value = getattr(request.state, REQUEST_ID_STATE_KEY, None)
    if isinstance(value, str) and value:
        return value
    return None


class HealthHandler:
    """Read-only view of a :class:`HealthState` rendered as an HTTP response.

    Instances are ASGI applications, so they can be mounted directly by a
    Starlette or FastAPI router. :meth:`respond` is the request-scoped adapter
    used by route functions; it forwards ``request.state.request_id`` to the
    ``X-Request-ID`` response header when present.
    """

    def __init__(
        self,
        state: HealthState | None = None,
        options: HandlerOptions | None = None,
    ) -> None:
        self.state = state if state is not None else get_health_state()
        self.options = options if options is not None else HandlerOptions()

    def with_options(self, **changes: bool) -> HealthHandler:
        """Return a new handler over the same state with updated options."""
        return HealthHandler(self.state, replace(self.options, **changes))

    def render(self) -> RenderedResponse:
        return render_health(self.state.snapshot(), use_json=self.options.use_json)

    def respond(self, request: Request) -> Response:
        rendered = self.render()
        headers: dict[str, str] = {}
        request_id = request_id_from(request)
        if request_id is not None:
            headers[REQUEST_ID_HEADER] = request_id

        return Response(
            content=rendered.body,
            status_code=rendered.status_code,
            media_type=rendered.content_type.value,
            headers=headers,
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive)
        response = self.respond(request)
        await response(scope, receive, send)


__all__ = [
    "HandlerOptions",
    "HealthHandler",
    "REQUEST_ID_HEADER",
    "REQUEST_ID_STATE_KEY",
    "request_id_from",
]

"""Render a health snapshot as an HTTP status code, content type and body."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .state import HealthSnapshot, HealthStatus

logger = logging.getLogger(__name__)

_STATUS_CODES = {
    HealthStatus.UP: 200,
    HealthStatus.DOWN: 503,
}


class ContentType(str, Enum):
    TEXT = "text/plain"
    JSON = "application/json"


@dataclass(frozen=True, slots=True)
class RenderedResponse:
    """Immutable response derived from one snapshot at read time."""

    status_code: int
    content_type: ContentType
    body: bytes


def status_code_for(status: HealthStatus) -> int:
    return _STATUS_CODES[status]


def health_payload(snapshot: HealthSnapshot) -> dict[str, Any]:
    """JSON payload; ``reason`` is omitted when empty."""
    payload: dict[str, Any] = {"status": snapshot.status.value}
    if snapshot.reason:
        payload["reason"] = snapshot.reason
    return payload


def health_text(snapshot: HealthSnapshot) -> str:
    """Plain-text form: ``STATUS`` or ``STATUS: reason``."""
    if snapshot.reason:
        return f"{snapshot.status.value}: {snapshot.reason}"
    return snapshot.status.value


def render_health(snapshot: HealthSnapshot, *, use_json: bool = False) -> RenderedResponse:
    status_code = status_code_for(snapshot.status)
    content_type = ContentType.JSON if use_json else ContentType.TEXT

    try:
        if use_json:
            text = json.dumps(
                health_payload(snapshot), ensure_ascii=False, separators=(",", ":")
            )
        else:
            text = health_text(snapshot)
        body = text.encode("utf-8")
    except ValueError as exc:
        logger.error(
            "Failed to serialize health response; status=%s format=%s: %s",
            snapshot.status.value,
            content_type.value,
            exc,
        )
        body = b""

    return RenderedResponse(
        status_code=status_code, content_type=content_type, body=body
    )


__all__ = [
    "ContentType",
    "RenderedResponse",
    "health_payload",
    "health_text",
    "render_health",
    "status_code_for",
]

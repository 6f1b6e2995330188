"""Process-wide health status shared by request handlers and status updaters."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class HealthStatus(str, Enum):
    """Binary classification of whether the process should receive traffic."""

    UP = "UP"
    DOWN = "DOWN"

    @classmethod
    def parse(cls, value: HealthStatus | str) -> HealthStatus:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise ValueError(f"Unknown health status: {value!r}")


@dataclass(frozen=True, slots=True)
class HealthSnapshot:
    """Status and reason observed together under a single lock acquisition."""

    status: HealthStatus
    reason: str

    @property
    def is_healthy(self) -> bool:
        return self.status is HealthStatus.UP


class HealthState:
    """Lock-protected holder for the current health status and reason.

    Both fields are guarded by one lock so that a snapshot never mixes the
    status of one write with the reason of another. ``set_status`` and
    ``set_reason`` are independent: changing the status keeps whatever reason
    was set last, and a reason set while UP is retained as-is.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._status = HealthStatus.UP
        self._reason = ""

    def set_healthy(self) -> None:
        self._write(HealthStatus.UP, "")

    def set_unhealthy(self, reason: str) -> None:
        self._write(HealthStatus.DOWN, reason)

    def set_status(self, status: HealthStatus | str) -> None:
        self._write(HealthStatus.parse(status), None)

    def set_reason(self, reason: str) -> None:
        with self._lock:
            self._reason = reason
        logger.debug("Health reason updated; reason=%r", reason)

    def get_status(self) -> HealthStatus:
        with self._lock:
            return self._status

    def get_reason(self) -> str:
        with self._lock:
            return self._reason

    def snapshot(self) -> HealthSnapshot:
        with self._lock:
            return HealthSnapshot(status=self._status, reason=self._reason)

    def _write(self, status: HealthStatus, reason: str | None) -> None:
        with self._lock:
            previous = self._status
            self._status = status
            if reason is not None:
                self._reason = reason
            current_reason = self._reason

        if previous is status:
            logger.debug(
                "Health status unchanged; status=%s reason=%r",
                status.value,
                current_reason,
            )
        elif status is HealthStatus.DOWN:
            logger.warning("Health status changed to DOWN; reason=%r", current_reason)
        else:
            logger.info("Health status recovered to UP")


_DEFAULT_STATE: HealthState | None = None
_DEFAULT_STATE_LOCK = threading.Lock()


def get_health_state() -> HealthState:
    """Return the process-wide state, constructing it on first access."""
    global _DEFAULT_STATE

    with _DEFAULT_STATE_LOCK:
        if _DEFAULT_STATE is None:
            _DEFAULT_STATE = HealthState()
        return _DEFAULT_STATE


def set_health_state(state: HealthState | None) -> None:
    """Replace the process-wide state; ``None`` resets it to a fresh UP state."""
    global _DEFAULT_STATE

    with _DEFAULT_STATE_LOCK:
        _DEFAULT_STATE = state


def set_healthy() -> None:
    get_health_state().set_healthy()


def set_unhealthy(reason: str) -> None:
    get_health_state().set_unhealthy(reason)


def set_status(status: HealthStatus | str) -> None:
    get_health_state().set_status(status)


def set_reason(reason: str) -> None:
    get_health_state().set_reason(reason)


def get_status() -> HealthStatus:
    return get_health_state().get_status()


def get_reason() -> str:
    return get_health_state().get_reason()


def snapshot() -> HealthSnapshot:
    return get_health_state().snapshot()


__all__ = [
    "HealthSnapshot",
    "HealthState",
    "HealthStatus",
    "get_health_state",
    "get_reason",
    "get_status",
    "set_health_state",
    "set_healthy",
    "set_reason",
    "set_status",
    "set_unhealthy",
    "snapshot",
]

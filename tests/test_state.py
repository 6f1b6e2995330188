"""Tests for the health status store."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

import healthstatus
from healthstatus.state import (
    HealthSnapshot,
    HealthState,
    HealthStatus,
    get_health_state,
    set_health_state,
)


class TestHealthState:
    def test_starts_up_without_reason(self, state: HealthState) -> None:
        assert state.get_status() is HealthStatus.UP
        assert state.get_reason() == ""
        assert state.snapshot() == HealthSnapshot(HealthStatus.UP, "")

    def test_set_unhealthy_then_healthy_clears_reason(self, state: HealthState) -> None:
        state.set_unhealthy("Test reason")
        assert state.get_status() is HealthStatus.DOWN
        assert state.get_reason() == "Test reason"

        state.set_healthy()
        assert state.get_status() is HealthStatus.UP
        assert state.get_reason() == ""

    @pytest.mark.parametrize(
        "calls, expected",
        [
            (["up"], (HealthStatus.UP, "")),
            (["down:a"], (HealthStatus.DOWN, "a")),
            (["down:a", "up"], (HealthStatus.UP, "")),
            (["up", "down:b"], (HealthStatus.DOWN, "b")),
            (["down:a", "down:b", "down:"], (HealthStatus.DOWN, "")),
        ],
    )
    def test_last_write_wins(
        self, state: HealthState, calls: list[str], expected: tuple[HealthStatus, str]
    ) -> None:
        for call in calls:
            if call == "up":
                state.set_healthy()
            else:
                state.set_unhealthy(call.split(":", 1)[1])

        assert (state.get_status(), state.get_reason()) == expected

    def test_set_healthy_is_idempotent(self, state: HealthState) -> None:
        state.set_unhealthy("boom")
        state.set_healthy()
        once = state.snapshot()
        state.set_healthy()
        assert state.snapshot() == once

    def test_set_status_keeps_previous_reason(self, state: HealthState) -> None:
        state.set_status(HealthStatus.DOWN)
        assert state.get_reason() == ""

        state.set_unhealthy("old reason")
        state.set_status(HealthStatus.UP)
        state.set_status(HealthStatus.DOWN)
        assert state.get_reason() == "old reason"

    def test_reason_set_while_up_is_retained(self, state: HealthState) -> None:
        state.set_reason("dormant")
        assert state.snapshot() == HealthSnapshot(HealthStatus.UP, "dormant")

        state.set_unhealthy("real cause")
        assert state.get_reason() == "real cause"

    def test_set_status_and_reason_separately(self, state: HealthState) -> None:
        state.set_status(HealthStatus.DOWN)
        state.set_reason("Manual reason")
        assert state.snapshot() == HealthSnapshot(HealthStatus.DOWN, "Manual reason")

    @pytest.mark.parametrize("raw", ["DOWN", "down", " Down "])
    def test_set_status_accepts_strings(self, state: HealthState, raw: str) -> None:
        state.set_status(raw)
        assert state.get_status() is HealthStatus.DOWN

    @pytest.mark.parametrize("raw", ["", "degraded", 503])
    def test_set_status_rejects_unknown_values(self, state: HealthState, raw: object) -> None:
        with pytest.raises(ValueError, match="Unknown health status"):
            state.set_status(raw)  # type: ignore[arg-type]
        assert state.get_status() is HealthStatus.UP

    def test_snapshot_is_healthy(self, state: HealthState) -> None:
        assert state.snapshot().is_healthy
        state.set_unhealthy("")
        assert not state.snapshot().is_healthy


class TestTransitionLogging:
    def test_going_down_logs_warning(
        self, state: HealthState, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="healthstatus.state"):
            state.set_unhealthy("db unreachable")

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "db unreachable" in warnings[0].getMessage()

    def test_recovery_logs_info_and_repeat_is_quiet(
        self, state: HealthState, caplog: pytest.LogCaptureFixture
    ) -> None:
        state.set_unhealthy("x")
        with caplog.at_level(logging.INFO, logger="healthstatus.state"):
            caplog.clear()
            state.set_healthy()
            state.set_healthy()

        assert [r.getMessage() for r in caplog.records] == [
            "Health status recovered to UP"
        ]


class TestProcessWideState:
    def test_module_functions_share_one_state(self) -> None:
        healthstatus.set_unhealthy("Database connection failed")
        assert healthstatus.get_status() is HealthStatus.DOWN
        assert healthstatus.get_reason() == "Database connection failed"
        assert get_health_state().get_reason() == "Database connection failed"

        healthstatus.set_healthy()
        assert healthstatus.snapshot() == HealthSnapshot(HealthStatus.UP, "")

    def test_set_status_without_reason_keeps_empty_reason(self) -> None:
        healthstatus.set_status(HealthStatus.DOWN)
        assert healthstatus.get_status() is HealthStatus.DOWN
        assert healthstatus.get_reason() == ""

    def test_set_reason_updates_default_state(self) -> None:
        healthstatus.set_status("UP")
        healthstatus.set_reason("New reason")
        assert healthstatus.get_reason() == "New reason"

    def test_set_health_state_injects_instance(self, state: HealthState) -> None:
        set_health_state(state)
        healthstatus.set_unhealthy("injected")
        assert state.get_reason() == "injected"

    def test_reset_returns_fresh_up_state(self) -> None:
        healthstatus.set_unhealthy("x")
        set_health_state(None)
        assert healthstatus.snapshot() == HealthSnapshot(HealthStatus.UP, "")


class TestConcurrentAccess:
    def test_readers_never_observe_torn_pairs(self, state: HealthState) -> None:
        writers = 8
        readers = 8
        iterations = 500
        start = threading.Barrier(writers + readers)

        def write(writer_id: int) -> None:
            start.wait()
            for i in range(iterations):
                if i % 2 == 0:
                    state.set_healthy()
                else:
                    state.set_unhealthy(f"writer-{writer_id}-{i}")

        def read() -> list[HealthSnapshot]:
            start.wait()
            seen = []
            for _ in range(iterations):
                seen.append(state.snapshot())
                state.get_status()
                state.get_reason()
            return seen

        with ThreadPoolExecutor(max_workers=writers + readers) as pool:
            write_futures = [pool.submit(write, n) for n in range(writers)]
            read_futures = [pool.submit(read) for _ in range(readers)]
            for future in write_futures:
                future.result(timeout=30)
            observed = [snap for f in read_futures for snap in f.result(timeout=30)]

        assert len(observed) == readers * iterations
        for snap in observed:
            if snap.status is HealthStatus.UP:
                assert snap.reason == ""
            else:
                assert snap.reason.startswith("writer-")

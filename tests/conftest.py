from __future__ import annotations

from collections.abc import Iterator

import pytest

from healthstatus.settings import set_settings
from healthstatus.state import HealthState, set_health_state


@pytest.fixture(autouse=True)
def _reset_process_state() -> Iterator[None]:
    set_health_state(None)
    set_settings(None)
    yield
    set_health_state(None)
    set_settings(None)


@pytest.fixture()
def state() -> HealthState:
    return HealthState()

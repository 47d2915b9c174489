from __future__ import annotations

import pytest

from smarthome_sim.config import Settings
from smarthome_sim.events import get_event_repository


@pytest.fixture(autouse=True)
def clear_event_history():
    get_event_repository().clear()
    yield
    get_event_repository().clear()


@pytest.fixture
def config() -> Settings:
    return Settings(thermostat_mode="eco", tick_step=1, seed_devices=True)

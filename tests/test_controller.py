"""Tests for the home controller."""

from __future__ import annotations

from dataclasses import replace

import pytest

from smarthome_sim.controller import HomeController
from smarthome_sim.devices import Light, Thermostat
from smarthome_sim.events import InMemoryEventRepository
from smarthome_sim.strategies import ComfortMode, EcoMode


def _controller(config, **kwargs) -> tuple[HomeController, list[str]]:
    lines: list[str] = []
    controller = HomeController(config=config, print_fn=lines.append, **kwargs)
    return controller, lines


def test_seeds_default_devices(config):
    controller, _ = _controller(config)

    assert [row[1] for row in controller.status()] == [
        "LivingRoom Light",
        "Bedroom Fan",
        "Hallway Thermostat",
    ]
    thermostat = controller.repository.find_by_name("Hallway Thermostat")
    assert isinstance(thermostat.strategy, EcoMode)
    assert controller.sensor.subscribers == [thermostat]


def test_seed_can_be_disabled(config):
    controller, _ = _controller(replace(config, seed_devices=False))

    assert controller.status() == []


def test_explicit_devices_override_seed(config):
    controller, _ = _controller(config, devices=[Light("Porch")])

    assert controller.status() == [("Light", "Porch", "OFF")]


def test_toggle_device_logs_state_change(config):
    controller, lines = _controller(config)

    device = controller.toggle_device("Bedroom Fan")

    assert device.is_on is True
    assert lines == ['[Logger] Fan "Bedroom Fan" is now ON']
    assert controller.toggle_device("Garage Door") is None


def test_add_device_uses_configured_thermostat_mode(config):
    controller, _ = _controller(replace(config, thermostat_mode="comfort"))

    device = controller.add_device("Thermostat", "Nursery")

    assert isinstance(device, Thermostat)
    assert isinstance(device.strategy, ComfortMode)
    assert device in controller.sensor.subscribers
    assert controller.add_device("Toaster", "Kitchen") is None


def test_remove_device_unsubscribes_sensor(config):
    controller, _ = _controller(config)

    assert controller.remove_device("Hallway Thermostat") is True
    assert controller.sensor.subscribers == []
    assert controller.remove_device("Hallway Thermostat") is False


def test_set_thermostat_mode(config):
    controller, _ = _controller(config)

    assert controller.set_thermostat_mode("Hallway Thermostat", "Comfort") is True
    assert controller.set_thermostat_mode("Bedroom Fan", "eco") is False
    notified = controller.trigger_sensor()

    assert [device.target_temperature for device in notified] == [72]
    with pytest.raises(ValueError, match="Unknown thermostat mode"):
        controller.set_thermostat_mode("Hallway Thermostat", "turbo")


def test_advance_runs_scheduler_every_tick(config):
    controller, lines = _controller(config)
    assert controller.schedule("LivingRoom Light", True, "one-time", 3) is True

    assert controller.advance(2) == 2
    assert lines == []
    assert controller.advance(5) == 7

    assert lines == ['[Logger] Light "LivingRoom Light" is now ON']
    assert controller.scheduler.tasks[0].completed is True


def test_advance_uses_configured_step(config):
    controller, _ = _controller(replace(config, tick_step=4))

    assert controller.advance() == 4
    with pytest.raises(ValueError):
        controller.advance(0)


def test_delayed_schedule_is_relative_to_current_tick(config):
    controller, _ = _controller(config)
    controller.advance(5)

    controller.schedule("Bedroom Fan", True, "delayed", 3)

    assert controller.scheduler.tasks[0].policy.threshold_tick == 8
    controller.advance(2)
    assert controller.repository.find_by_name("Bedroom Fan").is_on is False
    controller.advance(1)
    assert controller.repository.find_by_name("Bedroom Fan").is_on is True


def test_unplugged_device_loses_scheduled_action(config):
    controller, _ = _controller(config)
    controller.schedule("Bedroom Fan", True, "one-time", 2)
    controller.remove_device("Bedroom Fan")
    controller.advance(2)
    controller.add_device("Fan", "Bedroom Fan")
    controller.advance(2)

    assert controller.repository.find_by_name("Bedroom Fan").is_on is False
    assert controller.scheduler.tasks[0].completed is True


def test_reset_clears_tasks_and_rewinds_time(config):
    controller, _ = _controller(config)
    controller.schedule("Bedroom Fan", True, "periodic", 2)
    controller.advance(3)

    controller.reset()

    assert controller.tick == 0
    assert controller.scheduler.tasks == []


def test_events_are_recorded_with_ticks(config):
    events = InMemoryEventRepository()
    controller, _ = _controller(config, events=events)
    controller.advance(2)
    controller.toggle_device("LivingRoom Light")

    latest = events.list_recent(1)[0]

    assert latest.action == "device_state_changed"
    assert latest.subject_id == "LivingRoom Light"
    assert latest.tick == 2
    assert latest.metadata == {"state": "ON"}

"""Public package interface for the smart-home simulator."""

from __future__ import annotations

from .cli import handle_command
from .cli import (
    main as _cli_main,
)
from .cli import (
    run as run_cli,
)
from .config import Settings, settings
from .controller import HomeController
from .devices import (
    DEFAULT_DEVICES,
    Fan,
    InMemoryDeviceRepository,
    Light,
    SmartDevice,
    Thermostat,
    create_device,
)
from .events import DeviceLogger, list_recent_events
from .policies import (
    DelayedPolicy,
    OneTimePolicy,
    PeriodicPolicy,
    TriggerPolicy,
    build_policy,
)
from .scheduler import ScheduledTask, Scheduler
from .sensor import Sensor
from .strategies import ComfortMode, EcoMode

__all__ = [
    "Settings",
    "settings",
    "HomeController",
    "SmartDevice",
    "Light",
    "Fan",
    "Thermostat",
    "DEFAULT_DEVICES",
    "InMemoryDeviceRepository",
    "create_device",
    "DeviceLogger",
    "list_recent_events",
    "TriggerPolicy",
    "OneTimePolicy",
    "PeriodicPolicy",
    "DelayedPolicy",
    "build_policy",
    "ScheduledTask",
    "Scheduler",
    "Sensor",
    "EcoMode",
    "ComfortMode",
    "handle_command",
    "run_cli",
    "main",
]


def main(argv: None | list[str] = None) -> None:
    """Entrypoint for the command-line interface."""
    _cli_main(argv)

"""Simulated smart devices with repository abstractions."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from .strategies import TemperatureStrategy
from .utils import format_state, logger


class DeviceObserver(Protocol):
    def update(self, device: SmartDevice) -> None:
        ...


class SmartDevice:
    """Base class for every simulated device: a name and an on/off state."""

    device_type = "Device"

    def __init__(self, name: str) -> None:
        self.name = name
        self.is_on = False
        self._observers: list[DeviceObserver] = []

    def toggle(self) -> None:
        self._change_state(not self.is_on)

    def set_state(self, on: bool) -> None:
        """Switch the device on or off; unchanged states notify nobody."""
        if self.is_on == on:
            logger.bind(device=self.name, state=format_state(on)).debug(
                "State unchanged; skipping notification"
            )
            return
        self._change_state(on)

    def attach(self, observer: DeviceObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def notify(self) -> None:
        for observer in self._observers:
            observer.update(self)

    def _change_state(self, on: bool) -> None:
        self.is_on = on
        self.notify()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, is_on={self.is_on})"


class Light(SmartDevice):
    device_type = "Light"


class Fan(SmartDevice):
    device_type = "Fan"


class Thermostat(SmartDevice):
    """Thermostat that applies its temperature strategy when switched on."""

    device_type = "Thermostat"

    def __init__(
        self, name: str, strategy: TemperatureStrategy | None = None
    ) -> None:
        super().__init__(name)
        self.strategy = strategy
        self.target_temperature: int | None = None

    def set_strategy(self, strategy: TemperatureStrategy | None) -> None:
        self.strategy = strategy

    def apply_temperature_strategy(self) -> int | None:
        if self.strategy is None:
            return None
        return self.strategy.apply(self)

    def _change_state(self, on: bool) -> None:
        super()._change_state(on)
        if self.is_on:
            self.apply_temperature_strategy()


DEVICE_TYPES: dict[str, type[SmartDevice]] = {
    cls.device_type.lower(): cls for cls in (Light, Fan, Thermostat)
}


def create_device(type_name: str, name: str) -> SmartDevice | None:
    """Build a device from its type name, or return None for unknown types."""
    cls = DEVICE_TYPES.get(type_name.strip().lower())
    if cls is None:
        logger.bind(type=type_name).debug("Unknown device type requested")
        return None
    return cls(name)


class DeviceRepository(Protocol):
    """Port defining the device lookups used by the controller and scheduler."""

    def list_all(self) -> list[SmartDevice]:
        ...

    def find_by_name(self, name: str) -> SmartDevice | None:
        ...

    def register(self, device: SmartDevice) -> SmartDevice:
        ...

    def remove(self, name: str) -> bool:
        ...


class InMemoryDeviceRepository(DeviceRepository):
    """Adapter that keeps devices in insertion order, keyed by name."""

    def __init__(self, devices: Iterable[SmartDevice] = ()) -> None:
        self._devices: dict[str, SmartDevice] = {}
        for device in devices:
            self.register(device)

    def list_all(self) -> list[SmartDevice]:
        return list(self._devices.values())

    def find_by_name(self, name: str) -> SmartDevice | None:
        return self._devices.get(name)

    def register(self, device: SmartDevice) -> SmartDevice:
        if device.name in self._devices:
            logger.bind(device=device.name).info("Replacing registered device")
        self._devices[device.name] = device
        return device

    def remove(self, name: str) -> bool:
        return self._devices.pop(name, None) is not None

    def __len__(self) -> int:
        return len(self._devices)


DEFAULT_DEVICES: list[tuple[str, str]] = [
    ("Light", "LivingRoom Light"),
    ("Fan", "Bedroom Fan"),
    ("Thermostat", "Hallway Thermostat"),
]


def default_devices() -> list[SmartDevice]:
    """Return fresh instances of the seed inventory."""
    devices = []
    for type_name, name in DEFAULT_DEVICES:
        device = create_device(type_name, name)
        if device is not None:
            devices.append(device)
    return devices


__all__ = [
    "DEFAULT_DEVICES",
    "DEVICE_TYPES",
    "DeviceObserver",
    "DeviceRepository",
    "Fan",
    "InMemoryDeviceRepository",
    "Light",
    "SmartDevice",
    "Thermostat",
    "create_device",
    "default_devices",
]

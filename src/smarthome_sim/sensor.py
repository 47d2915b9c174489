"""Environmental sensor that wakes up subscribed thermostats."""

from __future__ import annotations

from .devices import SmartDevice, Thermostat
from .utils import logger


class Sensor:
    def __init__(self) -> None:
        self._subscribers: list[SmartDevice] = []

    def subscribe(self, device: SmartDevice) -> None:
        if device not in self._subscribers:
            self._subscribers.append(device)

    def unsubscribe(self, device: SmartDevice) -> None:
        if device in self._subscribers:
            self._subscribers.remove(device)

    @property
    def subscribers(self) -> list[SmartDevice]:
        return list(self._subscribers)

    def trigger(self) -> list[Thermostat]:
        """Signal an environmental change; return the thermostats notified."""
        logger.bind(subscribers=len(self._subscribers)).info(
            "Environmental change triggered"
        )
        notified: list[Thermostat] = []
        for device in self._subscribers:
            if not isinstance(device, Thermostat):
                continue
            device.apply_temperature_strategy()
            notified.append(device)
        return notified


__all__ = ["Sensor"]

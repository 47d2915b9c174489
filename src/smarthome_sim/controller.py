"""Home controller tying devices, sensor, scheduler and simulated time together."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from .config import Settings, settings
from .devices import (
    InMemoryDeviceRepository,
    SmartDevice,
    Thermostat,
    create_device,
    default_devices,
)
from .events import (
    DeviceLogger,
    EventRepository,
    get_event_repository,
    record_event,
)
from .scheduler import Scheduler
from .sensor import Sensor
from .strategies import strategy_for
from .utils import format_state, logger


class HomeController:
    """Owns the simulated home and its tick counter."""

    def __init__(
        self,
        devices: Iterable[SmartDevice] | None = None,
        *,
        config: Settings | None = None,
        print_fn: Callable[[str], None] = print,
        events: EventRepository | None = None,
    ) -> None:
        self.settings = config or settings
        self.tick = 0
        self.repository = InMemoryDeviceRepository()
        self.scheduler = Scheduler(self.repository)
        self.sensor = Sensor()
        self.events = events if events is not None else get_event_repository()
        self.device_logger = DeviceLogger(
            print_fn=print_fn, tick_fn=lambda: self.tick, repository=self.events
        )

        if devices is None:
            devices = default_devices() if self.settings.seed_devices else []
        for device in devices:
            self._install(device)

    def _install(self, device: SmartDevice) -> SmartDevice:
        if isinstance(device, Thermostat):
            if device.strategy is None:
                device.set_strategy(strategy_for(self.settings.thermostat_mode))
            self.sensor.subscribe(device)
        device.attach(self.device_logger)
        return self.repository.register(device)

    # ========== DEVICES ==========

    def add_device(self, type_name: str, name: str) -> SmartDevice | None:
        device = create_device(type_name, name)
        if device is None:
            logger.bind(type=type_name, device=name).warning(
                "Invalid device type requested"
            )
            return None
        previous = self.repository.find_by_name(name)
        if previous is not None:
            self.sensor.unsubscribe(previous)
        self._install(device)
        self._record("device_added", device, type=device.device_type)
        return device

    def remove_device(self, name: str) -> bool:
        device = self.repository.find_by_name(name)
        if device is None:
            return False
        self.sensor.unsubscribe(device)
        self.repository.remove(name)
        self._record("device_removed", device)
        return True

    def toggle_device(self, name: str) -> SmartDevice | None:
        device = self.repository.find_by_name(name)
        if device is None:
            logger.bind(device=name).debug("Toggle requested for unknown device")
            return None
        device.toggle()
        return device

    def set_thermostat_mode(self, name: str, mode: str) -> bool:
        device = self.repository.find_by_name(name)
        if not isinstance(device, Thermostat):
            return False
        device.set_strategy(strategy_for(mode))
        self._record("thermostat_mode_changed", device, mode=mode.lower())
        return True

    def trigger_sensor(self) -> list[Thermostat]:
        notified = self.sensor.trigger()
        record_event(
            action="sensor_triggered",
            subject_type="sensor",
            tick=self.tick,
            metadata={"notified": [device.name for device in notified]},
            repository=self.events,
        )
        return notified

    def status(self) -> list[tuple[str, str, str]]:
        rows = []
        for device in self.repository.list_all():
            state = format_state(device.is_on)
            if isinstance(device, Thermostat) and device.target_temperature is not None:
                state = f"{state} ({device.target_temperature}°F)"
            rows.append((device.device_type, device.name, state))
        return rows

    # ========== SCHEDULING ==========

    def schedule(self, name: str, turn_on: bool, kind: str, value: int) -> bool:
        """Schedule a device action; ``delayed`` values are offsets from now."""
        if kind == "delayed" and isinstance(value, int):
            value = self.tick + value
        return self.scheduler.request(name, turn_on, kind, value)

    def advance(self, steps: int | None = None) -> int:
        """Move simulated time forward, evaluating the scheduler on every tick."""
        count = self.settings.tick_step if steps is None else steps
        if count <= 0:
            raise ValueError(f"Tick steps must be positive, got {count}.")
        for _ in range(count):
            self.tick += 1
            self.scheduler.advance(self.tick)
        logger.bind(tick=self.tick).debug("Simulation advanced")
        return self.tick

    def reset(self) -> None:
        self.scheduler.reset()
        self.tick = 0
        record_event(
            action="scheduler_reset", subject_type="scheduler", repository=self.events
        )

    def _record(self, action: str, device: SmartDevice, **metadata: object) -> None:
        record_event(
            action=action,
            subject_type=device.device_type.lower(),
            subject_id=device.name,
            tick=self.tick,
            metadata=dict(metadata),
            repository=self.events,
        )


__all__ = ["HomeController"]

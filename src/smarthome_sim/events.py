"""Device event history and the observer that feeds it."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Protocol

from .utils import format_state, logger

if TYPE_CHECKING:
    from .devices import SmartDevice


@dataclass(frozen=True)
class Event:
    """Represents a recorded simulation event."""

    id: int | None
    tick: int
    action: str
    subject_type: str
    subject_id: str | None
    metadata: dict[str, Any]


class EventRepository(Protocol):
    """Storage abstraction for simulation events."""

    def record(self, event: Event) -> Event:
        ...

    def list_recent(self, limit: int = 100) -> list[Event]:
        ...

    def clear(self) -> None:
        ...


class InMemoryEventRepository(EventRepository):
    """Keeps every event of the current process in memory."""

    def __init__(self) -> None:
        self._events: list[Event] = []
        self._counter = 0

    def record(self, event: Event) -> Event:
        self._counter += 1
        stored = replace(event, id=self._counter)
        self._events.append(stored)
        return stored

    def list_recent(self, limit: int = 100) -> list[Event]:
        return list(reversed(self._events[-limit:]))

    def clear(self) -> None:
        self._events.clear()


_DEFAULT_EVENT_REPOSITORY = InMemoryEventRepository()


def get_event_repository() -> EventRepository:
    """Return the process-wide event repository."""
    return _DEFAULT_EVENT_REPOSITORY


def record_event(
    *,
    action: str,
    subject_type: str,
    subject_id: str | None = None,
    tick: int = 0,
    metadata: dict[str, Any] | None = None,
    repository: EventRepository | None = None,
) -> Event:
    """Store a simulation event."""
    event = Event(
        id=None,
        tick=tick,
        action=action,
        subject_type=subject_type,
        subject_id=subject_id,
        metadata=metadata or {},
    )
    return (repository or get_event_repository()).record(event)


def list_recent_events(limit: int = 100) -> list[Event]:
    """Return the most recent events, newest first."""
    return get_event_repository().list_recent(limit)


class DeviceLogger:
    """Observer echoing every device state change to the console.

    ``tick_fn`` supplies the simulated time stamped on recorded events.
    """

    def __init__(
        self,
        *,
        print_fn: Callable[[str], None] = print,
        tick_fn: Callable[[], int] = lambda: 0,
        repository: EventRepository | None = None,
    ) -> None:
        self._print = print_fn
        self._tick = tick_fn
        self._repository = repository

    def update(self, device: SmartDevice) -> None:
        state = format_state(device.is_on)
        self._print(f'[Logger] {device.device_type} "{device.name}" is now {state}')
        logger.bind(device=device.name, type=device.device_type, state=state).info(
            "Device state changed"
        )
        record_event(
            action="device_state_changed",
            subject_type=device.device_type.lower(),
            subject_id=device.name,
            tick=self._tick(),
            metadata={"state": state},
            repository=self._repository,
        )


__all__ = [
    "DeviceLogger",
    "Event",
    "EventRepository",
    "InMemoryEventRepository",
    "get_event_repository",
    "list_recent_events",
    "record_event",
]

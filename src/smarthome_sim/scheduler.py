"""Tick-driven scheduler that switches devices on or off."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from .policies import TriggerPolicy, build_policy, describe_policy
from .schemas import ScheduleRequest
from .utils import format_state, logger


class SwitchableDevice(Protocol):
    def set_state(self, on: bool) -> None:
        ...


class DeviceLookup(Protocol):
    """Name based device resolution; the scheduler never owns devices."""

    def find_by_name(self, name: str) -> SwitchableDevice | None:
        ...


@dataclass
class ScheduledTask:
    """Desired state for a device, applied whenever ``policy`` fires."""

    device_name: str
    turn_on: bool
    policy: TriggerPolicy
    completed: bool = False

    def describe(self) -> str:
        status = "done" if self.completed else "pending"
        return (
            f"{self.device_name} -> {format_state(self.turn_on)} "
            f"({describe_policy(self.policy)}) [{status}]"
        )


class Scheduler:
    """Owns scheduled tasks and evaluates them, in insertion order, per tick."""

    def __init__(self, devices: DeviceLookup) -> None:
        self._devices = devices
        self._tasks: list[ScheduledTask] = []

    @property
    def tasks(self) -> list[ScheduledTask]:
        return list(self._tasks)

    def pending_tasks(self) -> list[ScheduledTask]:
        return [task for task in self._tasks if not task.completed]

    def __len__(self) -> int:
        return len(self._tasks)

    def schedule(
        self, device_name: str, turn_on: bool, policy: TriggerPolicy
    ) -> ScheduledTask:
        """Append a pending task; the device is only resolved when it fires."""
        task = ScheduledTask(device_name=device_name, turn_on=turn_on, policy=policy)
        self._tasks.append(task)
        logger.bind(
            device=device_name,
            state=format_state(turn_on),
            policy=describe_policy(policy),
        ).info("Task scheduled")
        return task

    def request(self, device_name: str, turn_on: bool, kind: str, value: int) -> bool:
        """Validate a scheduling request and schedule it.

        Returns False, creating no task, when the kind tag is unknown or the
        policy cannot be built.
        """
        try:
            request = ScheduleRequest(
                device_name=device_name, turn_on=turn_on, kind=kind, value=value
            )
            policy = build_policy(request.kind, request.value)
        except (ValidationError, ValueError) as exc:
            logger.bind(device=device_name, kind=kind, value=value).warning(
                "Rejected scheduling request: {}", exc
            )
            return False
        self.schedule(request.device_name, request.turn_on, policy)
        return True

    def advance(self, tick: int) -> None:
        """Evaluate every pending task against ``tick``."""
        for task in self._tasks:
            if task.completed or not task.policy.evaluate(tick):
                continue

            device = self._devices.find_by_name(task.device_name)
            if device is None:
                # The fire is consumed anyway; exhausted policies lose the action.
                logger.bind(device=task.device_name, tick=tick).warning(
                    "Scheduled device not found; action dropped"
                )
            else:
                device.set_state(task.turn_on)
                logger.bind(
                    device=task.device_name,
                    state=format_state(task.turn_on),
                    tick=tick,
                ).info("Scheduled action applied")
            task.completed = task.policy.is_exhausted()

    def reset(self) -> None:
        """Drop every task and its policy."""
        count = len(self._tasks)
        self._tasks.clear()
        logger.bind(cleared=count).info("All scheduled tasks cleared")


__all__ = ["DeviceLookup", "ScheduledTask", "Scheduler", "SwitchableDevice"]

"""Tests for the tick-driven scheduler."""

from __future__ import annotations

from smarthome_sim.policies import DelayedPolicy, OneTimePolicy, PeriodicPolicy
from smarthome_sim.scheduler import Scheduler


class RecordingDevice:
    def __init__(self, name: str) -> None:
        self.name = name
        self.calls: list[bool] = []

    def set_state(self, on: bool) -> None:
        self.calls.append(on)


class StubLookup:
    def __init__(self, *devices: RecordingDevice) -> None:
        self.devices = {device.name: device for device in devices}
        self.lookups: list[str] = []

    def find_by_name(self, name: str) -> RecordingDevice | None:
        self.lookups.append(name)
        return self.devices.get(name)


def test_one_time_task_fires_once_and_completes():
    device = RecordingDevice("deviceA")
    scheduler = Scheduler(StubLookup(device))
    task = scheduler.schedule("deviceA", True, OneTimePolicy(5))

    scheduler.advance(4)
    assert device.calls == []

    scheduler.advance(5)
    assert device.calls == [True]
    assert task.completed is True

    scheduler.advance(5)
    assert device.calls == [True]


def test_periodic_task_fires_repeatedly_and_never_completes():
    device = RecordingDevice("deviceB")
    scheduler = Scheduler(StubLookup(device))
    task = scheduler.schedule("deviceB", False, PeriodicPolicy(3))

    for tick in (0, 1, 3, 6):
        scheduler.advance(tick)

    assert device.calls == [False, False, False]
    assert task.completed is False


def test_delayed_task_recovers_from_skipped_threshold():
    device = RecordingDevice("deviceC")
    scheduler = Scheduler(StubLookup(device))
    task = scheduler.schedule("deviceC", True, DelayedPolicy(10))

    scheduler.advance(7)
    scheduler.advance(9)
    assert device.calls == []

    scheduler.advance(11)
    assert device.calls == [True]
    assert task.completed is True

    scheduler.advance(15)
    assert device.calls == [True]


def test_missing_device_consumes_the_fire():
    lookup = StubLookup()
    scheduler = Scheduler(lookup)
    task = scheduler.schedule("Ghost", True, OneTimePolicy(2))

    scheduler.advance(2)

    assert lookup.lookups == ["Ghost"]
    assert task.completed is True


def test_device_is_only_resolved_when_policy_fires():
    lookup = StubLookup(RecordingDevice("Lamp"))
    scheduler = Scheduler(lookup)
    scheduler.schedule("Lamp", True, OneTimePolicy(3))

    scheduler.advance(1)
    scheduler.advance(2)

    assert lookup.lookups == []


def test_same_tick_tasks_apply_in_insertion_order():
    device = RecordingDevice("Lamp")
    scheduler = Scheduler(StubLookup(device))
    scheduler.schedule("Lamp", True, OneTimePolicy(4))
    scheduler.schedule("Lamp", False, DelayedPolicy(4))

    scheduler.advance(4)

    assert device.calls == [True, False]


def test_scheduler_does_not_dedupe_repeated_actions():
    device = RecordingDevice("Fan")
    scheduler = Scheduler(StubLookup(device))
    scheduler.schedule("Fan", True, PeriodicPolicy(1))

    scheduler.advance(1)
    scheduler.advance(2)

    assert device.calls == [True, True]


def test_reset_clears_tasks_and_stops_triggering():
    device = RecordingDevice("Lamp")
    scheduler = Scheduler(StubLookup(device))
    scheduler.schedule("Lamp", True, PeriodicPolicy(1))
    scheduler.schedule("Lamp", False, OneTimePolicy(3))

    scheduler.reset()
    scheduler.advance(3)

    assert len(scheduler) == 0
    assert scheduler.tasks == []
    assert device.calls == []


def test_reset_on_empty_scheduler_is_noop():
    scheduler = Scheduler(StubLookup())

    scheduler.reset()
    scheduler.reset()

    assert scheduler.tasks == []


def test_completed_tasks_stay_listed_until_reset():
    device = RecordingDevice("Lamp")
    scheduler = Scheduler(StubLookup(device))
    scheduler.schedule("Lamp", True, OneTimePolicy(1))
    scheduler.schedule("Lamp", False, PeriodicPolicy(5))

    scheduler.advance(1)

    assert len(scheduler) == 2
    assert [task.device_name for task in scheduler.pending_tasks()] == ["Lamp"]
    assert scheduler.pending_tasks()[0].turn_on is False


def test_request_builds_policy_from_kind_tag():
    device = RecordingDevice("Lamp")
    scheduler = Scheduler(StubLookup(device))

    assert scheduler.request("Lamp", True, "delayed", 3) is True
    task = scheduler.tasks[0]
    assert isinstance(task.policy, DelayedPolicy)
    assert task.policy.threshold_tick == 3


def test_request_rejects_unknown_kind():
    scheduler = Scheduler(StubLookup())

    assert scheduler.request("Lamp", True, "hourly", 3) is False
    assert scheduler.tasks == []


def test_request_rejects_non_positive_interval():
    scheduler = Scheduler(StubLookup())

    assert scheduler.request("Lamp", True, "periodic", 0) is False
    assert scheduler.tasks == []


def test_schedule_accepts_unknown_device_names():
    scheduler = Scheduler(StubLookup())

    task = scheduler.schedule("Nowhere", False, PeriodicPolicy(2))

    assert scheduler.tasks == [task]
    assert "Nowhere -> OFF (every 2 tick(s)) [pending]" == task.describe()

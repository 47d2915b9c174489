"""Trigger policies deciding, tick by tick, when a scheduled action fires."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Protocol

PolicyKind = Literal["one-time", "periodic", "delayed"]

POLICY_KINDS: tuple[str, ...] = ("one-time", "periodic", "delayed")


class TriggerPolicy(Protocol):
    """Strategy deciding whether a scheduled action fires at a given tick.

    Ticks passed to ``evaluate`` are non-negative and never decrease between
    calls. Once ``is_exhausted`` returns True the policy never fires again.
    """

    def evaluate(self, tick: int) -> bool:
        ...

    def is_exhausted(self) -> bool:
        ...


@dataclass
class OneTimePolicy:
    """Fire exactly at ``trigger_tick``; a skipped trigger tick is lost."""

    trigger_tick: int
    _fired: bool = field(default=False, init=False, repr=False)
    _passed: bool = field(default=False, init=False, repr=False)

    def evaluate(self, tick: int) -> bool:
        if self._fired or self._passed:
            return False
        if tick > self.trigger_tick:
            self._passed = True
            return False
        if tick == self.trigger_tick:
            self._fired = True
            return True
        return False

    def is_exhausted(self) -> bool:
        return self._fired or self._passed


@dataclass
class PeriodicPolicy:
    """Fire on every tick that is a multiple of ``interval``."""

    interval: int

    def __post_init__(self) -> None:
        if self.interval <= 0:
            raise ValueError(
                f"Periodic interval must be positive, got {self.interval}."
            )

    def evaluate(self, tick: int) -> bool:
        return tick % self.interval == 0

    def is_exhausted(self) -> bool:
        return False


@dataclass
class DelayedPolicy:
    """Fire once, on the first observed tick at or after ``threshold_tick``."""

    threshold_tick: int
    _fired: bool = field(default=False, init=False, repr=False)

    def evaluate(self, tick: int) -> bool:
        if self._fired or tick < self.threshold_tick:
            return False
        self._fired = True
        return True

    def is_exhausted(self) -> bool:
        return self._fired


def build_policy(kind: str, value: int) -> TriggerPolicy:
    """Return the policy for a kind tag.

    ``value`` is the absolute trigger tick for ``one-time``, the interval for
    ``periodic`` and the absolute threshold tick for ``delayed``.
    """
    if kind == "one-time":
        return OneTimePolicy(value)
    if kind == "periodic":
        return PeriodicPolicy(value)
    if kind == "delayed":
        return DelayedPolicy(value)
    raise ValueError(
        f"Unknown policy kind '{kind}'. Valid kinds: {', '.join(POLICY_KINDS)}."
    )


def describe_policy(policy: TriggerPolicy) -> str:
    if isinstance(policy, OneTimePolicy):
        return f"one-time at tick {policy.trigger_tick}"
    if isinstance(policy, PeriodicPolicy):
        return f"every {policy.interval} tick(s)"
    if isinstance(policy, DelayedPolicy):
        return f"once at or after tick {policy.threshold_tick}"
    return type(policy).__name__


__all__ = [
    "POLICY_KINDS",
    "PolicyKind",
    "TriggerPolicy",
    "OneTimePolicy",
    "PeriodicPolicy",
    "DelayedPolicy",
    "build_policy",
    "describe_policy",
]

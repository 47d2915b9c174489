"""Pydantic models validating requests that cross the console boundary."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .policies import PolicyKind


class ScheduleRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    device_name: str = Field(..., min_length=1)
    turn_on: bool
    kind: PolicyKind
    value: int = Field(..., strict=True)


__all__ = ["ScheduleRequest"]

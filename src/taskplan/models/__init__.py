"""Pydantic models for the taskplan scheduler."""

from taskplan.models.schedule import (
    CYCLE_MESSAGE,
    DanglingPolicy,
    ScheduleResult,
    ScheduleStatus,
    TaskDescriptor,
)

__all__ = [
    "CYCLE_MESSAGE",
    "DanglingPolicy",
    "ScheduleResult",
    "ScheduleStatus",
    "TaskDescriptor",
]

"""Scheduling input and output models."""

from datetime import date
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

CYCLE_MESSAGE = "Circular dependency detected. Cannot schedule tasks."


class DanglingPolicy(StrEnum):
    """How dependencies on titles outside the task set are handled."""

    IGNORE = "ignore"  # Treated as already satisfied
    REJECT = "reject"


class ScheduleStatus(StrEnum):
    """Terminal outcome of a scheduling call."""

    SCHEDULED = "scheduled"
    CYCLE = "cycle"
    INVALID = "invalid"
    FAILED = "failed"


class TaskDescriptor(BaseModel):
    """A task as supplied by the caller for one scheduling request."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    title: str
    estimated_hours: float = 0
    due_date: str = ""
    dependencies: list[str] = Field(default_factory=list)

    @field_validator("due_date", mode="before")
    @classmethod
    def coerce_due_date(cls, value: Any) -> Any:
        """Keep due dates opaque strings even when YAML parsed them as dates."""
        if isinstance(value, date):
            return value.isoformat()
        return value


class ScheduleResult(BaseModel):
    """Outcome of scheduling a task set.

    ``order`` is only populated when ``status`` is ``scheduled``. Every other
    status carries an ``error_message``; a cycle additionally lists the titles
    that could never be released in ``blocked``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    order: list[str] = Field(default_factory=list, alias="recommendedOrder")
    has_cycle: bool = False
    error_message: str | None = None
    status: ScheduleStatus = ScheduleStatus.SCHEDULED
    blocked: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == ScheduleStatus.SCHEDULED

    @classmethod
    def scheduled(cls, order: list[str]) -> "ScheduleResult":
        return cls(order=order)

    @classmethod
    def cycle(cls, blocked: list[str]) -> "ScheduleResult":
        return cls(
            has_cycle=True,
            error_message=CYCLE_MESSAGE,
            status=ScheduleStatus.CYCLE,
            blocked=blocked,
        )

    @classmethod
    def invalid(cls, message: str) -> "ScheduleResult":
        return cls(error_message=message, status=ScheduleStatus.INVALID)

    @classmethod
    def failed(cls, reason: str) -> "ScheduleResult":
        return cls(error_message=f"Scheduling failed: {reason}", status=ScheduleStatus.FAILED)

"""
Task and tag model definitions.

Tasks are timed blocks on a single calendar day. Start/end are
zero-padded "HH:MM" clock times.
"""

from datetime import date
from typing import Annotated, Optional
from uuid import uuid4

from pydantic import AfterValidator, BaseModel, Field, StringConstraints, model_validator

from dayplan.utils.time_utils import duration_minutes, is_clock_time


def _validate_clock(value: str) -> str:
    if not is_clock_time(value):
        raise ValueError("time must be HH:MM within 00:00-23:59")
    return value


ClockTime = Annotated[str, AfterValidator(_validate_clock)]
Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=500)]
TagName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]


class Tag(BaseModel):
    """Category a task can belong to."""

    id: str
    name: TagName
    color: str = Field("#6c63ff", max_length=20)


class TagCreate(BaseModel):
    """Schema for creating a tag."""

    name: TagName
    color: str = Field("#6c63ff", max_length=20)


class TaskBase(BaseModel):
    """Base task fields shared across create/read."""

    title: Title
    task_date: date
    start_time: ClockTime = Field(..., description="Start of day slot (HH:MM)")
    end_time: ClockTime = Field(..., description="End of day slot (HH:MM)")
    tag_id: Optional[str] = Field(None, description="Tag ID (None = uncategorized)")
    notes: str = Field("", max_length=5000)
    fixed: bool = Field(False, description="Excluded from automatic rearrangement")
    done: bool = False


class Task(TaskBase):
    """Task entity."""

    id: str

    @property
    def duration(self) -> int:
        """Duration in minutes. Zero or negative means unplaceable."""
        return duration_minutes(self.start_time, self.end_time)

    def with_times(self, start_time: str, end_time: str) -> "Task":
        """Copy of this task with new times; identity and other fields kept."""
        return self.model_copy(update={"start_time": start_time, "end_time": end_time})


class TaskCreate(TaskBase):
    """Schema for creating a new task."""

    id: str = Field(default_factory=lambda: str(uuid4()))


class TaskUpdate(BaseModel):
    """Schema for updating an existing task."""

    title: Optional[Title] = None
    task_date: Optional[date] = None
    start_time: Optional[ClockTime] = None
    end_time: Optional[ClockTime] = None
    tag_id: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=5000)
    fixed: Optional[bool] = None
    done: Optional[bool] = None

    @model_validator(mode="after")
    def reject_nulls(self):
        """Only tag_id may be cleared; other fields need a value when sent."""
        for field in sorted(self.model_fields_set - {"tag_id"}):
            if getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class TaskTimeUpdate(BaseModel):
    """New start/end for an existing task."""

    id: str
    start_time: ClockTime
    end_time: ClockTime


class PlannerState(BaseModel):
    """Full persisted planner state."""

    tags: list[Tag] = Field(default_factory=list)
    tasks: list[Task] = Field(default_factory=list)

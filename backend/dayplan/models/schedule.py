"""
Scheduling policy and layout/optimization result models.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, Field, model_validator

from dayplan.models.task import ClockTime, Task
from dayplan.utils.time_utils import to_minutes

if TYPE_CHECKING:
    from dayplan.core.config import Settings


class SchedulingPolicy(BaseModel):
    """Time-window and grid constants used by the scheduling core."""

    # Local fallback placement window (minutes since midnight)
    placement_start: int = Field(7 * 60, ge=0, le=1439)
    placement_end: int = Field(23 * 60, ge=1, le=1439)
    slot_step_minutes: int = Field(15, ge=1)
    max_slot_attempts: int = Field(24 * 4, ge=1)

    # Window communicated to the advisor
    advisor_window_start: ClockTime = "07:00"
    advisor_window_end: ClockTime = "22:00"

    # Visible timeline
    timeline_start_hour: int = Field(6, ge=0, le=23)
    timeline_end_hour: int = Field(23, ge=1, le=24)
    px_per_minute: float = Field(1.0, gt=0)
    min_block_height_px: float = Field(26, ge=0)
    new_task_default_minutes: int = Field(45, ge=1)

    # Drag gestures
    drag_px_per_minute: float = Field(2.0, gt=0)
    drag_preview_snap_minutes: int = Field(5, ge=1)
    drag_label_snap_minutes: int = Field(15, ge=1)
    drag_commit_snap_minutes: int = Field(15, ge=1)
    drag_min_duration_minutes: int = Field(15, ge=1)
    click_threshold_px: float = Field(4, ge=0)

    @model_validator(mode="after")
    def validate_windows(self):
        if self.placement_start >= self.placement_end:
            raise ValueError("placement_start must be before placement_end")
        if self.timeline_start_hour >= self.timeline_end_hour:
            raise ValueError("timeline_start_hour must be before timeline_end_hour")
        return self

    @property
    def timeline_start(self) -> int:
        return self.timeline_start_hour * 60

    @property
    def timeline_end(self) -> int:
        return self.timeline_end_hour * 60

    @classmethod
    def from_settings(cls, settings: "Settings") -> "SchedulingPolicy":
        """Build a policy with the window overrides from settings applied."""
        return cls(
            placement_start=to_minutes(settings.PLACEMENT_START),
            placement_end=to_minutes(settings.PLACEMENT_END),
            advisor_window_start=settings.ADVISOR_WINDOW_START,
            advisor_window_end=settings.ADVISOR_WINDOW_END,
        )


class LaneAssignment(BaseModel):
    """Lane index and lane count of the overlap group a task belongs to."""

    lane: int = Field(..., ge=0)
    lane_count: int = Field(..., ge=1)


class TaskBlock(BaseModel):
    """Render placement of a task on the timeline."""

    task_id: str
    lane: int
    lane_count: int
    top_px: float
    height_px: float
    left_fraction: float
    width_fraction: float


class LayoutResponse(BaseModel):
    """Timeline layout for one day."""

    blocks: list[TaskBlock] = Field(default_factory=list)
    planned_minutes: int = 0
    planned_label: str = ""
    fixed_count: int = 0
    flexible_count: int = 0


class NewTaskSlot(BaseModel):
    """Default slot for a task created from a timeline click."""

    start_time: ClockTime
    end_time: ClockTime


class OptimizeResult(BaseModel):
    """Rearranged day plan produced by an optimization strategy."""

    tasks: list[Task]
    summary: str
    provider: Literal["advisor", "fallback"] = "fallback"

"""
Interactive reschedule (drag) controller.

Tracks one pointer gesture at a time. While dragging, the task's times in
the live list are rewritten on every move (overlaps with other tasks are
allowed, only the timeline bounds are enforced). On release the start is
snapped to the commit grid, or the gesture is treated as a click when the
pointer barely moved.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel

from dayplan.core.exceptions import BusinessLogicError, NotFoundError
from dayplan.models.schedule import SchedulingPolicy
from dayplan.models.task import Task
from dayplan.utils.time_utils import MINUTES_PER_DAY, clamp, snap, to_clock, to_minutes


class DragState(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class DragPreview(BaseModel):
    """Live position of the dragged task."""

    task_id: str
    start_time: str
    end_time: str
    label: str


class DragOutcome(BaseModel):
    """How a gesture ended: a committed move, or a click that opens the editor."""

    kind: Literal["move", "click"]
    task: Task


@dataclass
class _Gesture:
    task_id: str
    origin_y: float
    original: Task
    origin_start: int
    duration: int
    fits: bool


class DragController:
    """State machine for dragging task blocks on the timeline."""

    def __init__(self, tasks: list[Task], policy: Optional[SchedulingPolicy] = None):
        """
        Args:
            tasks: Live task list; updated in place during gestures
            policy: Timeline bounds, drag scale and snapping grids
        """
        self._tasks = tasks
        self._policy = policy or SchedulingPolicy()
        self._gesture: Optional[_Gesture] = None

    @property
    def state(self) -> DragState:
        return DragState.DRAGGING if self._gesture else DragState.IDLE

    def pointer_down(self, task_id: str, pointer_y: float) -> None:
        """Start dragging a task block."""
        if self._gesture is not None:
            raise BusinessLogicError("A drag gesture is already in progress")
        task = self._tasks[self._index_of(task_id)]
        duration = max(task.duration, self._policy.drag_min_duration_minutes)
        self._gesture = _Gesture(
            task_id=task_id,
            origin_y=pointer_y,
            original=task,
            origin_start=to_minutes(task.start_time),
            duration=duration,
            fits=duration <= self._policy.timeline_end - self._policy.timeline_start,
        )

    def pointer_move(self, pointer_y: float) -> Optional[DragPreview]:
        """Move the dragged task. Returns None when no gesture is active."""
        gesture = self._gesture
        if gesture is None:
            return None
        if not gesture.fits:
            original = gesture.original
            return DragPreview(
                task_id=original.id,
                start_time=original.start_time,
                end_time=original.end_time,
                label=original.start_time,
            )

        target = self._clamped_start(gesture, pointer_y)
        start = self._bounded(snap(target, self._policy.drag_preview_snap_minutes), gesture)
        label = self._bounded(snap(target, self._policy.drag_label_snap_minutes), gesture)
        task = self._write(gesture, start)
        return DragPreview(
            task_id=task.id,
            start_time=task.start_time,
            end_time=task.end_time,
            label=to_clock(label),
        )

    def pointer_up(self, pointer_y: float) -> Optional[DragOutcome]:
        """
        Finish the gesture.

        Movement below the click threshold restores the original times and
        reports a click. Otherwise the snapped position is committed. A task
        longer than the visible timeline cannot be moved and keeps its times.
        """
        gesture = self._gesture
        if gesture is None:
            return None
        self._gesture = None

        if abs(pointer_y - gesture.origin_y) < self._policy.click_threshold_px:
            self._tasks[self._index_of(gesture.task_id)] = gesture.original
            return DragOutcome(kind="click", task=gesture.original)
        if not gesture.fits:
            return DragOutcome(kind="move", task=gesture.original)

        target = self._clamped_start(gesture, pointer_y)
        start = self._bounded(snap(target, self._policy.drag_commit_snap_minutes), gesture)
        return DragOutcome(kind="move", task=self._write(gesture, start))

    def _index_of(self, task_id: str) -> int:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        raise NotFoundError(f"Task {task_id} not found")

    def _latest_start(self, gesture: _Gesture) -> int:
        return max(self._policy.timeline_start, self._policy.timeline_end - gesture.duration)

    def _bounded(self, minutes: float, gesture: _Gesture) -> int:
        return int(clamp(minutes, self._policy.timeline_start, self._latest_start(gesture)))

    def _clamped_start(self, gesture: _Gesture, pointer_y: float) -> float:
        delta = (pointer_y - gesture.origin_y) / self._policy.drag_px_per_minute
        return clamp(gesture.origin_start + delta, self._policy.timeline_start, self._latest_start(gesture))

    def _write(self, gesture: _Gesture, start: int) -> Task:
        end = min(start + gesture.duration, MINUTES_PER_DAY - 1)
        index = self._index_of(gesture.task_id)
        task = self._tasks[index].with_times(to_clock(start), to_clock(end))
        self._tasks[index] = task
        return task

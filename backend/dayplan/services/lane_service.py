"""
Lane assignment and timeline layout.

Overlapping tasks are split into side-by-side lanes so each block can be
drawn without covering another one.
"""

from __future__ import annotations

from typing import Iterable, Optional

from dayplan.models.schedule import (
    LaneAssignment,
    LayoutResponse,
    NewTaskSlot,
    SchedulingPolicy,
    TaskBlock,
)
from dayplan.models.task import Task
from dayplan.utils.time_utils import clamp, snap, to_clock, to_minutes


def _group_overlapping(tasks: list[Task]) -> list[list[Task]]:
    """Split start-sorted tasks into runs of transitively overlapping tasks."""
    groups: list[list[Task]] = []
    group_end = 0
    for task in tasks:
        start = to_minutes(task.start_time)
        end = to_minutes(task.end_time)
        if groups and start < group_end:
            groups[-1].append(task)
            group_end = max(group_end, end)
        else:
            groups.append([task])
            group_end = end
    return groups


def _pack_lanes(group: list[Task]) -> list[list[Task]]:
    """First-fit: lowest lane whose last task ends at or before this start."""
    lanes: list[list[Task]] = []
    for task in group:
        start = to_minutes(task.start_time)
        for lane in lanes:
            if to_minutes(lane[-1].end_time) <= start:
                lane.append(task)
                break
        else:
            lanes.append([task])
    return lanes


def assign_lanes(tasks: Iterable[Task]) -> dict[str, LaneAssignment]:
    """
    Assign a lane index and group lane count to every task.

    Args:
        tasks: Tasks of one day, any order. Ties on start time keep input order.

    Returns:
        Mapping of task id to its lane assignment
    """
    ordered = sorted(tasks, key=lambda t: to_minutes(t.start_time))
    result: dict[str, LaneAssignment] = {}
    for group in _group_overlapping(ordered):
        lanes = _pack_lanes(group)
        for index, lane in enumerate(lanes):
            for task in lane:
                result[task.id] = LaneAssignment(lane=index, lane_count=len(lanes))
    return result


def planned_minutes(tasks: Iterable[Task]) -> int:
    """Sum of positive task durations."""
    return sum(max(0, task.duration) for task in tasks)


def planned_label(total_minutes: int) -> str:
    hours, minutes = divmod(total_minutes, 60)
    if hours == 0:
        return f"{minutes}m planned"
    if minutes == 0:
        return f"{hours}h planned"
    return f"{hours}h {minutes}m planned"


def _block_top(task: Task, policy: SchedulingPolicy) -> float:
    start = max(to_minutes(task.start_time), policy.timeline_start)
    return (start - policy.timeline_start) * policy.px_per_minute


def _block_height(task: Task, policy: SchedulingPolicy) -> float:
    start = max(to_minutes(task.start_time), policy.timeline_start)
    end = min(to_minutes(task.end_time), policy.timeline_end)
    return max((end - start) * policy.px_per_minute, policy.min_block_height_px)


def compute_layout(
    tasks: list[Task],
    policy: Optional[SchedulingPolicy] = None,
    tag_id: Optional[str] = None,
) -> LayoutResponse:
    """
    Compute render placement for a day's tasks.

    Args:
        tasks: Tasks of one day
        policy: Timeline geometry (defaults apply when omitted)
        tag_id: Only lay out tasks of this tag when given

    Returns:
        Blocks in start order plus planned-time summary of the whole day
    """
    policy = policy or SchedulingPolicy()
    visible = [t for t in tasks if t.tag_id == tag_id] if tag_id else list(tasks)
    lanes = assign_lanes(visible)

    blocks = [
        TaskBlock(
            task_id=task.id,
            lane=lanes[task.id].lane,
            lane_count=lanes[task.id].lane_count,
            top_px=_block_top(task, policy),
            height_px=_block_height(task, policy),
            left_fraction=lanes[task.id].lane / lanes[task.id].lane_count,
            width_fraction=1 / lanes[task.id].lane_count,
        )
        for task in sorted(visible, key=lambda t: to_minutes(t.start_time))
    ]

    total = planned_minutes(tasks)
    return LayoutResponse(
        blocks=blocks,
        planned_minutes=total,
        planned_label=planned_label(total),
        fixed_count=sum(1 for t in tasks if t.fixed),
        flexible_count=sum(1 for t in tasks if not t.fixed),
    )


def new_task_slot(pointer_y_px: float, policy: Optional[SchedulingPolicy] = None) -> NewTaskSlot:
    """Default slot for a task created by clicking the empty timeline."""
    policy = policy or SchedulingPolicy()
    raw = pointer_y_px / policy.px_per_minute + policy.timeline_start
    start = int(
        clamp(
            snap(raw, policy.drag_commit_snap_minutes),
            policy.timeline_start,
            policy.timeline_end - policy.new_task_default_minutes,
        )
    )
    end = min(start + policy.new_task_default_minutes, policy.timeline_end - 5)
    return NewTaskSlot(start_time=to_clock(start), end_time=to_clock(end))

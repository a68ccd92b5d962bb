"""
Local fallback scheduler.

Packs flexible tasks into the free gaps left by fixed tasks, in their
current order, without consulting the advisor.
"""

from __future__ import annotations

from typing import Optional

from dayplan.models.schedule import OptimizeResult, SchedulingPolicy
from dayplan.models.task import Task
from dayplan.utils.intervals import TimeInterval, overlaps_any
from dayplan.utils.time_utils import to_clock, to_minutes

FALLBACK_SUMMARY = (
    "Flexible tasks were rearranged to minimize gaps and avoid conflicts "
    "with fixed commitments."
)


def _find_slot(
    duration: int,
    cursor: int,
    occupied: list[TimeInterval],
    policy: SchedulingPolicy,
) -> Optional[TimeInterval]:
    start = cursor
    for _ in range(policy.max_slot_attempts):
        candidate = TimeInterval(start, start + duration)
        if candidate.end_minutes <= policy.placement_end and not overlaps_any(candidate, occupied):
            return candidate
        start += policy.slot_step_minutes
    return None


def fallback_optimize(
    tasks: list[Task],
    policy: Optional[SchedulingPolicy] = None,
) -> OptimizeResult:
    """
    Rearrange flexible tasks around fixed ones.

    Fixed tasks keep their times. Flexible tasks are placed first-fit from
    the placement start, keeping their durations. Tasks with a non-positive
    duration, or for which no slot is found, keep their original times.

    Args:
        tasks: Tasks of one day
        policy: Placement window and grid

    Returns:
        All tasks sorted by start time and a fixed summary
    """
    policy = policy or SchedulingPolicy()
    fixed = [t for t in tasks if t.fixed]
    flexible = sorted((t for t in tasks if not t.fixed), key=lambda t: to_minutes(t.start_time))

    occupied = [
        TimeInterval(to_minutes(t.start_time), to_minutes(t.end_time)) for t in fixed
    ]
    cursor = policy.placement_start
    placed: list[Task] = []

    for task in flexible:
        duration = task.duration
        if duration <= 0:
            placed.append(task)
            continue

        slot = _find_slot(duration, cursor, occupied, policy)
        if slot is None:
            placed.append(task)
            continue

        placed.append(task.with_times(to_clock(slot.start_minutes), to_clock(slot.end_minutes)))
        occupied.append(slot)
        cursor = slot.end_minutes

    merged = sorted(fixed + placed, key=lambda t: to_minutes(t.start_time))
    return OptimizeResult(tasks=merged, summary=FALLBACK_SUMMARY, provider="fallback")

"""
Unit tests for the local fallback scheduler.
"""

from datetime import date
from itertools import combinations

from dayplan.models.schedule import SchedulingPolicy
from dayplan.models.task import Task
from dayplan.services.fallback_scheduler import FALLBACK_SUMMARY, fallback_optimize
from dayplan.utils.time_utils import to_minutes


def _task(task_id: str, start: str, end: str, fixed: bool = False) -> Task:
    return Task(
        id=task_id,
        title=f"Task {task_id}",
        task_date=date(2026, 3, 14),
        start_time=start,
        end_time=end,
        fixed=fixed,
    )


def _by_id(tasks: list[Task]) -> dict[str, Task]:
    return {t.id: t for t in tasks}


def test_packs_flexible_tasks_after_fixed_block():
    tasks = [
        _task("meeting", "07:00", "08:00", fixed=True),
        _task("write", "07:30", "08:30"),
        _task("email", "09:00", "09:30"),
    ]

    result = fallback_optimize(tasks)

    assert result.summary == FALLBACK_SUMMARY
    assert result.provider == "fallback"
    assert [(t.id, t.start_time, t.end_time) for t in result.tasks] == [
        ("meeting", "07:00", "08:00"),
        ("write", "08:00", "09:00"),
        ("email", "09:00", "09:30"),
    ]


def test_fixed_tasks_and_durations_are_preserved():
    tasks = [
        _task("gym", "12:00", "13:00", fixed=True),
        _task("standup", "09:00", "09:15", fixed=True),
        _task("a", "06:00", "07:30"),
        _task("b", "10:00", "12:10"),
        _task("c", "15:00", "15:45"),
    ]

    result = _by_id(fallback_optimize(tasks).tasks)

    assert (result["gym"].start_time, result["gym"].end_time) == ("12:00", "13:00")
    assert (result["standup"].start_time, result["standup"].end_time) == ("09:00", "09:15")
    for original in tasks:
        assert result[original.id].duration == original.duration


def test_result_is_conflict_free_and_sorted():
    tasks = [
        _task("f1", "08:00", "08:30", fixed=True),
        _task("f2", "10:00", "11:00", fixed=True),
        _task("x", "07:00", "08:15"),
        _task("y", "07:10", "09:00"),
        _task("z", "09:30", "10:30"),
    ]

    result = fallback_optimize(tasks).tasks

    starts = [to_minutes(t.start_time) for t in result]
    assert starts == sorted(starts)
    for a, b in combinations(result, 2):
        assert not (
            to_minutes(a.start_time) < to_minutes(b.end_time)
            and to_minutes(b.start_time) < to_minutes(a.end_time)
        ), (a.id, b.id)
    assert all(to_minutes(t.end_time) <= 23 * 60 for t in result)


def test_non_positive_duration_passes_through():
    tasks = [_task("broken", "10:00", "10:00"), _task("backwards", "11:00", "10:30")]

    result = _by_id(fallback_optimize(tasks).tasks)

    assert (result["broken"].start_time, result["broken"].end_time) == ("10:00", "10:00")
    assert (result["backwards"].start_time, result["backwards"].end_time) == ("11:00", "10:30")


def test_unplaceable_task_keeps_original_times():
    tasks = [
        _task("workday", "07:00", "22:00", fixed=True),
        _task("long", "09:00", "13:00"),
        _task("short", "14:00", "14:30"),
    ]

    result = _by_id(fallback_optimize(tasks).tasks)

    assert (result["long"].start_time, result["long"].end_time) == ("09:00", "13:00")
    assert (result["short"].start_time, result["short"].end_time) == ("22:00", "22:30")


def test_empty_plan():
    result = fallback_optimize([])

    assert result.tasks == []
    assert result.summary == FALLBACK_SUMMARY


def test_input_is_not_mutated():
    tasks = [_task("a", "15:00", "15:30")]

    result = fallback_optimize(tasks)

    assert tasks[0].start_time == "15:00"
    assert result.tasks[0].start_time == "07:00"


def test_custom_placement_window():
    policy = SchedulingPolicy(placement_start=9 * 60, placement_end=10 * 60)
    tasks = [_task("a", "15:00", "15:45"), _task("b", "16:00", "16:30")]

    result = _by_id(fallback_optimize(tasks, policy).tasks)

    assert (result["a"].start_time, result["a"].end_time) == ("09:00", "09:45")
    assert (result["b"].start_time, result["b"].end_time) == ("16:00", "16:30")

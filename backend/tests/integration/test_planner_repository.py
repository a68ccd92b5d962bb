"""
Integration tests for the SQLite planner repository.
"""

from datetime import date

import pytest

from dayplan.core.exceptions import BusinessLogicError, NotFoundError
from dayplan.infrastructure.local.database import init_db, seed_if_empty
from dayplan.infrastructure.local.planner_repository import SqlitePlannerRepository
from dayplan.models.task import (
    PlannerState,
    Tag,
    TagCreate,
    Task,
    TaskCreate,
    TaskTimeUpdate,
    TaskUpdate,
)


@pytest.fixture
def repo(session_factory):
    return SqlitePlannerRepository(session_factory=session_factory)


def _create(task_id: str, start: str, end: str, task_date: date, **kwargs) -> TaskCreate:
    return TaskCreate(
        id=task_id,
        title=f"Task {task_id}",
        task_date=task_date,
        start_time=start,
        end_time=end,
        **kwargs,
    )


@pytest.mark.asyncio
async def test_create_and_get_task(repo, plan_date):
    created = await repo.create_task(
        _create("a", "09:00", "10:00", plan_date, notes="Outline", fixed=True)
    )

    retrieved = await repo.get_task("a")

    assert created == retrieved
    assert retrieved.notes == "Outline"
    assert retrieved.fixed is True
    assert retrieved.done is False


@pytest.mark.asyncio
async def test_generated_task_id(repo, plan_date):
    created = await repo.create_task(
        TaskCreate(title="Untitled", task_date=plan_date, start_time="09:00", end_time="09:30")
    )

    assert created.id
    assert await repo.get_task(created.id) is not None


@pytest.mark.asyncio
async def test_list_tasks_filters_day_and_orders_by_start(repo, plan_date):
    await repo.create_task(_create("late", "15:00", "16:00", plan_date))
    await repo.create_task(_create("early", "08:00", "08:30", plan_date))
    await repo.create_task(_create("other-day", "07:00", "07:30", date(2026, 3, 15)))

    tasks = await repo.list_tasks(plan_date)

    assert [t.id for t in tasks] == ["early", "late"]


@pytest.mark.asyncio
async def test_update_task(repo, plan_date):
    await repo.create_task(_create("a", "09:00", "10:00", plan_date))

    updated = await repo.update_task("a", TaskUpdate(start_time="11:00", end_time="12:00", done=True))

    assert (updated.start_time, updated.end_time) == ("11:00", "12:00")
    assert updated.done is True
    assert updated.title == "Task a"


@pytest.mark.asyncio
async def test_update_missing_task(repo):
    with pytest.raises(NotFoundError):
        await repo.update_task("missing", TaskUpdate(title="x"))


@pytest.mark.asyncio
async def test_update_task_times_reports_existing_ids(repo, plan_date):
    await repo.create_task(_create("a", "09:00", "10:00", plan_date))
    await repo.create_task(_create("b", "10:00", "10:30", plan_date))

    updated = await repo.update_task_times(
        [
            TaskTimeUpdate(id="a", start_time="13:00", end_time="14:00"),
            TaskTimeUpdate(id="gone", start_time="08:00", end_time="09:00"),
        ]
    )

    assert updated == ["a"]
    assert (await repo.get_task("a")).start_time == "13:00"
    assert (await repo.get_task("b")).start_time == "10:00"


@pytest.mark.asyncio
async def test_delete_task(repo, plan_date):
    await repo.create_task(_create("a", "09:00", "10:00", plan_date))

    assert await repo.delete_task("a") is True
    assert await repo.delete_task("a") is False
    assert await repo.get_task("a") is None


@pytest.mark.asyncio
async def test_deleting_tag_uncategorizes_its_tasks(repo, plan_date):
    tag = await repo.create_tag(TagCreate(name="  Work ", color="#123456"))
    await repo.create_task(_create("a", "09:00", "10:00", plan_date, tag_id=tag.id))

    assert tag.name == "Work"
    assert await repo.delete_tag(tag.id) is True
    assert (await repo.get_task("a")).tag_id is None
    assert await repo.list_tags() == []
    assert await repo.delete_tag(tag.id) is False


@pytest.mark.asyncio
async def test_save_replaces_state(repo, plan_date):
    await repo.create_task(_create("stale", "09:00", "10:00", plan_date))
    state = PlannerState(
        tags=[Tag(id="t1", name="Errands")],
        tasks=[
            Task(
                id="fresh",
                title="Groceries",
                task_date=plan_date,
                start_time="17:30",
                end_time="18:00",
                tag_id="t1",
            )
        ],
    )

    saved = await repo.save(state)
    loaded = await repo.load()

    assert saved == loaded
    assert [t.id for t in loaded.tasks] == ["fresh"]
    assert [t.name for t in loaded.tags] == ["Errands"]


@pytest.mark.asyncio
async def test_seed_only_into_empty_database(session_factory):
    repo = SqlitePlannerRepository(session_factory=session_factory)

    assert await seed_if_empty(session_factory) is True
    assert await seed_if_empty(session_factory) is False

    state = await repo.load()
    assert len(state.tags) == 3
    assert len(state.tasks) == 4
    assert sum(1 for t in state.tasks if t.fixed) == 2
    assert all(t.task_date == date.today() for t in state.tasks)


@pytest.mark.asyncio
async def test_init_db_is_idempotent(session_factory):
    await init_db(session_factory)
    await init_db(session_factory)

    state = await SqlitePlannerRepository(session_factory=session_factory).load()
    assert len(state.tags) == 3


@pytest.mark.asyncio
async def test_duplicate_task_id_is_rejected(repo, plan_date):
    await repo.create_task(_create("a", "09:00", "10:00", plan_date))

    with pytest.raises(BusinessLogicError):
        await repo.create_task(_create("a", "11:00", "12:00", plan_date))

    assert (await repo.get_task("a")).start_time == "09:00"

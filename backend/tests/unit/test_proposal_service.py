"""
Unit tests for the proposal workflow (propose / apply / discard).
"""

from datetime import date
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from dayplan.core.exceptions import BusinessLogicError, NotFoundError
from dayplan.infrastructure.local.proposal_repository import InMemoryProposalRepository
from dayplan.models.proposal import ProposalStatus
from dayplan.models.task import Task, TaskTimeUpdate
from dayplan.services.plan_optimizer import PlanOptimizer
from dayplan.services.proposal_service import ProposalService

DAY = date(2026, 3, 14)


def _task(task_id: str, start: str, end: str, fixed: bool = False) -> Task:
    return Task(
        id=task_id,
        title=f"Task {task_id}",
        task_date=DAY,
        start_time=start,
        end_time=end,
        fixed=fixed,
    )


@pytest.fixture
def planner_repo():
    repo = AsyncMock()
    repo.list_tasks.return_value = [
        _task("meeting", "07:00", "08:00", fixed=True),
        _task("write", "10:00", "11:00"),
    ]
    repo.list_tags.return_value = []
    return repo


@pytest.fixture
def service(planner_repo):
    return ProposalService(
        planner_repo=planner_repo,
        proposal_repo=InMemoryProposalRepository(),
        optimizer=PlanOptimizer.create(None),
    )


@pytest.mark.asyncio
async def test_propose_stages_plan_without_touching_live_tasks(service, planner_repo):
    proposal = await service.propose(DAY)

    assert proposal.status == ProposalStatus.PENDING
    assert proposal.task_date == DAY
    assert proposal.provider == "fallback"
    assert {t.id: t.start_time for t in proposal.tasks} == {"meeting": "07:00", "write": "08:00"}
    planner_repo.list_tasks.assert_awaited_once_with(DAY)
    planner_repo.update_task_times.assert_not_awaited()

    stored = await service.get(proposal.id)
    assert stored.id == proposal.id


@pytest.mark.asyncio
async def test_apply_writes_only_live_flexible_tasks(service, planner_repo):
    proposal = await service.propose(DAY)
    planner_repo.list_tasks.return_value = [
        _task("meeting", "07:00", "08:00", fixed=True),
        _task("write", "10:00", "11:00"),
        _task("added-later", "15:00", "15:30"),
    ]
    planner_repo.update_task_times.return_value = ["write"]

    result = await service.apply(proposal.id)

    planner_repo.update_task_times.assert_awaited_once_with(
        [TaskTimeUpdate(id="write", start_time="08:00", end_time="09:00")]
    )
    assert result.status == "applied"
    assert result.updated_task_ids == ["write"]
    assert result.skipped_task_ids == ["meeting"]
    assert (await service.get(proposal.id)).status == ProposalStatus.APPLIED


@pytest.mark.asyncio
async def test_apply_skips_tasks_deleted_since_proposal(service, planner_repo):
    proposal = await service.propose(DAY)
    planner_repo.list_tasks.return_value = [_task("meeting", "07:00", "08:00", fixed=True)]
    planner_repo.update_task_times.return_value = []

    result = await service.apply(proposal.id)

    planner_repo.update_task_times.assert_awaited_once_with([])
    assert result.updated_task_ids == []
    assert set(result.skipped_task_ids) == {"meeting", "write"}


@pytest.mark.asyncio
async def test_discard_leaves_live_tasks_alone(service, planner_repo):
    proposal = await service.propose(DAY)

    result = await service.discard(proposal.id)

    assert result.status == "discarded"
    assert result.proposal_id == proposal.id
    assert (await service.get(proposal.id)).status == ProposalStatus.DISCARDED
    planner_repo.update_task_times.assert_not_awaited()


@pytest.mark.asyncio
async def test_processed_proposal_cannot_be_reused(service, planner_repo):
    planner_repo.update_task_times.return_value = ["write"]
    applied = await service.propose(DAY)
    await service.apply(applied.id)
    discarded = await service.propose(DAY)
    await service.discard(discarded.id)

    with pytest.raises(BusinessLogicError):
        await service.apply(applied.id)
    with pytest.raises(BusinessLogicError):
        await service.discard(applied.id)
    with pytest.raises(BusinessLogicError):
        await service.apply(discarded.id)


@pytest.mark.asyncio
async def test_unknown_proposal(service):
    with pytest.raises(NotFoundError):
        await service.get(uuid4())
    with pytest.raises(NotFoundError):
        await service.apply(uuid4())
    with pytest.raises(NotFoundError):
        await service.discard(uuid4())


"""
Optimization proposal workflow.

propose() stages a rearranged plan without touching the live tasks;
apply() writes the proposed times back; discard() drops the proposal.
"""

from __future__ import annotations

from datetime import date
from uuid import UUID

from dayplan.core.exceptions import BusinessLogicError, NotFoundError
from dayplan.core.logger import logger
from dayplan.interfaces.planner_repository import IPlannerRepository
from dayplan.interfaces.proposal_repository import IProposalRepository
from dayplan.models.proposal import ApplyResult, DiscardResult, Proposal, ProposalStatus
from dayplan.models.task import TaskTimeUpdate
from dayplan.services.plan_optimizer import PlanOptimizer


class ProposalService:
    """Stages optimization results and applies or discards them on request."""

    def __init__(
        self,
        planner_repo: IPlannerRepository,
        proposal_repo: IProposalRepository,
        optimizer: PlanOptimizer,
    ):
        self._planner_repo = planner_repo
        self._proposal_repo = proposal_repo
        self._optimizer = optimizer

    async def propose(self, task_date: date) -> Proposal:
        """Optimize the day's current tasks and store the result as pending."""
        tasks = await self._planner_repo.list_tasks(task_date)
        tags = await self._planner_repo.list_tags()
        result = await self._optimizer.optimize(tasks, tags)

        proposal = await self._proposal_repo.create(
            Proposal(
                task_date=task_date,
                summary=result.summary,
                provider=result.provider,
                tasks=result.tasks,
            )
        )
        logger.info(
            f"Created proposal {proposal.id} for {task_date} "
            f"({len(proposal.tasks)} tasks, provider={proposal.provider})"
        )
        return proposal

    async def get(self, proposal_id: UUID) -> Proposal:
        proposal = await self._proposal_repo.get(proposal_id)
        if not proposal:
            raise NotFoundError(f"Proposal {proposal_id} not found")
        return proposal

    async def apply(self, proposal_id: UUID) -> ApplyResult:
        """
        Write the proposal's times onto the live tasks.

        Tasks deleted since the proposal was made are skipped, tasks created
        since are left alone, and fixed tasks are never rewritten.
        """
        proposal = await self._get_pending(proposal_id)

        live = {task.id: task for task in await self._planner_repo.list_tasks(proposal.task_date)}
        updates = [
            TaskTimeUpdate(id=task.id, start_time=task.start_time, end_time=task.end_time)
            for task in proposal.tasks
            if task.id in live and not live[task.id].fixed
        ]
        updated_ids = await self._planner_repo.update_task_times(updates)
        await self._proposal_repo.update_status(proposal_id, ProposalStatus.APPLIED)

        skipped = [task.id for task in proposal.tasks if task.id not in updated_ids]
        logger.info(f"Applied proposal {proposal_id}: {len(updated_ids)} updated, {len(skipped)} skipped")
        return ApplyResult(updated_task_ids=updated_ids, skipped_task_ids=skipped)

    async def discard(self, proposal_id: UUID) -> DiscardResult:
        """Drop a pending proposal. The live tasks are not touched."""
        await self._get_pending(proposal_id)
        await self._proposal_repo.update_status(proposal_id, ProposalStatus.DISCARDED)
        logger.info(f"Discarded proposal {proposal_id}")
        return DiscardResult(proposal_id=proposal_id)

    async def _get_pending(self, proposal_id: UUID) -> Proposal:
        proposal = await self.get(proposal_id)
        if proposal.status != ProposalStatus.PENDING:
            raise BusinessLogicError(f"Proposal already {proposal.status.value}")
        return proposal

"""Plan optimization, proposal and advisor status endpoints."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from dayplan.api.deps import AdvisorProvider, Proposals
from dayplan.core.exceptions import BusinessLogicError, NotFoundError
from dayplan.models.advisor import AdvisorStatus
from dayplan.models.proposal import ApplyResult, DiscardResult, Proposal

router = APIRouter()


@router.post("/optimize", response_model=Proposal, status_code=status.HTTP_201_CREATED)
async def optimize_day(
    service: Proposals,
    task_date: date = Query(..., description="Calendar day (YYYY-MM-DD)"),
):
    """Stage an optimized plan for a day. The live tasks are not changed."""
    return await service.propose(task_date)


@router.get("/proposals/{proposal_id}", response_model=Proposal)
async def get_proposal(proposal_id: UUID, service: Proposals):
    try:
        return await service.get(proposal_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.post("/proposals/{proposal_id}/apply", response_model=ApplyResult)
async def apply_proposal(proposal_id: UUID, service: Proposals):
    """Apply a pending proposal to the live tasks.

    Raises:
        HTTPException: If proposal not found or already processed
    """
    try:
        return await service.apply(proposal_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except BusinessLogicError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)


@router.post("/proposals/{proposal_id}/discard", response_model=DiscardResult)
async def discard_proposal(proposal_id: UUID, service: Proposals):
    """Discard a pending proposal."""
    try:
        return await service.discard(proposal_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except BusinessLogicError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)


@router.get("/ai-status", response_model=AdvisorStatus)
async def get_ai_status(advisor: AdvisorProvider):
    """Report whether an advisor is reachable (for messaging only)."""
    if advisor is None:
        return AdvisorStatus(
            provider="none",
            reachable=False,
            model="",
            endpoint="",
            message="AI advisor is disabled. Optimization uses the local scheduler.",
        )
    return await advisor.get_status()

"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that wire the repositories,
the advisor and the scheduling services from configuration.
"""

from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends

from dayplan.core.config import get_settings
from dayplan.interfaces.advisor_provider import IAdvisorProvider
from dayplan.interfaces.planner_repository import IPlannerRepository
from dayplan.interfaces.proposal_repository import IProposalRepository
from dayplan.models.advisor import AdvisorConfig
from dayplan.models.schedule import SchedulingPolicy
from dayplan.services.plan_optimizer import PlanOptimizer
from dayplan.services.proposal_service import ProposalService


# ===========================================
# Repository Dependencies
# ===========================================


@lru_cache()
def get_planner_repository() -> IPlannerRepository:
    """Get planner repository instance."""
    from dayplan.infrastructure.local.planner_repository import SqlitePlannerRepository
    return SqlitePlannerRepository()


@lru_cache()
def get_proposal_repository() -> IProposalRepository:
    """Get proposal repository instance."""
    from dayplan.infrastructure.local.proposal_repository import InMemoryProposalRepository
    return InMemoryProposalRepository()


# ===========================================
# Provider Dependencies
# ===========================================


@lru_cache()
def get_advisor_provider() -> Optional[IAdvisorProvider]:
    """
    Get advisor provider instance.

    Returns None when ADVISOR_ENABLED is false; optimization then
    always uses the local fallback scheduler.
    """
    settings = get_settings()
    if not settings.ADVISOR_ENABLED:
        return None
    from dayplan.infrastructure.local.litellm_advisor import LiteLLMAdvisorProvider
    return LiteLLMAdvisorProvider(AdvisorConfig.from_settings(settings))


@lru_cache()
def get_scheduling_policy() -> SchedulingPolicy:
    """Get scheduling policy with settings overrides applied."""
    return SchedulingPolicy.from_settings(get_settings())


# ===========================================
# Service Dependencies
# ===========================================


def get_plan_optimizer(
    advisor: Optional[IAdvisorProvider] = Depends(get_advisor_provider),
    policy: SchedulingPolicy = Depends(get_scheduling_policy),
) -> PlanOptimizer:
    return PlanOptimizer.create(advisor, policy)


def get_proposal_service(
    planner_repo: IPlannerRepository = Depends(get_planner_repository),
    proposal_repo: IProposalRepository = Depends(get_proposal_repository),
    optimizer: PlanOptimizer = Depends(get_plan_optimizer),
) -> ProposalService:
    return ProposalService(planner_repo, proposal_repo, optimizer)


# Type aliases for cleaner endpoint signatures
PlannerRepo = Annotated[IPlannerRepository, Depends(get_planner_repository)]
AdvisorProvider = Annotated[Optional[IAdvisorProvider], Depends(get_advisor_provider)]
Policy = Annotated[SchedulingPolicy, Depends(get_scheduling_policy)]
Proposals = Annotated[ProposalService, Depends(get_proposal_service)]

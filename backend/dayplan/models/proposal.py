"""Optimization proposals awaiting explicit apply or discard."""

from datetime import date, datetime
from enum import Enum
from typing import Literal, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from dayplan.models.task import Task


class ProposalStatus(str, Enum):
    """Status of a proposal."""
    PENDING = "pending"
    APPLIED = "applied"
    DISCARDED = "discarded"


class Proposal(BaseModel):
    """A rearranged day plan held apart from the live task set.

    The live tasks only change when the proposal is applied.
    """
    id: UUID = Field(default_factory=uuid4)
    task_date: date
    status: ProposalStatus = ProposalStatus.PENDING
    summary: str
    provider: Literal["advisor", "fallback"]
    tasks: list[Task]
    created_at: datetime = Field(default_factory=datetime.now)


class ApplyResult(BaseModel):
    """Result of applying a proposal."""
    status: str = "applied"
    updated_task_ids: list[str] = Field(default_factory=list)
    skipped_task_ids: list[str] = Field(default_factory=list)


class DiscardResult(BaseModel):
    """Result of discarding a proposal."""
    status: str = "discarded"
    proposal_id: Optional[UUID] = None

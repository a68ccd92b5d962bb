"""In-memory proposal repository implementation."""

from typing import Optional
from uuid import UUID

from dayplan.interfaces.proposal_repository import IProposalRepository
from dayplan.models.proposal import Proposal, ProposalStatus


class InMemoryProposalRepository(IProposalRepository):
    """In-memory implementation of proposal repository.

    Proposals only need to live until the user applies or discards them,
    so they are kept in a dictionary for the lifetime of the process.
    """

    def __init__(self):
        self._proposals: dict[UUID, Proposal] = {}

    async def create(self, proposal: Proposal) -> Proposal:
        """Create a new proposal."""
        self._proposals[proposal.id] = proposal
        return proposal

    async def get(self, proposal_id: UUID) -> Optional[Proposal]:
        """Get a proposal by ID."""
        return self._proposals.get(proposal_id)

    async def update_status(self, proposal_id: UUID, status: ProposalStatus) -> Optional[Proposal]:
        """Update the status of a proposal."""
        proposal = self._proposals.get(proposal_id)
        if proposal:
            proposal.status = status
            self._proposals[proposal_id] = proposal
        return proposal

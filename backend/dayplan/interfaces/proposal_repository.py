"""Interface for proposal repository."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from dayplan.models.proposal import Proposal, ProposalStatus


class IProposalRepository(ABC):
    """Interface for managing optimization proposals."""

    @abstractmethod
    async def create(self, proposal: Proposal) -> Proposal:
        """Create a new proposal.

        Args:
            proposal: The proposal to create

        Returns:
            The created proposal
        """
        pass

    @abstractmethod
    async def get(self, proposal_id: UUID) -> Optional[Proposal]:
        """Get a proposal by ID.

        Args:
            proposal_id: The proposal ID

        Returns:
            The proposal if found, None otherwise
        """
        pass

    @abstractmethod
    async def update_status(self, proposal_id: UUID, status: ProposalStatus) -> Optional[Proposal]:
        """Update the status of a proposal.

        Args:
            proposal_id: The proposal ID
            status: The new status

        Returns:
            The updated proposal if found, None otherwise
        """
        pass

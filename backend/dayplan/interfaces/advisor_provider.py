"""
Advisor provider interface.

Defines the contract for the external capability that suggests a
rearranged schedule. Implementations may fail at any time; callers
must treat every error as "advisor unavailable".
"""

from abc import ABC, abstractmethod

from dayplan.models.advisor import AdvisorStatus, ChatMessage


class IAdvisorProvider(ABC):
    """Abstract interface for advisor providers."""

    @abstractmethod
    async def send_chat_turn(self, messages: list[ChatMessage]) -> str:
        """
        Send one chat turn and return the raw reply text.

        Args:
            messages: System and user messages, in order

        Returns:
            Raw reply text

        Raises:
            AdvisorError: If the endpoint fails or returns nothing
        """
        pass

    @abstractmethod
    async def get_status(self) -> AdvisorStatus:
        """
        Probe whether the advisor is reachable. Never raises.

        Returns:
            Availability status for user-facing messaging
        """
        pass

    @abstractmethod
    def get_model_name(self) -> str:
        """
        Get the human-readable model name.

        Returns:
            Model name string for logging/display
        """
        pass

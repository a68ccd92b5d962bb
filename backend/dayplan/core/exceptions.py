"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class PlannerError(Exception):
    """Base exception for dayplan."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(PlannerError):
    """Resource not found."""

    pass


class AdvisorError(PlannerError):
    """Advisor (LLM) call failed or the advisor is unreachable."""

    pass


class AdvisorResponseError(AdvisorError):
    """Advisor output could not be parsed or does not match the contract."""

    def __init__(self, message: str, raw_output: str):
        super().__init__(message, details={"raw_output": raw_output})
        self.raw_output = raw_output


class BusinessLogicError(PlannerError):
    """Business logic constraint violation."""

    pass

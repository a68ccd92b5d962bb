"""
Advisor capability models: client configuration, chat messages,
the optimization response contract and the availability probe.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

if TYPE_CHECKING:
    from dayplan.core.config import Settings


class AdvisorConfig(BaseModel):
    """Connection options for the advisor endpoint."""

    endpoint: str
    model: str
    timeout_ms: int = Field(60_000, gt=0)
    api_key: Optional[str] = None
    temperature: float = 0.4

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    @classmethod
    def from_settings(cls, settings: "Settings") -> "AdvisorConfig":
        return cls(
            endpoint=settings.ADVISOR_ENDPOINT,
            model=settings.ADVISOR_MODEL,
            timeout_ms=settings.ADVISOR_TIMEOUT_MS,
            api_key=settings.ADVISOR_API_KEY or None,
            temperature=settings.ADVISOR_TEMPERATURE,
        )


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class AdvisorTaskUpdate(BaseModel):
    """One proposed time change. Times are checked later, per task."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    start_time: Optional[str] = Field(None, alias="startTime")
    end_time: Optional[str] = Field(None, alias="endTime")


class AdvisorPlanResponse(BaseModel):
    """
    Top-level reply expected from the advisor:
    {"summary": "...", "tasks": [{"id", "startTime", "endTime"}, ...]}
    """

    model_config = ConfigDict(extra="ignore")

    summary: str
    tasks: list[Any]

    def updates(self) -> list[AdvisorTaskUpdate]:
        """Entries that carry an id; anything else is ignored."""
        result: list[AdvisorTaskUpdate] = []
        for item in self.tasks:
            if not isinstance(item, dict):
                continue
            try:
                result.append(AdvisorTaskUpdate.model_validate(item))
            except ValidationError:
                continue
        return result


class AdvisorStatus(BaseModel):
    """Result of probing the advisor endpoint. Informational only."""

    provider: Literal["ollama", "openai-compatible", "none"]
    reachable: bool
    model: str
    endpoint: str
    model_installed: Optional[bool] = None
    message: str
    error: Optional[str] = None

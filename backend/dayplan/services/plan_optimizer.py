"""
Plan optimization orchestrator.

Strategies are tried in order (advisor first, local fallback last) and
the first one that yields a result wins. Advisor output is never trusted:
fixed tasks are skipped, and each update is checked for well-formed times
and an unchanged duration before it replaces a task's times.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from pydantic import ValidationError

from dayplan.core.exceptions import AdvisorError, AdvisorResponseError
from dayplan.core.logger import logger
from dayplan.interfaces.advisor_provider import IAdvisorProvider
from dayplan.models.advisor import AdvisorPlanResponse, AdvisorTaskUpdate, ChatMessage
from dayplan.models.schedule import OptimizeResult, SchedulingPolicy
from dayplan.models.task import Tag, Task
from dayplan.services.fallback_scheduler import fallback_optimize
from dayplan.utils.time_utils import duration_label, duration_minutes, is_clock_time, to_minutes

RESPONSE_SCHEMA = (
    '{ "summary": "<one sentence describing what changed>", '
    '"tasks": [ { "id": "<task id>", "startTime": "HH:MM", "endTime": "HH:MM" }, ... ] }'
)


@dataclass(frozen=True)
class Ok:
    result: OptimizeResult


@dataclass(frozen=True)
class Unavailable:
    reason: str


StrategyResult = Union[Ok, Unavailable]


# ===========================================
# Prompt building
# ===========================================


def build_plan_description(tasks: list[Task], tags: Optional[Iterable[Tag]] = None) -> str:
    """
    Render the day's tasks as plain text for the advisor.

    Each line carries the task id so updates can be matched back.
    """
    if not tasks:
        return "The day plan is currently empty."

    tag_names = {tag.id: tag.name for tag in tags or []}
    lines = []
    for task in sorted(tasks, key=lambda t: to_minutes(t.start_time)):
        category = tag_names.get(task.tag_id, "Uncategorized") if task.tag_id else "Uncategorized"
        status = "FIXED" if task.fixed else "flexible"
        duration = duration_label(task.start_time, task.end_time)
        notes = f" | Notes: {task.notes}" if task.notes else ""
        lines.append(
            f"  • [{task.start_time}–{task.end_time}] ({duration}) {task.title} — "
            f"{category} — {status}{notes} [id: {task.id}]"
        )
    return f"Day plan ({len(tasks)} tasks):\n" + "\n".join(lines)


def build_optimize_messages(
    tasks: list[Task],
    tags: Optional[Iterable[Tag]],
    policy: SchedulingPolicy,
) -> list[ChatMessage]:
    """System instruction with the response contract, then the plan."""
    system = " ".join(
        [
            "You are a scheduling optimizer. Your job is to return a JSON object — nothing else.",
            f"Schema: {RESPONSE_SCHEMA}",
            "Rules:",
            "1. NEVER change tasks marked as FIXED.",
            "2. Only adjust flexible tasks.",
            "3. Minimize context switching by grouping similar categories together.",
            f"4. Avoid scheduling tasks before {policy.advisor_window_start} "
            f"or after {policy.advisor_window_end}.",
            "5. Ensure no two tasks overlap.",
            "6. Preserve task durations (do not make tasks shorter or longer).",
            "7. Return valid JSON only. No markdown, no explanation outside the JSON.",
        ]
    )
    plan = build_plan_description(tasks, tags)
    return [
        ChatMessage(role="system", content=system),
        ChatMessage(role="user", content=f"{plan}\n\nOptimize the schedule for this day. Return JSON only."),
    ]


# ===========================================
# Response handling
# ===========================================


def extract_json_object(text: str) -> str:
    """Return the outermost {...} span, or the text unchanged if there is none."""
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        return text[start : end + 1]
    return text


def parse_advisor_response(raw: str) -> AdvisorPlanResponse:
    """
    Parse raw advisor text into the response contract.

    Raises:
        AdvisorResponseError: If the text holds no object of the expected shape
    """
    try:
        data = json.loads(extract_json_object(raw))
    except json.JSONDecodeError as e:
        raise AdvisorResponseError(f"Advisor reply is not JSON: {e}", raw_output=raw) from e

    try:
        return AdvisorPlanResponse.model_validate(data)
    except ValidationError as e:
        raise AdvisorResponseError(
            f"Advisor reply has invalid shape: {e.error_count()} error(s)", raw_output=raw
        ) from e


def _accepts_update(task: Task, update: AdvisorTaskUpdate) -> bool:
    if not is_clock_time(update.start_time) or not is_clock_time(update.end_time):
        logger.debug(f"Rejected advisor update for {task.id}: malformed time")
        return False
    if duration_minutes(update.start_time, update.end_time) != task.duration:
        logger.debug(f"Rejected advisor update for {task.id}: duration changed")
        return False
    return True


def apply_advisor_updates(tasks: list[Task], response: AdvisorPlanResponse) -> list[Task]:
    """
    Merge advisor updates into the task snapshot.

    Fixed tasks, tasks without an update and tasks whose update fails
    validation keep their original times. Updates for unknown ids are ignored.
    """
    updates: dict[str, AdvisorTaskUpdate] = {}
    for update in response.updates():
        updates.setdefault(update.id, update)

    result: list[Task] = []
    for task in tasks:
        update = updates.get(task.id)
        if task.fixed or update is None or not _accepts_update(task, update):
            result.append(task)
            continue
        result.append(task.with_times(update.start_time, update.end_time))
    return result


# ===========================================
# Strategies
# ===========================================


class OptimizationStrategy(ABC):
    """One way of producing a rearranged plan."""

    name: str

    @abstractmethod
    async def run(self, tasks: list[Task], tags: list[Tag]) -> StrategyResult:
        pass


class AdvisorStrategy(OptimizationStrategy):
    """Ask the external advisor and validate its reply."""

    name = "advisor"

    def __init__(self, provider: IAdvisorProvider, policy: SchedulingPolicy):
        self._provider = provider
        self._policy = policy

    async def run(self, tasks: list[Task], tags: list[Tag]) -> StrategyResult:
        messages = build_optimize_messages(tasks, tags, self._policy)
        try:
            raw = await self._provider.send_chat_turn(messages)
            response = parse_advisor_response(raw)
        except AdvisorError as e:
            return Unavailable(reason=e.message)
        except Exception as e:
            return Unavailable(reason=f"{type(e).__name__}: {e}")

        return Ok(
            OptimizeResult(
                tasks=apply_advisor_updates(tasks, response),
                summary=response.summary,
                provider="advisor",
            )
        )


class FallbackStrategy(OptimizationStrategy):
    """Deterministic local scheduler. Always succeeds."""

    name = "fallback"

    def __init__(self, policy: SchedulingPolicy):
        self._policy = policy

    async def run(self, tasks: list[Task], tags: list[Tag]) -> StrategyResult:
        return Ok(fallback_optimize(tasks, self._policy))


class PlanOptimizer:
    """Runs optimization strategies in order and returns the first result."""

    def __init__(
        self,
        strategies: list[OptimizationStrategy],
        policy: Optional[SchedulingPolicy] = None,
    ):
        self._strategies = strategies
        self._policy = policy or SchedulingPolicy()

    @classmethod
    def create(
        cls,
        advisor: Optional[IAdvisorProvider],
        policy: Optional[SchedulingPolicy] = None,
    ) -> "PlanOptimizer":
        """Advisor strategy (when an advisor is given) followed by the fallback."""
        policy = policy or SchedulingPolicy()
        strategies: list[OptimizationStrategy] = []
        if advisor is not None:
            strategies.append(AdvisorStrategy(advisor, policy))
        strategies.append(FallbackStrategy(policy))
        return cls(strategies, policy)

    async def optimize(
        self,
        tasks: list[Task],
        tags: Optional[list[Tag]] = None,
    ) -> OptimizeResult:
        """
        Produce a rearranged plan for one day.

        The input is snapshotted first so later edits to the caller's tasks
        cannot leak into the result. Never raises.
        """
        snapshot = [task.model_copy() for task in tasks]
        tag_list = list(tags or [])

        for strategy in self._strategies:
            outcome = await strategy.run(snapshot, tag_list)
            if isinstance(outcome, Ok):
                if strategy.name == "fallback":
                    logger.info(f"Optimized {len(snapshot)} tasks with local fallback")
                return outcome.result
            logger.warning(f"Optimization strategy '{strategy.name}' unavailable: {outcome.reason}")

        return fallback_optimize(snapshot, self._policy)

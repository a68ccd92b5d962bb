"""
End-to-end test for plan optimization against a running advisor.

Requires a local Ollama or OpenAI-compatible runtime configured through
ADVISOR_ENDPOINT / ADVISOR_MODEL.
"""

from datetime import date

import pytest

from dayplan.core.config import get_settings
from dayplan.infrastructure.local.litellm_advisor import LiteLLMAdvisorProvider
from dayplan.models.advisor import AdvisorConfig
from dayplan.models.task import Task
from dayplan.services.plan_optimizer import PlanOptimizer


@pytest.mark.e2e
@pytest.mark.asyncio
async def test_optimize_with_live_advisor():
    """Fixed tasks and durations survive a real advisor round trip."""
    settings = get_settings()
    provider = LiteLLMAdvisorProvider(AdvisorConfig.from_settings(settings))

    status = await provider.get_status()
    if not status.reachable or status.model_installed is False:
        pytest.skip(f"Advisor not reachable: {status.message}")

    day = date.today()
    tasks = [
        Task(id="standup", title="Standup", task_date=day, start_time="09:00", end_time="09:15", fixed=True),
        Task(id="report", title="Write report", task_date=day, start_time="13:00", end_time="14:30"),
        Task(id="errands", title="Errands", task_date=day, start_time="09:00", end_time="09:45"),
    ]

    result = await PlanOptimizer.create(provider).optimize(tasks)

    by_id = {t.id: t for t in result.tasks}
    assert set(by_id) == {"standup", "report", "errands"}
    assert (by_id["standup"].start_time, by_id["standup"].end_time) == ("09:00", "09:15")
    for task in tasks:
        assert by_id[task.id].duration == task.duration
    assert result.summary

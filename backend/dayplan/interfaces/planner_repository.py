"""
Planner repository interface.

Persistence of tags and tasks. The scheduling core only relies on
load/save and time updates; the rest serves the task editing API.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from dayplan.models.task import (
    PlannerState,
    Tag,
    TagCreate,
    Task,
    TaskCreate,
    TaskTimeUpdate,
    TaskUpdate,
)


class IPlannerRepository(ABC):
    """Abstract interface for planner persistence."""

    @abstractmethod
    async def load(self) -> PlannerState:
        """Load all tags and tasks."""
        pass

    @abstractmethod
    async def save(self, state: PlannerState) -> PlannerState:
        """
        Replace all tags and tasks with the given state.

        Returns:
            The state as stored
        """
        pass

    @abstractmethod
    async def list_tasks(self, task_date: date) -> list[Task]:
        """List tasks of one calendar day ordered by start time."""
        pass

    @abstractmethod
    async def get_task(self, task_id: str) -> Optional[Task]:
        """Get a task by ID."""
        pass

    @abstractmethod
    async def create_task(self, task: TaskCreate) -> Task:
        """
        Create a new task.

        Raises:
            BusinessLogicError: If a task with the same id exists
        """
        pass

    @abstractmethod
    async def update_task(self, task_id: str, update: TaskUpdate) -> Task:
        """
        Update a task.

        Raises:
            NotFoundError: If the task doesn't exist
        """
        pass

    @abstractmethod
    async def update_task_times(self, updates: list[TaskTimeUpdate]) -> list[str]:
        """
        Rewrite start/end times of existing tasks in one transaction.

        Returns:
            IDs of the tasks that were updated (unknown IDs are skipped)
        """
        pass

    @abstractmethod
    async def delete_task(self, task_id: str) -> bool:
        """Delete a task. Returns False if not found."""
        pass

    @abstractmethod
    async def list_tags(self) -> list[Tag]:
        """List tags ordered by name."""
        pass

    @abstractmethod
    async def create_tag(self, tag: TagCreate) -> Tag:
        """Create a new tag."""
        pass

    @abstractmethod
    async def delete_tag(self, tag_id: str) -> bool:
        """Delete a tag; its tasks become uncategorized."""
        pass

"""
SQLite implementation of the planner repository.
"""

from __future__ import annotations

from datetime import date
from typing import Optional
from uuid import uuid4

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError

from dayplan.core.exceptions import BusinessLogicError, NotFoundError
from dayplan.interfaces.planner_repository import IPlannerRepository
from dayplan.infrastructure.local.database import TagORM, TaskORM, get_session_factory
from dayplan.models.task import (
    PlannerState,
    Tag,
    TagCreate,
    Task,
    TaskCreate,
    TaskTimeUpdate,
    TaskUpdate,
)


class SqlitePlannerRepository(IPlannerRepository):
    """SQLite implementation of planner repository."""

    def __init__(self, session_factory=None):
        """
        Initialize repository.

        Args:
            session_factory: Optional session factory (for testing)
        """
        self._session_factory = session_factory or get_session_factory()

    def _task_to_model(self, orm: TaskORM) -> Task:
        """Convert ORM object to Pydantic model."""
        return Task(
            id=orm.id,
            title=orm.title,
            task_date=orm.task_date,
            start_time=orm.start_time,
            end_time=orm.end_time,
            tag_id=orm.tag_id,
            notes=orm.notes or "",
            fixed=bool(orm.fixed),
            done=bool(orm.done),
        )

    def _tag_to_model(self, orm: TagORM) -> Tag:
        return Tag(id=orm.id, name=orm.name, color=orm.color)

    def _task_to_orm(self, task: Task | TaskCreate) -> TaskORM:
        return TaskORM(
            id=task.id,
            title=task.title,
            task_date=task.task_date,
            start_time=task.start_time,
            end_time=task.end_time,
            tag_id=task.tag_id,
            notes=task.notes,
            fixed=task.fixed,
            done=task.done,
        )

    async def load(self) -> PlannerState:
        """Load all tags and tasks."""
        async with self._session_factory() as session:
            tags = await session.execute(select(TagORM).order_by(TagORM.name))
            tasks = await session.execute(
                select(TaskORM).order_by(TaskORM.task_date, TaskORM.start_time)
            )
            return PlannerState(
                tags=[self._tag_to_model(orm) for orm in tags.scalars().all()],
                tasks=[self._task_to_model(orm) for orm in tasks.scalars().all()],
            )

    async def save(self, state: PlannerState) -> PlannerState:
        """Replace all tags and tasks in one transaction."""
        async with self._session_factory() as session:
            await session.execute(delete(TaskORM))
            await session.execute(delete(TagORM))
            session.add_all([TagORM(id=t.id, name=t.name, color=t.color) for t in state.tags])
            await session.flush()
            session.add_all([self._task_to_orm(task) for task in state.tasks])
            await session.commit()
        return await self.load()

    async def list_tasks(self, task_date: date) -> list[Task]:
        """List tasks of one day ordered by start time."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(TaskORM)
                .where(TaskORM.task_date == task_date)
                .order_by(TaskORM.start_time)
            )
            return [self._task_to_model(orm) for orm in result.scalars().all()]

    async def get_task(self, task_id: str) -> Optional[Task]:
        """Get a task by ID."""
        async with self._session_factory() as session:
            orm = await session.get(TaskORM, task_id)
            return self._task_to_model(orm) if orm else None

    async def create_task(self, task: TaskCreate) -> Task:
        """Create a new task."""
        async with self._session_factory() as session:
            orm = self._task_to_orm(task)
            session.add(orm)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise BusinessLogicError(f"Task {task.id} already exists") from e
            await session.refresh(orm)
            return self._task_to_model(orm)

    async def update_task(self, task_id: str, update: TaskUpdate) -> Task:
        """Update a task."""
        async with self._session_factory() as session:
            orm = await session.get(TaskORM, task_id)
            if not orm:
                raise NotFoundError(f"Task {task_id} not found")

            update_data = update.model_dump(exclude_unset=True)
            for field, value in update_data.items():
                setattr(orm, field, value)

            await session.commit()
            await session.refresh(orm)
            return self._task_to_model(orm)

    async def update_task_times(self, updates: list[TaskTimeUpdate]) -> list[str]:
        """Rewrite start/end times of existing tasks in one transaction."""
        updated: list[str] = []
        async with self._session_factory() as session:
            for item in updates:
                result = await session.execute(
                    update(TaskORM)
                    .where(TaskORM.id == item.id)
                    .values(start_time=item.start_time, end_time=item.end_time)
                )
                if result.rowcount:
                    updated.append(item.id)
            await session.commit()
        return updated

    async def delete_task(self, task_id: str) -> bool:
        """Delete a task."""
        async with self._session_factory() as session:
            result = await session.execute(delete(TaskORM).where(TaskORM.id == task_id))
            await session.commit()
            return result.rowcount > 0

    async def list_tags(self) -> list[Tag]:
        """List tags ordered by name."""
        async with self._session_factory() as session:
            result = await session.execute(select(TagORM).order_by(TagORM.name))
            return [self._tag_to_model(orm) for orm in result.scalars().all()]

    async def create_tag(self, tag: TagCreate) -> Tag:
        """Create a new tag."""
        async with self._session_factory() as session:
            orm = TagORM(id=str(uuid4()), name=tag.name, color=tag.color)
            session.add(orm)
            await session.commit()
            return self._tag_to_model(orm)

    async def delete_tag(self, tag_id: str) -> bool:
        """Delete a tag; its tasks become uncategorized."""
        async with self._session_factory() as session:
            await session.execute(
                update(TaskORM).where(TaskORM.tag_id == tag_id).values(tag_id=None)
            )
            result = await session.execute(delete(TagORM).where(TagORM.id == tag_id))
            await session.commit()
            return result.rowcount > 0

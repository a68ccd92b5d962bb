"""
Planner state, task, tag and layout API endpoints.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from dayplan.api.deps import PlannerRepo, Policy
from dayplan.core.exceptions import BusinessLogicError, NotFoundError
from dayplan.models.schedule import LayoutResponse, NewTaskSlot
from dayplan.models.task import PlannerState, Tag, TagCreate, Task, TaskCreate, TaskUpdate
from dayplan.services.lane_service import compute_layout, new_task_slot

router = APIRouter()


@router.get("/state", response_model=PlannerState)
async def get_state(repo: PlannerRepo):
    """Load all tags and tasks."""
    return await repo.load()


@router.put("/state", response_model=PlannerState)
async def save_state(state: PlannerState, repo: PlannerRepo):
    """Replace all tags and tasks."""
    return await repo.save(state)


@router.get("/tasks", response_model=list[Task])
async def list_tasks(
    repo: PlannerRepo,
    task_date: date = Query(..., description="Calendar day (YYYY-MM-DD)"),
):
    """List the tasks of one day."""
    return await repo.list_tasks(task_date)


@router.post("/tasks", response_model=Task, status_code=status.HTTP_201_CREATED)
async def create_task(task: TaskCreate, repo: PlannerRepo):
    """Create a new task."""
    try:
        return await repo.create_task(task)
    except BusinessLogicError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)


@router.patch("/tasks/{task_id}", response_model=Task)
async def update_task(task_id: str, update: TaskUpdate, repo: PlannerRepo):
    """Update a task, including times committed by a drag gesture."""
    try:
        return await repo.update_task(task_id, update)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: str, repo: PlannerRepo):
    """Delete a task."""
    deleted = await repo.delete_task(task_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Task {task_id} not found",
        )


@router.post("/tags", response_model=Tag, status_code=status.HTTP_201_CREATED)
async def create_tag(tag: TagCreate, repo: PlannerRepo):
    """Create a new tag."""
    return await repo.create_tag(tag)


@router.delete("/tags/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(tag_id: str, repo: PlannerRepo):
    """Delete a tag. Its tasks become uncategorized."""
    deleted = await repo.delete_tag(tag_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Tag {tag_id} not found",
        )


@router.get("/layout", response_model=LayoutResponse)
async def get_layout(
    repo: PlannerRepo,
    policy: Policy,
    task_date: date = Query(..., description="Calendar day (YYYY-MM-DD)"),
    tag_id: Optional[str] = Query(None, description="Only lay out tasks of this tag"),
):
    """Lane layout of a day's tasks for the timeline."""
    tasks = await repo.list_tasks(task_date)
    return compute_layout(tasks, policy, tag_id=tag_id)


@router.get("/layout/new-task-slot", response_model=NewTaskSlot)
async def get_new_task_slot(
    policy: Policy,
    y: float = Query(..., ge=0, description="Click offset from the timeline top (px)"),
):
    """Default start/end for a task created by clicking the timeline."""
    return new_task_slot(y, policy)

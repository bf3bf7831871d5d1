"""Task API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.api.dependencies import get_current_user, get_task_service
from src.models.task import Task
from src.models.user import User
from src.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from src.services.task_service import TaskService

router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])


def found(task: Task | None) -> Task:
    """Return the task or raise 404; foreign tasks look exactly like missing ones."""
    if task is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


@router.get("", response_model=list[TaskResponse])
def get_tasks(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TaskService, Depends(get_task_service)],
    category: str | None = Query(default=None, description="Only tasks in this category"),
    completed: bool | None = Query(default=None, description="Filter by completion state"),
    overdue: bool | None = Query(default=None, description="Incomplete and past deadline"),
):
    """Get all tasks owned by the current user."""
    return service.list_tasks(
        current_user.id, category=category, completed=completed, overdue=overdue
    )


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Create a new task."""
    return service.create_task(
        current_user.id,
        name=task_data.name,
        deadline=task_data.deadline,
        category=task_data.category,
    )


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Get a single task."""
    return found(service.get_task(current_user.id, task_id))


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: int,
    task_data: TaskUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Update a task. Fields left out of the body keep their current value."""
    fields = task_data.model_dump(exclude_unset=True)
    return found(service.update_task(current_user.id, task_id, fields))


@router.post("/{task_id}/toggle", response_model=TaskResponse)
def toggle_task(
    task_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Flip a task between completed and pending."""
    return found(service.toggle_completion(current_user.id, task_id))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Permanently delete a task."""
    if not service.delete_task(current_user.id, task_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")

"""Task endpoints."""

from datetime import date as Date
from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, ConfigDict, Field

from tasktrack.application.services import TaskService
from tasktrack.domain.entities import Task, TaskStatus
from tasktrack.infrastructure.auth import AuthContext, get_current_user
from tasktrack.presentation.http.dependencies import get_task_service

router = APIRouter(prefix="/tasks", tags=["tasks"])


class CreateTaskRequest(BaseModel):
    """Request to create a task."""

    title: str = Field(..., min_length=1, max_length=500)
    date: Date
    description: str | None = None
    estimated_minutes: int | None = Field(default=None, ge=0)


class UpdateTaskRequest(BaseModel):
    """Partial task update; omitted fields are left unchanged."""

    status: TaskStatus | None = None
    completed: bool | None = None
    title: str | None = Field(default=None, min_length=1, max_length=500)
    description: str | None = None
    estimated_minutes: int | None = Field(default=None, ge=0)
    actual_minutes: int | None = Field(default=None, ge=0)
    started_at: datetime | None = None


class TaskResponse(BaseModel):
    """Task response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    title: str
    description: str | None
    status: TaskStatus
    date: datetime
    completed: bool
    completed_at: datetime | None
    started_at: datetime | None
    estimated_minutes: int | None
    actual_minutes: int | None
    reward: str | None
    created_at: datetime
    updated_at: datetime


def _to_response(task: Task) -> TaskResponse:
    return TaskResponse.model_validate(task)


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    day: Date | None = None,
    auth: AuthContext = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
) -> list[TaskResponse]:
    """List the caller's tasks, optionally for one day."""
    tasks = await service.list_tasks(auth.user_id, day=day)
    return [_to_response(t) for t in tasks]


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    request: CreateTaskRequest,
    auth: AuthContext = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """Create a task for the caller."""
    task = await service.create_task(
        user_id=auth.user_id,
        title=request.title,
        day=request.date,
        description=request.description,
        estimated_minutes=request.estimated_minutes,
    )
    return _to_response(task)


@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: UUID,
    request: UpdateTaskRequest,
    auth: AuthContext = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """Update a task owned by the caller."""
    changes = request.model_dump(exclude_unset=True)
    task = await service.update_task(auth.user_id, task_id, **changes)
    return _to_response(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: UUID,
    auth: AuthContext = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
) -> Response:
    """Delete a task owned by the caller."""
    await service.delete_task(auth.user_id, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

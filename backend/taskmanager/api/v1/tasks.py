"""Task API endpoints — CRUD over the task service.

GET    /api/v1/tasks — list all tasks
GET    /api/v1/tasks/{id} — single task
POST   /api/v1/tasks — create a task (status defaults to Pending)
PUT    /api/v1/tasks/{id} — replace the mutable fields of a task
DELETE /api/v1/tasks/{id} — delete a task

Bodies and responses use camelCase field names (dueDate, assignedTo, ...).
Errors are raised as AppError subclasses and rendered by the handlers
registered in main.create_app.
"""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from taskmanager.api.dependencies import get_task_service
from taskmanager.models.task import Task, TaskInput
from taskmanager.services.task_service import TaskService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["tasks"])

MESSAGE_TASK_CREATED = "Task created successfully"
MESSAGE_TASK_UPDATED = "Task updated successfully"
MESSAGE_TASK_DELETED = "Task deleted successfully"


# === Request / Response Models ===


class TaskRequest(BaseModel):
    """Body for create and update. Unknown fields (id, createdAt, ...) are ignored."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str | None = None
    description: str | None = None
    status: str | None = None
    priority: str | None = None
    due_date: datetime | None = None
    assigned_to: str | None = None

    def to_input(self) -> TaskInput:
        return TaskInput(
            title=self.title or "",
            description=self.description or "",
            status=self.status or "",
            priority=self.priority or "",
            due_date=self.due_date,
            assigned_to=self.assigned_to or "",
        )


class TaskResponse(BaseModel):
    """A task as returned to clients. Empty optional fields are left out."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    description: str | None = None
    status: str
    priority: str | None = None
    due_date: datetime | None = None
    created_at: datetime
    updated_at: datetime
    assigned_to: str | None = None


class TaskListResponse(BaseModel):
    data: list[TaskResponse]
    count: int


class TaskEnvelope(BaseModel):
    data: TaskResponse
    message: str | None = None


class MessageResponse(BaseModel):
    message: str


def _to_response(task: Task) -> TaskResponse:
    return TaskResponse(
        id=task.id,
        title=task.title,
        description=task.description or None,
        status=task.status,
        priority=task.priority or None,
        due_date=task.due_date,
        created_at=task.created_at,
        updated_at=task.updated_at,
        assigned_to=task.assigned_to or None,
    )


# === Endpoints ===


@router.get("/tasks", response_model=TaskListResponse, response_model_exclude_none=True)
def list_tasks(service: TaskService = Depends(get_task_service)) -> TaskListResponse:
    """List all tasks, in no particular order."""
    tasks = service.get_tasks()
    return TaskListResponse(data=[_to_response(t) for t in tasks], count=len(tasks))


@router.get("/tasks/{task_id}", response_model=TaskEnvelope, response_model_exclude_none=True)
def get_task(task_id: str, service: TaskService = Depends(get_task_service)) -> TaskEnvelope:
    """Get a single task by ID."""
    return TaskEnvelope(data=_to_response(service.get_task(task_id)))


@router.post(
    "/tasks",
    response_model=TaskEnvelope,
    response_model_exclude_none=True,
    status_code=201,
)
def create_task(request: TaskRequest, service: TaskService = Depends(get_task_service)) -> TaskEnvelope:
    """Create a new task."""
    task = service.create_task(request.to_input())
    logger.info("Created task %s (status=%s)", task.id, task.status)
    return TaskEnvelope(data=_to_response(task), message=MESSAGE_TASK_CREATED)


@router.put("/tasks/{task_id}", response_model=TaskEnvelope, response_model_exclude_none=True)
def update_task(
    task_id: str,
    request: TaskRequest,
    service: TaskService = Depends(get_task_service),
) -> TaskEnvelope:
    """Replace the mutable fields of an existing task."""
    task = service.update_task(task_id, request.to_input())
    logger.info("Updated task %s (status=%s)", task.id, task.status)
    return TaskEnvelope(data=_to_response(task), message=MESSAGE_TASK_UPDATED)


@router.delete("/tasks/{task_id}", response_model=MessageResponse)
def delete_task(task_id: str, service: TaskService = Depends(get_task_service)) -> MessageResponse:
    """Delete a task."""
    service.delete_task(task_id)
    logger.info("Deleted task %s", task_id)
    return MessageResponse(message=MESSAGE_TASK_DELETED)

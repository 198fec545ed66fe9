"""Task service — business rules on top of the task repository.

Responsibilities:
  - default status (Pending) on create, applied before validation
  - field validation via validate_task
  - id and timestamp assignment
  - merge-on-update: id and created_at always come from the stored task

Errors from the repository (NotFoundError) and validator (ValidationError)
propagate unchanged. Nothing is retried.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from uuid import uuid4

from taskmanager.models.task import STATUS_PENDING, Task, TaskInput, validate_task
from taskmanager.repository.task_repository import TaskRepository


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid4())


def _mutable_fields(task_input: TaskInput) -> dict:
    """Caller-owned fields only, even when a full Task is passed in."""
    return task_input.model_dump(include=set(TaskInput.model_fields))


class TaskService:
    """Create, read, update and delete tasks.

    Usage:
        service = TaskService(InMemoryTaskRepository())
        task = service.create_task(TaskInput(title="Write report"))
        service.update_task(task.id, TaskInput(title="Write report v2", status="Completed"))
        service.delete_task(task.id)

    Args:
        repository: Where tasks are stored.
        clock: Returns the current time. Defaults to UTC now.
        id_factory: Returns a new unique task id. Defaults to a UUID4 string.
    """

    def __init__(
        self,
        repository: TaskRepository,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self.repository = repository
        self._clock = clock
        self._id_factory = id_factory

    def get_tasks(self) -> list[Task]:
        return self.repository.get_all()

    def get_task(self, task_id: str) -> Task:
        return self.repository.get_by_id(task_id)

    def create_task(self, task_input: TaskInput) -> Task:
        """Validate and store a new task.

        An empty status is replaced by Pending before validation, so status
        may be omitted at creation.

        Raises:
            ValidationError: If a field is invalid.
        """
        if not task_input.status:
            task_input = task_input.model_copy(update={"status": STATUS_PENDING})
        validate_task(task_input)

        now = self._clock()
        task = Task(
            **_mutable_fields(task_input),
            id=self._id_factory(),
            created_at=now,
            updated_at=now,
        )
        return self.repository.save(task)

    def update_task(self, task_id: str, task_input: TaskInput) -> Task:
        """Replace the mutable fields of an existing task.

        Unlike create, an empty status is rejected here.

        Raises:
            NotFoundError: If no task has this id, including when it is
                deleted between the fetch and the write.
            ValidationError: If a field is invalid.
        """
        existing = self.repository.get_by_id(task_id)
        validate_task(task_input)

        merged = Task(
            **_mutable_fields(task_input),
            id=existing.id,
            created_at=existing.created_at,
            updated_at=max(self._clock(), existing.updated_at),
        )
        return self.repository.update(task_id, merged)

    def delete_task(self, task_id: str) -> None:
        self.repository.delete(task_id)

"""Task models and field validation.

TaskInput holds the caller-supplied fields; Task adds the system-managed ones
(id, created_at, updated_at). Empty strings mean "not set" for the optional
text fields.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from taskmanager.errors import ValidationError

STATUS_PENDING = "Pending"
STATUS_IN_PROGRESS = "InProgress"
STATUS_COMPLETED = "Completed"
STATUS_CANCELLED = "Cancelled"

PRIORITY_LOW = "Low"
PRIORITY_MEDIUM = "Medium"
PRIORITY_HIGH = "High"

VALID_STATUSES = frozenset({STATUS_PENDING, STATUS_IN_PROGRESS, STATUS_COMPLETED, STATUS_CANCELLED})
VALID_PRIORITIES = frozenset({PRIORITY_LOW, PRIORITY_MEDIUM, PRIORITY_HIGH})

# Validation messages
TITLE_REQUIRED = "title is required"
STATUS_REQUIRED = "status is required"
INVALID_STATUS = "invalid status value"
INVALID_PRIORITY = "invalid priority value"


class TaskInput(BaseModel):
    """Mutable task fields as supplied by a caller on create or update."""

    title: str = ""
    description: str = ""
    status: str = ""  # "Pending" | "InProgress" | "Completed" | "Cancelled"
    priority: str = ""  # "Low" | "Medium" | "High" | "" (unset)
    due_date: datetime | None = None
    assigned_to: str = ""

    def is_valid_status(self) -> bool:
        return self.status in VALID_STATUSES

    def is_valid_priority(self) -> bool:
        """Priority is optional, so an empty value is valid."""
        return self.priority == "" or self.priority in VALID_PRIORITIES


class Task(TaskInput):
    """A persisted task. Only the service creates these."""

    id: str
    created_at: datetime
    updated_at: datetime


def validate_task(task: TaskInput) -> None:
    """Check task fields, reporting the first failure only.

    Order: title presence, status presence, status validity, priority validity.

    Raises:
        ValidationError: naming the offending field.
    """
    if not task.title:
        raise ValidationError("title", TITLE_REQUIRED)
    if not task.status:
        raise ValidationError("status", STATUS_REQUIRED)
    if not task.is_valid_status():
        raise ValidationError("status", INVALID_STATUS)
    if not task.is_valid_priority():
        raise ValidationError("priority", INVALID_PRIORITY)

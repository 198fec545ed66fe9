"""Health check endpoint.

Checks: task repository reachable (reports the stored task count).
"""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from taskmanager.api.dependencies import get_task_service
from taskmanager.services.task_service import TaskService

router = APIRouter()

VERSION = "0.1.0"


class HealthStatus(BaseModel):
    status: str  # "ok" | "error"
    version: str
    checks: dict[str, dict]
    timestamp: datetime


@router.get("/health", response_model=HealthStatus)
def health_check(service: TaskService = Depends(get_task_service)) -> HealthStatus:
    """Report service status and a per-dependency breakdown."""
    checks: dict[str, dict] = {}
    try:
        task_count = len(service.get_tasks())
        checks["repository"] = {"status": "ok", "detail": f"{task_count} tasks"}
    except Exception as e:
        checks["repository"] = {"status": "error", "detail": str(e)}

    status = "ok" if all(c["status"] == "ok" for c in checks.values()) else "error"
    return HealthStatus(
        status=status,
        version=VERSION,
        checks=checks,
        timestamp=datetime.now(timezone.utc),
    )

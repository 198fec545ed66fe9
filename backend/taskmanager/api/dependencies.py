"""FastAPI dependencies shared by the routers."""

from __future__ import annotations

from fastapi import Request

from taskmanager.services.task_service import TaskService


def get_task_service(request: Request) -> TaskService:
    """Return the TaskService the app was built with (see main.create_app)."""
    return request.app.state.task_service

"""Shared test fixtures for Task Manager backend tests."""

import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

# Ensure backend is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from fastapi.testclient import TestClient

from taskmanager.main import create_app
from taskmanager.repository.task_repository import InMemoryTaskRepository
from taskmanager.services.task_service import TaskService

T0 = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


class StepClock:
    """Deterministic clock: each call returns a time one step later."""

    def __init__(self, start: datetime = T0, step: timedelta = timedelta(seconds=1)) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now += self.step
        return current


@pytest.fixture
def repository():
    return InMemoryTaskRepository()


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def service(repository, clock):
    """TaskService over an empty repository with a stepping clock."""
    return TaskService(repository, clock=clock)


@pytest.fixture
def client(service):
    """TestClient for a full app wired to the service fixture."""
    return TestClient(create_app(service))

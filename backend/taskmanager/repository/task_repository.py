"""Task repository — in-memory store keyed by task id.

The repository knows nothing about validation or timestamps; it is a thin,
consistent key-value layer. Every value going in or out is copied, so callers
never hold a reference into the store.

Locking: reads share a ReadWriteLock, writes hold it exclusively.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager

from taskmanager.errors import NotFoundError
from taskmanager.models.task import Task

TASK_RESOURCE = "Task"


class ReadWriteLock:
    """Many concurrent readers or one writer.

    A waiting writer blocks new readers so a steady stream of reads cannot
    starve writes.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read_locked(self):
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write_locked(self):
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class TaskRepository(ABC):
    """Storage interface the task service depends on."""

    @abstractmethod
    def get_all(self) -> list[Task]:
        """Return a snapshot of all tasks, in no particular order."""

    @abstractmethod
    def get_by_id(self, task_id: str) -> Task:
        """Return the task, or raise NotFoundError."""

    @abstractmethod
    def save(self, task: Task) -> Task:
        """Insert or overwrite the entry at task.id."""

    @abstractmethod
    def update(self, task_id: str, task: Task) -> Task:
        """Overwrite an existing entry, or raise NotFoundError."""

    @abstractmethod
    def delete(self, task_id: str) -> None:
        """Remove an existing entry, or raise NotFoundError."""


class InMemoryTaskRepository(TaskRepository):
    """Dict-backed repository, safe for concurrent threads."""

    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}
        self._lock = ReadWriteLock()

    def get_all(self) -> list[Task]:
        with self._lock.read_locked():
            return [task.model_copy() for task in self._tasks.values()]

    def get_by_id(self, task_id: str) -> Task:
        with self._lock.read_locked():
            task = self._tasks.get(task_id)
            if task is None:
                raise NotFoundError(TASK_RESOURCE)
            return task.model_copy()

    def save(self, task: Task) -> Task:
        stored = task.model_copy()
        with self._lock.write_locked():
            self._tasks[stored.id] = stored
        return stored.model_copy()

    def update(self, task_id: str, task: Task) -> Task:
        stored = task.model_copy(update={"id": task_id})
        with self._lock.write_locked():
            if task_id not in self._tasks:
                raise NotFoundError(TASK_RESOURCE)
            self._tasks[task_id] = stored
        return stored.model_copy()

    def delete(self, task_id: str) -> None:
        with self._lock.write_locked():
            if task_id not in self._tasks:
                raise NotFoundError(TASK_RESOURCE)
            del self._tasks[task_id]

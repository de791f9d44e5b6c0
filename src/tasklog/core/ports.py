# src/tasklog/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The controller depends on Protocols instead of concrete implementations.
This keeps storage swappable and makes testing easier.
"""

from collections.abc import Callable
from typing import Protocol

from ..tasks.task_models import Task

TaskList = tuple[Task, ...]
TaskListObserver = Callable[[TaskList], None]


class TaskRepo(Protocol):
    """Durable CRUD over the task table (see tasks.task_store.TaskStore)."""

    async def list_all(self) -> list[Task]: ...
    async def insert(self, description: str) -> int: ...
    async def update(self, task: Task) -> None: ...
    async def delete_one(self, task_id: int) -> None: ...
    async def delete_all(self) -> None: ...

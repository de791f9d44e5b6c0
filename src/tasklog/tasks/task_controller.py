# src/tasklog/tasks/task_controller.py

"""
Task controller.

Bridges the task store to UI observers:
- turns user intents (add/edit/toggle/delete) into store calls,
- after every successful mutation re-reads the full list and republishes it.

There is no optimistic or incremental update. Store failures (StorageError)
propagate to the caller unchanged and nothing is republished for them.

Mutations are serialized: each "store call + refresh" pair runs under one
asyncio.Lock, so a second intent issued while the first is in flight waits
instead of interleaving with it.
"""

from __future__ import annotations

import asyncio
import logging

from ..core.observable import Observable
from ..core.ports import TaskList, TaskListObserver, TaskRepo
from .task_models import Task

logger = logging.getLogger(__name__)


class TaskController:
    def __init__(self, repo: TaskRepo) -> None:
        self._repo = repo
        self._tasks: Observable[TaskList] = Observable(())
        self._lock = asyncio.Lock()

    @property
    def tasks(self) -> TaskList:
        """Current snapshot, as last published."""
        return self._tasks.value

    def subscribe(self, callback: TaskListObserver, *, replay: bool = True):
        """Register a list observer; returns an unsubscribe function."""
        return self._tasks.subscribe(callback, replay=replay)

    async def refresh(self) -> TaskList:
        """Re-read every task from storage and publish the result."""
        async with self._lock:
            return await self._refresh()

    async def _refresh(self) -> TaskList:
        snapshot = tuple(await self._repo.list_all())
        notified = self._tasks.publish(snapshot)
        logger.debug("Task list published size=%s subscribers=%s", len(snapshot), notified)
        return snapshot

    async def add_task(self, description: str) -> bool:
        """Insert a task; empty descriptions are ignored (returns False)."""
        if not description:
            logger.debug("add_task ignored: empty description")
            return False
        async with self._lock:
            await self._repo.insert(description)
            await self._refresh()
        return True

    async def edit_task(self, task: Task, new_description: str) -> bool:
        """Change the description, keeping completion; blank text is ignored."""
        if not new_description or not new_description.strip():
            logger.debug("edit_task ignored: blank description id=%s", task.id)
            return False
        async with self._lock:
            await self._repo.update(task.with_description(new_description))
            await self._refresh()
        return True

    async def toggle_task_completion(self, task: Task) -> None:
        async with self._lock:
            await self._repo.update(task.toggled())
            await self._refresh()

    async def delete_task(self, task: Task) -> None:
        async with self._lock:
            await self._repo.delete_one(task.id)
            await self._refresh()

    async def delete_all_tasks(self) -> None:
        async with self._lock:
            await self._repo.delete_all()
            await self._refresh()

# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklog.core.state import AppState
from tasklog.tasks.task_controller import TaskController
from tasklog.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    data_dir = tmp_path / "data"
    return SimpleNamespace(
        app_name="tasklog-test",
        log_level="DEBUG",
        console_enabled=False,
        data_dir=data_dir,
        tasks_db_path=data_dir / "task_db.sqlite3",
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> Iterator[TaskStore]:
    """Real SQLite store: its correctness is part of what we want to test."""
    s = TaskStore(settings.tasks_db_path)
    yield s
    s.close()


@pytest.fixture()
def controller(store: TaskStore) -> TaskController:
    return TaskController(store)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, controller: TaskController) -> AppState:
    return AppState(settings=settings, task_store=store, controller=controller)

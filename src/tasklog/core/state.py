# src/tasklog/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_controller import TaskController
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    """
    Everything the running app holds, built once by the composition root
    (cli/bootstrap.py) and passed down explicitly.

    The store is owned here: the entry point closes it on shutdown.
    """

    # Settings object (config.Settings, or a SimpleNamespace in tests).
    settings: Any

    task_store: TaskStore
    controller: TaskController

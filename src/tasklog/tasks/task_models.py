# src/tasklog/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Task:
    """
    A single to-do item.

    Instances are immutable snapshots: the id is assigned by storage on insert
    and never changes. Edits produce a new snapshot with the same id.
    """

    id: int
    description: str
    is_completed: bool = False

    def with_description(self, description: str) -> Task:
        return replace(self, description=description)

    def toggled(self) -> Task:
        return replace(self, is_completed=not self.is_completed)

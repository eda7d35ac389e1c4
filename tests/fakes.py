# tests/fakes.py

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import replace
from typing import Any

from todo_list.core.errors import StoreError
from todo_list.tasks.task_models import Task, TaskFilter


class FakeTaskRepo:
    """
    In-memory TaskRepo.

    - Keeps insertion order
    - Records every write for assertions
    - Hands out copies so callers cannot mutate stored tasks
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self.tasks: dict[str, Task] = {t.id: t for t in tasks or []}
        self.writes: list[tuple[str, Any]] = []

    def find_one(self, flt: TaskFilter) -> Task | None:
        for t in self.tasks.values():
            if flt.matches(t):
                return replace(t)
        return None

    def find_many(self, flt: TaskFilter) -> Iterator[Task]:
        for t in list(self.tasks.values()):
            if flt.matches(t):
                yield replace(t)

    def insert_one(self, task: Task) -> None:
        self.writes.append(("insert", task.id))
        self.tasks[task.id] = replace(task)

    def update_fields(self, flt: TaskFilter, values: dict[str, Any]) -> None:
        self.writes.append(("update", dict(values)))
        for task_id, t in self.tasks.items():
            if flt.matches(t):
                self.tasks[task_id] = replace(t, **values)
                return

    def delete_one(self, flt: TaskFilter) -> None:
        self.writes.append(("delete", flt.id))
        for task_id, t in list(self.tasks.items()):
            if flt.matches(t):
                del self.tasks[task_id]
                return


class BrokenWritesRepo(FakeTaskRepo):
    """Reads work, every write fails like a lost store connection."""

    def insert_one(self, task: Task) -> None:
        raise StoreError("insert failed: connection lost")

    def update_fields(self, flt: TaskFilter, values: dict[str, Any]) -> None:
        raise StoreError("update failed: connection lost")

    def delete_one(self, flt: TaskFilter) -> None:
        raise StoreError("delete failed: connection lost")

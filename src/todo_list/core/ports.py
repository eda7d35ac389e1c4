# src/todo_list/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The engine depends on a Protocol instead of the concrete SQLite store.
This keeps storage swappable and makes testing easier.
"""

from collections.abc import Iterator
from typing import Any, Protocol

from ..tasks.task_models import Task, TaskFilter


class TaskRepo(Protocol):
    """
    Document-style task collection.

    All methods may raise StoreError. Nothing here is atomic across calls.
    """

    def find_one(self, flt: TaskFilter) -> Task | None: ...

    # Lazy; storage order is not part of the contract.
    def find_many(self, flt: TaskFilter) -> Iterator[Task]: ...

    def insert_one(self, task: Task) -> None: ...

    # Partial update: only the named fields change (title, active_at, status).
    def update_fields(self, flt: TaskFilter, values: dict[str, Any]) -> None: ...

    def delete_one(self, flt: TaskFilter) -> None: ...

# src/todo_list/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

TITLE_MAX_LEN = 200
DATE_FORMAT = "%Y-%m-%d"


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Notes:
    - new tasks are always ACTIVE
    - DONE is terminal: nothing moves a task back to ACTIVE
    """

    ACTIVE = "active"
    DONE = "done"

    @classmethod
    def from_db(cls, raw: str | None) -> TaskStatus:
        if not raw:
            return cls.ACTIVE
        try:
            return cls(raw)
        except ValueError:
            return cls.ACTIVE


@dataclass(slots=True)
class Task:
    id: str
    title: str
    active_at: str  # YYYY-MM-DD
    status: TaskStatus

    def to_json(self) -> dict[str, Any]:
        # The id is only exposed as a path parameter.
        return {
            "title": self.title,
            "activeAt": self.active_at,
            "status": self.status.value,
        }


@dataclass(slots=True, frozen=True)
class TaskInput:
    """Caller-supplied fields for create/update. Everything else is ignored."""

    title: str
    active_at: str


@dataclass(slots=True, frozen=True)
class TaskFilter:
    """
    Structured store filter. Set fields are ANDed; an empty filter matches everything.

    active_at_lte compares YYYY-MM-DD strings, which orders like the dates
    because the format is fixed-width and zero-padded.
    """

    id: str | None = None
    title: str | None = None
    active_at: str | None = None
    active_at_lte: str | None = None
    status: str | None = None

    def matches(self, task: Task) -> bool:
        if self.id is not None and task.id != self.id:
            return False
        if self.title is not None and task.title != self.title:
            return False
        if self.active_at is not None and task.active_at != self.active_at:
            return False
        if self.active_at_lte is not None and not task.active_at <= self.active_at_lte:
            return False
        if self.status is not None and task.status.value != self.status:
            return False
        return True

# src/todo_list/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_service import TaskService
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Settings object (config.Settings or a test stand-in).
    settings: object

    task_store: TaskStore
    service: TaskService

# tests/conftest.py

from __future__ import annotations

from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_list.tasks.task_service import TaskService
from todo_list.tasks.task_store import TaskStore

from .fakes import FakeTaskRepo

# A Wednesday. 2024-06-01/02 is the weekend before it.
TODAY = date(2024, 6, 5)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and AppState.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="todo-list-test",
        log_level="DEBUG",
        log_to_file=False,
        http_host="127.0.0.1",
        http_port=0,
        data_dir=tmp_path / "data",
        tasks_db_path=tmp_path / "data" / "tasks.sqlite3",
        tasks_collection="tasks",
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.tasks_db_path, collection=settings.tasks_collection)


@pytest.fixture()
def service(store: TaskStore) -> TaskService:
    """
    Engine over a real SQLite store with a frozen clock.

    NOTE: the store is real on purpose: filtering by date and status happens in SQL.
    """
    return TaskService(store, today=lambda: TODAY)


@pytest.fixture()
def fake_repo() -> FakeTaskRepo:
    return FakeTaskRepo()

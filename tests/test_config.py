# tests/test_config.py

from __future__ import annotations

import dataclasses
import logging
import runpy
from pathlib import Path

import pytest

from todo_list.cli.bootstrap import create_initial_state
from todo_list.config import Settings
from todo_list.logging_setup import setup_logging

ROOT = Path(__file__).resolve().parents[1]


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("TODO_APP_NAME", "TODO_HTTP_PORT", "TODO_DATA_DIR", "TODO_TASKS_DB_PATH", "TODO_TASKS_COLLECTION"):
        monkeypatch.delenv(name, raising=False)

    s = Settings.from_env()
    assert s.app_name == "todo-list"
    assert s.http_port == 8080
    assert s.tasks_db_path == Path(".local/todo-list") / "tasks.sqlite3"
    assert s.tasks_collection == "tasks"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TODO_HTTP_PORT", "9090")
    monkeypatch.setenv("TODO_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("TODO_TASKS_DB_PATH", raising=False)
    monkeypatch.setenv("TODO_LOG_TO_FILE", "no")

    s = Settings.from_env()
    assert s.http_port == 9090
    assert s.tasks_db_path == tmp_path / "tasks.sqlite3"
    assert s.log_to_file is False


def test_malformed_port_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TODO_HTTP_PORT", "eighty")
    assert Settings.from_env().http_port == 8080


def test_every_setting_is_documented() -> None:
    documented = runpy.run_path(str(ROOT / "config.example.py"))["ENV_VARS"]
    fields = {f.name for f in dataclasses.fields(Settings)}
    assert {f"TODO_{name.upper()}" for name in fields} == set(documented)


def test_bootstrap_wires_store_and_service(settings) -> None:
    state = create_initial_state(settings=settings)

    assert settings.tasks_db_path.exists()
    assert state.service.list_all_tasks() == []
    assert state.task_store.count_tasks() == 0


def test_setup_logging_writes_file(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved = list(root.handlers), root.level
    try:
        setup_logging(log_dir=tmp_path)
        logging.getLogger("todo_list.test").info("hello")
        for h in root.handlers:
            h.flush()
        assert "hello" in (tmp_path / "todo-list.log").read_text("utf-8")
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved[0]:
            root.addHandler(h)
        root.setLevel(saved[1])
        logging.captureWarnings(False)

# src/todo_list/tasks/task_service.py

from __future__ import annotations

"""
Task lifecycle & query engine.

Validates and executes task operations against an injected TaskRepo:
- create (uniqueness of title + activeAt, status forced to active)
- update (title/activeAt only)
- delete
- mark done (one-way, idempotent)
- list by status (date visibility, weekend marker, newest first)
- list all (oldest first)

The engine holds no state besides the repo handle and the clock. Lookups and
the writes that follow them are separate store calls, so two concurrent
callers can both pass a duplicate/existence check before either writes.
"""

import logging
import re
import uuid
from collections.abc import Callable
from dataclasses import replace
from datetime import date, datetime

from ..core.errors import ConflictError, InternalError, NotFoundError, StoreError, ValidationError
from ..core.ports import TaskRepo
from .task_models import DATE_FORMAT, TITLE_MAX_LEN, Task, TaskFilter, TaskInput, TaskStatus

logger = logging.getLogger(__name__)

WEEKEND_MARKER = "WEEKEND — "

_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_ID_RE = re.compile(r"[0-9a-fA-F]{32}")


def parse_active_at(raw: str) -> date:
    """Parse a strict YYYY-MM-DD string. Raises ValueError otherwise."""
    if not isinstance(raw, str) or not _DATE_RE.fullmatch(raw):
        raise ValueError(f"not a YYYY-MM-DD date: {raw!r}")
    return datetime.strptime(raw, DATE_FORMAT).date()


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5  # Saturday=5, Sunday=6


def new_task_id() -> str:
    return uuid.uuid4().hex


class TaskService:
    """
    Executes task operations.

    Example:
        >>> service = TaskService(TaskStore("tasks.sqlite3"))
        >>> service.create_task(TaskInput(title="Pay rent", active_at="2024-06-01"))
        >>> service.list_tasks_by_status("active")
    """

    def __init__(self, repo: TaskRepo, *, today: Callable[[], date] = date.today) -> None:
        self._repo = repo
        self._today = today

    # ---- validation helpers ----

    @staticmethod
    def _validate_input(data: TaskInput) -> None:
        if len(data.title) > TITLE_MAX_LEN:
            logger.info("Rejected task: title is too long (%d chars)", len(data.title))
            raise ValidationError("title too long")
        try:
            parse_active_at(data.active_at)
        except ValueError:
            logger.info("Rejected task: invalid activeAt %r", data.active_at)
            raise ValidationError("invalid activeAt") from None

    @staticmethod
    def _parse_id(raw: str) -> str:
        if not isinstance(raw, str) or not _ID_RE.fullmatch(raw):
            logger.info("Rejected task id %r", raw)
            raise ValidationError("invalid id")
        return raw.lower()

    def _require(self, task_id: str) -> TaskFilter:
        flt = TaskFilter(id=task_id)
        if self._repo.find_one(flt) is None:
            logger.info("Task not found id=%s", task_id)
            raise NotFoundError("task not found")
        return flt

    # ---- operations ----

    def create_task(self, data: TaskInput) -> Task:
        """
        Create a task with a fresh id and status=active.

        Raises:
            ValidationError: title too long or activeAt malformed.
            ConflictError: a task with the same title and activeAt exists.
            StoreError: the store failed.
        """
        self._validate_input(data)

        task = Task(
            id=new_task_id(),
            title=data.title,
            active_at=data.active_at,
            status=TaskStatus.ACTIVE,
        )

        if self._repo.find_one(TaskFilter(title=task.title, active_at=task.active_at)) is not None:
            logger.info("Task with same title and activeAt already exists activeAt=%s", task.active_at)
            raise ConflictError("duplicate title+activeAt")

        try:
            self._repo.insert_one(task)
        except StoreError:
            logger.exception("failed at insert_one")
            raise

        logger.info("Task created id=%s activeAt=%s", task.id, task.active_at)
        return task

    def update_task(self, task_id: str, data: TaskInput) -> None:
        """Replace title and activeAt of an existing task. Status and id never change."""
        self._validate_input(data)
        flt = self._require(self._parse_id(task_id))

        try:
            self._repo.update_fields(flt, {"title": data.title, "active_at": data.active_at})
        except StoreError:
            logger.exception("failed at update_fields id=%s", flt.id)
            raise

        logger.info("Task updated id=%s activeAt=%s", flt.id, data.active_at)

    def delete_task(self, task_id: str) -> None:
        flt = self._require(self._parse_id(task_id))

        try:
            self._repo.delete_one(flt)
        except StoreError:
            logger.exception("failed at delete_one id=%s", flt.id)
            raise

        logger.info("Task deleted id=%s", flt.id)

    def mark_task_done(self, task_id: str) -> None:
        """Set status=done. Marking an already done task again is a no-op success."""
        flt = self._require(self._parse_id(task_id))

        try:
            self._repo.update_fields(flt, {"status": TaskStatus.DONE})
        except StoreError:
            logger.exception("failed at update_fields id=%s", flt.id)
            raise

        logger.info("Task marked done id=%s", flt.id)

    def list_tasks_by_status(self, status: str = TaskStatus.ACTIVE) -> list[Task]:
        """
        List tasks with the given status, newest activeAt first.

        For "active" only tasks with activeAt <= today are returned. Tasks that
        fall on a weekend get WEEKEND_MARKER prepended to the returned title;
        the stored title is left untouched.

        Raises:
            InternalError: a stored activeAt is not a valid date.
            StoreError: the store failed.
        """
        if status == TaskStatus.ACTIVE:
            today = self._today().strftime(DATE_FORMAT)
            flt = TaskFilter(status=TaskStatus.ACTIVE.value, active_at_lte=today)
        else:
            flt = TaskFilter(status=status)

        tasks: list[Task] = []
        for task in self._repo.find_many(flt):
            try:
                day = parse_active_at(task.active_at)
            except ValueError as e:
                logger.error("failed at parse_active_at id=%s; error: %s", task.id, e)
                raise InternalError(f"task {task.id} has invalid activeAt {task.active_at!r}") from e

            if is_weekend(day):
                task = replace(task, title=WEEKEND_MARKER + task.title)
            tasks.append(task)

        # Ties broken by id so repeated calls keep the same order.
        tasks.sort(key=lambda t: (t.active_at, t.id), reverse=True)
        return tasks

    def list_all_tasks(self) -> list[Task]:
        """
        Every task, oldest activeAt first, without weekend marker.

        NOTE: ascending here vs descending in list_tasks_by_status; both orders
        are observed by clients, keep them as they are.
        """
        tasks = list(self._repo.find_many(TaskFilter()))
        tasks.sort(key=lambda t: (t.active_at, t.id))
        return tasks

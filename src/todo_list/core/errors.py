# src/todo_list/core/errors.py

from __future__ import annotations

"""
Error types raised by the task engine and the store adapter.

Each error carries the HTTP status the transport answers with, so the API
layer maps all of them through a single exception handler.
"""


class TaskError(Exception):
    """Base class for task-related errors."""

    http_status = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TaskError):
    """Malformed input: title too long, bad date, bad id."""

    http_status = 400


class NotFoundError(TaskError):
    """No task with the given id."""

    http_status = 404


class ConflictError(TaskError):
    """A task with the same title and activeAt already exists."""

    http_status = 409


class StoreError(TaskError):
    """The underlying store failed."""


class InternalError(TaskError):
    """Stored data violates an invariant (e.g. unparsable activeAt)."""

# src/todo_list/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import re
import sqlite3
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from ..core.errors import StoreError
from .task_models import Task, TaskFilter, TaskStatus

logger = logging.getLogger(__name__)

_IDENT_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Task field -> document column. The id is persisted as "_id".
_COLUMNS = {
    "id": "_id",
    "title": "title",
    "active_at": "activeAt",
    "status": "status",
}
_UPDATABLE = frozenset({"title", "active_at", "status"})


class TaskStore:
    """
    SQLite task collection.

    Each row is one task document. The schema is migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    No UNIQUE constraint on (title, activeAt): uniqueness is checked only when
    a task is created, and updates may produce duplicates.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3", *, collection: str = "tasks") -> None:
        if not _IDENT_RE.match(collection):
            raise ValueError(f"invalid collection name: {collection!r}")
        self._db_path = Path(db_path)
        self._table = collection
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        try:
            total = self.count_tasks()
        except StoreError:
            total = -1
        logger.info("TaskStore ready db=%s collection=%s total=%s", self._db_path, self._table, total)

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        t = self._table
        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            raise StoreError(f"cannot open {self._db_path}: {e}") from e
        try:
            cur = conn.cursor()

            cur.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {t} (
                    _id TEXT PRIMARY KEY,
                    title TEXT NOT NULL,
                    activeAt TEXT NOT NULL,
                    status TEXT NOT NULL DEFAULT 'active'
                )
                """
            )

            # Migrations (safe): add missing columns.
            cur.execute(f"PRAGMA table_info({t})")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE {t} ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("title", "TEXT NOT NULL DEFAULT ''")
            add_col("activeAt", "TEXT NOT NULL DEFAULT ''")
            add_col("status", "TEXT NOT NULL DEFAULT 'active'")

            cur.execute(f"CREATE INDEX IF NOT EXISTS idx_{t}_title_active ON {t}(title, activeAt)")
            cur.execute(f"CREATE INDEX IF NOT EXISTS idx_{t}_status_active ON {t}(status, activeAt)")

            conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"schema setup failed: {e}") from e
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=str(row["_id"]),
            title=str(row["title"] or ""),
            active_at=str(row["activeAt"] or ""),
            status=TaskStatus.from_db(row["status"]),
        )

    @staticmethod
    def _where(flt: TaskFilter) -> tuple[str, list[Any]]:
        clauses: list[str] = []
        params: list[Any] = []

        if flt.id is not None:
            clauses.append("_id = ?")
            params.append(flt.id)
        if flt.title is not None:
            clauses.append("title = ?")
            params.append(flt.title)
        if flt.active_at is not None:
            clauses.append("activeAt = ?")
            params.append(flt.active_at)
        if flt.active_at_lte is not None:
            clauses.append("activeAt <= ?")
            params.append(flt.active_at_lte)
        if flt.status is not None:
            clauses.append("status = ?")
            params.append(flt.status)

        if not clauses:
            return "", params
        return " WHERE " + " AND ".join(clauses), params

    # ---- public API ----

    def count_tasks(self) -> int:
        try:
            conn = self._get_conn()
            try:
                (n,) = conn.execute(f"SELECT COUNT(*) FROM {self._table}").fetchone()
                return int(n)
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreError(f"count failed: {e}") from e

    def find_one(self, flt: TaskFilter) -> Task | None:
        where, params = self._where(flt)
        try:
            conn = self._get_conn()
            try:
                row = conn.execute(
                    f"SELECT * FROM {self._table}{where} ORDER BY rowid LIMIT 1", params
                ).fetchone()
                return self._row_to_task(row) if row else None
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreError(f"find failed: {e}") from e

    def find_many(self, flt: TaskFilter) -> Iterator[Task]:
        """
        Lazily iterate over matching tasks.

        The connection stays open until the iterator is exhausted or closed.
        """
        where, params = self._where(flt)
        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            raise StoreError(f"find failed: {e}") from e
        try:
            cur = conn.execute(f"SELECT * FROM {self._table}{where} ORDER BY rowid", params)
        except sqlite3.Error as e:
            conn.close()
            raise StoreError(f"find failed: {e}") from e
        return self._iter_rows(conn, cur)

    def _iter_rows(self, conn: sqlite3.Connection, cur: sqlite3.Cursor) -> Iterator[Task]:
        try:
            for row in cur:
                yield self._row_to_task(row)
        except sqlite3.Error as e:
            raise StoreError(f"cursor failed: {e}") from e
        finally:
            conn.close()

    def insert_one(self, task: Task) -> None:
        try:
            conn = self._get_conn()
            try:
                conn.execute(
                    f"INSERT INTO {self._table}(_id, title, activeAt, status) VALUES (?, ?, ?, ?)",
                    (task.id, task.title, task.active_at, task.status.value),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreError(f"insert failed: {e}") from e
        logger.debug("Task inserted id=%s activeAt=%s", task.id, task.active_at)

    def update_fields(self, flt: TaskFilter, values: dict[str, Any]) -> None:
        unknown = set(values) - _UPDATABLE
        if unknown:
            raise ValueError(f"fields are not updatable: {sorted(unknown)}")
        if not values:
            return

        sets: list[str] = []
        params: list[Any] = []
        for name, value in values.items():
            sets.append(f"{_COLUMNS[name]} = ?")
            params.append(value.value if isinstance(value, TaskStatus) else value)

        where, where_params = self._where(flt)
        params.extend(where_params)

        try:
            conn = self._get_conn()
            try:
                conn.execute(
                    f"UPDATE {self._table} SET {', '.join(sets)} WHERE rowid IN "
                    f"(SELECT rowid FROM {self._table}{where} ORDER BY rowid LIMIT 1)",
                    params,
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreError(f"update failed: {e}") from e

    def delete_one(self, flt: TaskFilter) -> None:
        where, params = self._where(flt)
        try:
            conn = self._get_conn()
            try:
                conn.execute(
                    f"DELETE FROM {self._table} WHERE rowid IN "
                    f"(SELECT rowid FROM {self._table}{where} ORDER BY rowid LIMIT 1)",
                    params,
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreError(f"delete failed: {e}") from e

# src/tasklog/tasks/task_store.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import sqlite3
from collections.abc import Iterator
from pathlib import Path

from .task_models import Task

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


class StorageError(RuntimeError):
    """I/O or constraint failure in the task store."""


class TaskStore:
    """
    SQLite task store.

    One table, ``tasks(id, description, isCompleted)``, schema version 1.
    Schema creation is migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Thread-safety:
    - each operation opens its own SQLite connection
    - the public API is async; blocking SQLite work runs in a worker thread

    Every sqlite3 failure surfaces as StorageError.
    """

    def __init__(self, db_path: str | Path = "task_db.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._closed = False
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create directory for {self._db_path}: {e}") from e
        self._ensure_schema()
        logger.info("TaskStore ready db=%s total=%s", self._db_path, self._count())

    @property
    def db_path(self) -> Path:
        return self._db_path

    def close(self) -> None:
        """Release the store. Later operations raise StorageError."""
        if self._closed:
            return
        self._closed = True
        logger.info("TaskStore closed db=%s", self._db_path)

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

    @contextlib.contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        """Open a connection, commit on success, translate sqlite3 errors."""
        if self._closed:
            raise StorageError(f"TaskStore is closed db={self._db_path}")
        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open {self._db_path}: {e}") from e
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            with contextlib.suppress(sqlite3.Error):
                conn.rollback()
            raise StorageError(str(e)) from e
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._connection() as conn:
            cur = conn.cursor()

            cur.execute("PRAGMA user_version")
            (version,) = cur.fetchone()
            if version > SCHEMA_VERSION:
                raise StorageError(
                    f"Unsupported schema version {version} in {self._db_path} "
                    f"(expected <= {SCHEMA_VERSION})"
                )

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    description TEXT NOT NULL,
                    isCompleted INTEGER NOT NULL DEFAULT 0
                )
                """
            )

            # Migrations (safe): add missing columns.
            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}
            if "isCompleted" not in cols:
                cur.execute("ALTER TABLE tasks ADD COLUMN isCompleted INTEGER NOT NULL DEFAULT 0")
                logger.info("TaskStore migration: added column isCompleted")

            if version < SCHEMA_VERSION:
                cur.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            description=str(row["description"] or ""),
            is_completed=bool(row["isCompleted"]),
        )

    # ---- blocking implementations ----

    def _count(self) -> int:
        with self._connection() as conn:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            return int(n)

    def _list_all(self) -> list[Task]:
        with self._connection() as conn:
            rows = conn.execute("SELECT id, description, isCompleted FROM tasks ORDER BY id").fetchall()
            return [self._row_to_task(r) for r in rows]

    def _get(self, task_id: int) -> Task | None:
        with self._connection() as conn:
            row = conn.execute(
                "SELECT id, description, isCompleted FROM tasks WHERE id = ?",
                (int(task_id),),
            ).fetchone()
            return self._row_to_task(row) if row else None

    def _insert(self, description: str) -> int:
        with self._connection() as conn:
            cur = conn.execute(
                "INSERT INTO tasks(description, isCompleted) VALUES (?, 0)",
                (description,),
            )
            rowid = cur.lastrowid
            if rowid is None:
                raise StorageError("SQLite did not return lastrowid for tasks insert")
            task_id = int(rowid)
        logger.debug("Task inserted id=%s", task_id)
        return task_id

    def _update(self, task: Task) -> None:
        with self._connection() as conn:
            cur = conn.execute(
                "UPDATE tasks SET description = ?, isCompleted = ? WHERE id = ?",
                (task.description, int(task.is_completed), int(task.id)),
            )
            if cur.rowcount != 1:
                raise StorageError(f"Task not found id={task.id}")
        logger.debug("Task updated id=%s completed=%s", task.id, task.is_completed)

    def _delete_one(self, task_id: int) -> None:
        with self._connection() as conn:
            cur = conn.execute("DELETE FROM tasks WHERE id = ?", (int(task_id),))
            deleted = cur.rowcount
        logger.debug("Task delete id=%s deleted=%s", task_id, deleted)

    def _delete_all(self) -> None:
        with self._connection() as conn:
            cur = conn.execute("DELETE FROM tasks")
            deleted = cur.rowcount
        logger.debug("Tasks deleted all count=%s", deleted)

    # ---- public API ----

    async def count(self) -> int:
        return await asyncio.to_thread(self._count)

    async def list_all(self) -> list[Task]:
        """All stored tasks in insertion order; empty list when there are none."""
        return await asyncio.to_thread(self._list_all)

    async def get(self, task_id: int) -> Task | None:
        return await asyncio.to_thread(self._get, task_id)

    async def insert(self, description: str) -> int:
        """
        Store a new, not completed task and return its id.

        Descriptions are stored as given: no uniqueness constraint and no
        blank check (input validation belongs to the caller).
        """
        return await asyncio.to_thread(self._insert, description)

    async def update(self, task: Task) -> None:
        """Replace description and completion of the row with ``task.id``."""
        await asyncio.to_thread(self._update, task)

    async def delete_one(self, task_id: int) -> None:
        """Remove one row. Unknown ids are a no-op."""
        await asyncio.to_thread(self._delete_one, task_id)

    async def delete_all(self) -> None:
        await asyncio.to_thread(self._delete_all)

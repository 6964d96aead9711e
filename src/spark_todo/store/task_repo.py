# src/spark_todo/store/task_repo.py

from __future__ import annotations

import logging
import sqlite3
from typing import NoReturn

from .connection import Database
from .errors import ConstraintError, NotFoundError, ValidationError
from .group_repo import GroupRepository
from .models import MAX_TASK_CONTENT_LEN, MAX_TASK_TITLE_LEN, Clock, Task, TaskStatus, now_ms

logger = logging.getLogger(__name__)

_TASK_COLUMNS = "id, group_id, title, content, status, important, urgent, created_at, updated_at"


def _row_to_task(row: sqlite3.Row) -> Task:
    return Task(
        id=int(row["id"]),
        group_id=int(row["group_id"]),
        title=str(row["title"]),
        content=str(row["content"] or ""),
        status=TaskStatus(row["status"]),
        important=int(row["important"]) == 1,
        urgent=int(row["urgent"]) == 1,
        created_at=int(row["created_at"]),
        updated_at=int(row["updated_at"]),
    )


class TaskRepository:
    """
    SQLite task repository.

    Input is checked before anything is written, so the caller gets a stable
    message instead of whatever the engine says:
    group selected -> group exists -> title -> title length -> content length -> status
    """

    def __init__(
        self, db: Database, *, groups: GroupRepository | None = None, clock: Clock = now_ms
    ) -> None:
        self._db = db
        self._groups = groups if groups is not None else GroupRepository(db, clock=clock)
        self._clock = clock

    def list_tasks(self) -> list[Task]:
        """Most recently touched first; id breaks ties so the order is stable."""
        rows = self._db.fetch_all(
            f"SELECT {_TASK_COLUMNS} FROM tasks ORDER BY updated_at DESC, id DESC",
            operation="list tasks",
        )
        return [_row_to_task(r) for r in rows]

    def get_task(self, task_id: int) -> Task | None:
        row = self._db.fetch_one(
            f"SELECT {_TASK_COLUMNS} FROM tasks WHERE id = ?",
            (int(task_id),),
            operation="get task",
        )
        return _row_to_task(row) if row else None

    def count_tasks(self) -> int:
        row = self._db.fetch_one("SELECT COUNT(*) FROM tasks", operation="count tasks")
        return int(row[0]) if row else 0

    def _validate(self, task: Task) -> tuple[str, str, TaskStatus]:
        title = (task.title or "").strip()
        content = (task.content or "").strip()

        group_id = int(task.group_id or 0)
        if group_id <= 0:
            raise ValidationError("group_required", "please select a group")
        if not self._groups.group_exists(group_id):
            raise ValidationError("group_not_found", f"group not found (id={group_id})")
        if not title:
            raise ValidationError("title_required", "task title is required")
        if len(title) > MAX_TASK_TITLE_LEN:
            raise ValidationError(
                "title_too_long", f"task title is too long (max {MAX_TASK_TITLE_LEN} characters)"
            )
        if len(content) > MAX_TASK_CONTENT_LEN:
            raise ValidationError(
                "content_too_long",
                f"task content is too long (max {MAX_TASK_CONTENT_LEN} characters)",
            )
        status = TaskStatus.parse(task.status)
        return title, content, status

    def upsert_task(self, task: Task) -> Task:
        """
        task.id == 0 creates a task, task.id > 0 replaces every mutable field of an existing one.

        Returns the task as stored.
        """
        task_id = int(task.id or 0)
        if task_id < 0:
            raise ValidationError("invalid_id", f"invalid task id: {task_id}")
        title, content, status = self._validate(task)
        group_id = int(task.group_id)
        important = 1 if task.important else 0
        urgent = 1 if task.urgent else 0

        now = self._clock()
        if task_id == 0:
            try:
                cur = self._db.execute(
                    """
                    INSERT INTO tasks(
                        group_id, title, content, status, important, urgent, created_at, updated_at
                    )
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (group_id, title, content, status.value, important, urgent, now, now),
                    operation="create task",
                )
            except ConstraintError as exc:
                self._raise_for_constraint(exc, group_id)
            new_id = cur.lastrowid
            if new_id is None:
                raise RuntimeError("SQLite did not return lastrowid for tasks insert")
            logger.debug("Task created id=%s group=%s status=%s", new_id, group_id, status.value)
            return Task(
                id=int(new_id),
                group_id=group_id,
                title=title,
                content=content,
                status=status,
                important=bool(important),
                urgent=bool(urgent),
                created_at=now,
                updated_at=now,
            )

        try:
            cur = self._db.execute(
                """
                UPDATE tasks
                SET group_id = ?,
                    title = ?,
                    content = ?,
                    status = ?,
                    important = ?,
                    urgent = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (group_id, title, content, status.value, important, urgent, now, task_id),
                operation="update task",
            )
        except ConstraintError as exc:
            self._raise_for_constraint(exc, group_id)
        if cur.rowcount == 0:
            raise NotFoundError("task", task_id)

        stored = self.get_task(task_id)
        if stored is None:
            raise NotFoundError("task", task_id)
        logger.debug("Task updated id=%s status=%s", task_id, status.value)
        return stored

    @staticmethod
    def _raise_for_constraint(exc: ConstraintError, group_id: int) -> NoReturn:
        # The group can disappear between the existence check and the write.
        if exc.is_foreign_key:
            raise ValidationError("group_not_found", f"group not found (id={group_id})") from exc
        raise exc

    def delete_task(self, task_id: int) -> None:
        task_id = int(task_id)
        if task_id <= 0:
            raise ValidationError("invalid_id", f"invalid task id: {task_id}")
        cur = self._db.execute("DELETE FROM tasks WHERE id = ?", (task_id,), operation="delete task")
        if cur.rowcount == 0:
            raise NotFoundError("task", task_id)
        logger.debug("Task deleted id=%s", task_id)

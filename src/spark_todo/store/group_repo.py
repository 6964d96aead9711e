# src/spark_todo/store/group_repo.py

from __future__ import annotations

import logging
import sqlite3

from .connection import Database
from .errors import ConstraintError, DuplicateNameError, NotFoundError, ValidationError
from .models import MAX_GROUP_NAME_LEN, Clock, Group, now_ms

logger = logging.getLogger(__name__)

_GROUP_COLUMNS = "id, name, created_at, updated_at"


def _row_to_group(row: sqlite3.Row) -> Group:
    return Group(
        id=int(row["id"]),
        name=str(row["name"]),
        created_at=int(row["created_at"]),
        updated_at=int(row["updated_at"]),
    )


def _clean_group_name(name: str | None) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("name_required", "group name is required")
    if len(name) > MAX_GROUP_NAME_LEN:
        raise ValidationError(
            "name_too_long", f"group name is too long (max {MAX_GROUP_NAME_LEN} characters)"
        )
    return name


class GroupRepository:
    """Groups own tasks: deleting a group deletes its tasks through ON DELETE CASCADE."""

    def __init__(self, db: Database, *, clock: Clock = now_ms) -> None:
        self._db = db
        self._clock = clock

    def list_groups(self) -> list[Group]:
        rows = self._db.fetch_all(
            f"SELECT {_GROUP_COLUMNS} FROM groups ORDER BY id", operation="list groups"
        )
        return [_row_to_group(r) for r in rows]

    def get_group(self, group_id: int) -> Group | None:
        row = self._db.fetch_one(
            f"SELECT {_GROUP_COLUMNS} FROM groups WHERE id = ?",
            (int(group_id),),
            operation="get group",
        )
        return _row_to_group(row) if row else None

    def group_exists(self, group_id: int) -> bool:
        row = self._db.fetch_one(
            "SELECT 1 FROM groups WHERE id = ?", (int(group_id),), operation="check group exists"
        )
        return row is not None

    def count_groups(self) -> int:
        row = self._db.fetch_one("SELECT COUNT(*) FROM groups", operation="count groups")
        return int(row[0]) if row else 0

    def upsert_group(self, group_id: int, name: str) -> Group:
        """
        group_id == 0 creates a group, group_id > 0 renames an existing one.

        Renaming a group to its current name is allowed.
        """
        name = _clean_group_name(name)
        group_id = int(group_id)
        if group_id < 0:
            raise ValidationError("invalid_id", f"invalid group id: {group_id}")

        now = self._clock()
        if group_id == 0:
            try:
                cur = self._db.execute(
                    "INSERT INTO groups(name, created_at, updated_at) VALUES (?, ?, ?)",
                    (name, now, now),
                    operation="create group",
                )
            except ConstraintError as exc:
                if exc.is_unique:
                    raise DuplicateNameError(name) from exc
                raise
            new_id = cur.lastrowid
            if new_id is None:
                raise RuntimeError("SQLite did not return lastrowid for groups insert")
            logger.debug("Group created id=%s name=%r", new_id, name)
            return Group(id=int(new_id), name=name, created_at=now, updated_at=now)

        try:
            cur = self._db.execute(
                "UPDATE groups SET name = ?, updated_at = ? WHERE id = ?",
                (name, now, group_id),
                operation="update group",
            )
        except ConstraintError as exc:
            if exc.is_unique:
                raise DuplicateNameError(name) from exc
            raise
        if cur.rowcount == 0:
            raise NotFoundError("group", group_id)

        group = self.get_group(group_id)
        if group is None:
            raise NotFoundError("group", group_id)
        logger.debug("Group renamed id=%s name=%r", group_id, name)
        return group

    def delete_group(self, group_id: int) -> None:
        group_id = int(group_id)
        if group_id <= 0:
            raise ValidationError("invalid_id", f"invalid group id: {group_id}")
        cur = self._db.execute(
            "DELETE FROM groups WHERE id = ?", (group_id,), operation="delete group"
        )
        if cur.rowcount == 0:
            raise NotFoundError("group", group_id)
        logger.debug("Group deleted id=%s", group_id)

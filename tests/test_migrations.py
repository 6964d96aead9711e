# tests/test_migrations.py

from __future__ import annotations

import sqlite3
from pathlib import Path

from spark_todo.store import TaskStatus, TodoStore
from spark_todo.store.connection import Database
from spark_todo.store.migrations import MIGRATIONS, AddColumn, migrate


def _schema(db: Database) -> tuple[list[tuple], dict[str, list[tuple]]]:
    objects = [
        tuple(r)
        for r in db.fetch_all(
            "SELECT type, name, tbl_name, sql FROM sqlite_master ORDER BY type, name",
            operation="t",
        )
    ]
    columns = {
        table: [tuple(r) for r in db.fetch_all(f"PRAGMA table_info({table})", operation="t")]
        for table in ("groups", "tasks", "settings")
    }
    return objects, columns


def test_migrate_creates_schema_and_is_idempotent(db_path: Path) -> None:
    db = Database.open(db_path)
    try:
        applied = migrate(db)
        assert applied == [step.name for step in MIGRATIONS if not isinstance(step, AddColumn)]
        first = _schema(db)

        assert migrate(db) == []
        assert _schema(db) == first

        assert db.table_columns("tasks") == {
            "id",
            "group_id",
            "title",
            "content",
            "status",
            "important",
            "urgent",
            "created_at",
            "updated_at",
        }
        assert db.index_exists("idx_tasks_group_status")
        assert db.index_exists("idx_tasks_important_urgent")
    finally:
        db.close()


def test_reopening_store_keeps_schema_identical(db_path: Path) -> None:
    TodoStore.open(db_path).close()
    db = Database.open(db_path)
    try:
        before = _schema(db)
    finally:
        db.close()

    TodoStore.open(db_path).close()
    db = Database.open(db_path)
    try:
        assert _schema(db) == before
    finally:
        db.close()


def test_old_file_without_priority_flags_is_upgraded(db_path: Path) -> None:
    conn = sqlite3.connect(str(db_path))
    conn.executescript(
        """
        CREATE TABLE groups (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL UNIQUE,
            created_at INTEGER NOT NULL,
            updated_at INTEGER NOT NULL
        );
        CREATE TABLE tasks (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            group_id INTEGER NOT NULL REFERENCES groups(id) ON DELETE CASCADE,
            title TEXT NOT NULL,
            content TEXT NOT NULL DEFAULT '',
            status TEXT NOT NULL CHECK (status IN ('todo','doing','done')),
            created_at INTEGER NOT NULL,
            updated_at INTEGER NOT NULL
        );
        CREATE INDEX idx_tasks_group_status ON tasks(group_id, status);
        CREATE TABLE settings (key TEXT PRIMARY KEY, value TEXT NOT NULL);
        INSERT INTO groups(name, created_at, updated_at) VALUES ('Work', 10, 20);
        INSERT INTO tasks(group_id, title, content, status, created_at, updated_at)
            VALUES (1, 'Write report', 'quarterly', 'doing', 30, 40);
        INSERT INTO settings(key, value) VALUES ('viewMode', 'list');
        """
    )
    conn.commit()
    conn.close()

    with TodoStore.open(db_path) as store:
        groups = store.list_groups()
        assert [(g.id, g.name, g.created_at, g.updated_at) for g in groups] == [(1, "Work", 10, 20)]

        (task,) = store.list_tasks()
        assert task.id == 1
        assert task.group_id == 1
        assert task.title == "Write report"
        assert task.content == "quarterly"
        assert task.status is TaskStatus.DOING
        assert task.important is False
        assert task.urgent is False
        assert (task.created_at, task.updated_at) == (30, 40)

        assert store.get_settings().view_mode == "list"

    db = Database.open(db_path)
    try:
        assert {"important", "urgent"} <= db.table_columns("tasks")
        assert db.index_exists("idx_tasks_important_urgent")
        assert migrate(db) == []
    finally:
        db.close()


def test_appended_step_runs_once(db_path: Path) -> None:
    db = Database.open(db_path)
    try:
        migrate(db)
        extra = (*MIGRATIONS, AddColumn("groups", "color", "TEXT NOT NULL DEFAULT ''"))
        assert migrate(db, extra) == ["add column groups.color"]
        assert migrate(db, extra) == []
        assert "color" in db.table_columns("groups")
    finally:
        db.close()

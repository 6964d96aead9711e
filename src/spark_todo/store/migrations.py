# src/spark_todo/store/migrations.py

"""
Schema migrations.

There is no version table. The schema is brought up to date by an ordered
list of steps, each of which first checks whether it is already in place:
- tables and indexes are looked up in sqlite_master
- columns are looked up with PRAGMA table_info and added with ALTER TABLE

Running migrate() on an up-to-date file does nothing. New steps go at the end
of MIGRATIONS.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from .connection import Database

logger = logging.getLogger(__name__)


class MigrationStep(Protocol):
    @property
    def name(self) -> str: ...

    def is_applied(self, db: Database) -> bool: ...

    def apply(self, db: Database) -> None: ...


@dataclass(frozen=True, slots=True)
class CreateTable:
    table: str
    ddl: str

    @property
    def name(self) -> str:
        return f"create table {self.table}"

    def is_applied(self, db: Database) -> bool:
        return db.table_exists(self.table)

    def apply(self, db: Database) -> None:
        db.execute(self.ddl, operation=f"migrate: {self.name}")


@dataclass(frozen=True, slots=True)
class CreateIndex:
    index: str
    ddl: str

    @property
    def name(self) -> str:
        return f"create index {self.index}"

    def is_applied(self, db: Database) -> bool:
        return db.index_exists(self.index)

    def apply(self, db: Database) -> None:
        db.execute(self.ddl, operation=f"migrate: {self.name}")


@dataclass(frozen=True, slots=True)
class AddColumn:
    """Adds a column introduced after the table was first shipped. `decl` needs a non-null default."""

    table: str
    column: str
    decl: str

    @property
    def name(self) -> str:
        return f"add column {self.table}.{self.column}"

    def is_applied(self, db: Database) -> bool:
        return self.column in db.table_columns(self.table)

    def apply(self, db: Database) -> None:
        db.execute(
            f"ALTER TABLE {self.table} ADD COLUMN {self.column} {self.decl}",
            operation=f"migrate: {self.name}",
        )


MIGRATIONS: tuple[MigrationStep, ...] = (
    CreateTable(
        "groups",
        """
        CREATE TABLE IF NOT EXISTS groups (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL UNIQUE,
            created_at INTEGER NOT NULL,
            updated_at INTEGER NOT NULL
        )
        """,
    ),
    CreateTable(
        "tasks",
        """
        CREATE TABLE IF NOT EXISTS tasks (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            group_id INTEGER NOT NULL REFERENCES groups(id) ON DELETE CASCADE,
            title TEXT NOT NULL,
            content TEXT NOT NULL DEFAULT '',
            status TEXT NOT NULL CHECK (status IN ('todo','doing','done')),
            important INTEGER NOT NULL DEFAULT 0 CHECK (important IN (0,1)),
            urgent INTEGER NOT NULL DEFAULT 0 CHECK (urgent IN (0,1)),
            created_at INTEGER NOT NULL,
            updated_at INTEGER NOT NULL
        )
        """,
    ),
    CreateIndex(
        "idx_tasks_group_status",
        "CREATE INDEX IF NOT EXISTS idx_tasks_group_status ON tasks(group_id, status)",
    ),
    CreateTable(
        "settings",
        """
        CREATE TABLE IF NOT EXISTS settings (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        )
        """,
    ),
    # Files written before the priority quadrants existed.
    AddColumn("tasks", "important", "INTEGER NOT NULL DEFAULT 0 CHECK (important IN (0,1))"),
    AddColumn("tasks", "urgent", "INTEGER NOT NULL DEFAULT 0 CHECK (urgent IN (0,1))"),
    CreateIndex(
        "idx_tasks_important_urgent",
        "CREATE INDEX IF NOT EXISTS idx_tasks_important_urgent ON tasks(important, urgent)",
    ),
)


def migrate(db: Database, steps: tuple[MigrationStep, ...] = MIGRATIONS) -> list[str]:
    """Apply every missing step in order. Returns the names of the steps applied."""
    applied: list[str] = []
    for step in steps:
        if step.is_applied(db):
            continue
        step.apply(db)
        applied.append(step.name)
        logger.info("Schema migration: %s", step.name)
    return applied

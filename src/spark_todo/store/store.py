# src/spark_todo/store/store.py

from __future__ import annotations

import logging
from pathlib import Path
from types import TracebackType

from .bootstrap import DEFAULT_GROUP_NAME, ensure_defaults
from .connection import DEFAULT_BUSY_TIMEOUT_MS, Database
from .errors import StorageError, StoreOpenError
from .group_repo import GroupRepository
from .migrations import migrate
from .models import Clock, Group, Settings, Task, now_ms
from .settings_repo import SettingsRepository
from .task_repo import TaskRepository

logger = logging.getLogger(__name__)


class TodoStore:
    """
    The local persistence layer: one SQLite file, one connection.

    open() runs, in order: connect + pragmas, schema migration, defaults.
    If any of them fails the connection is closed and StoreOpenError is
    raised, so a half-initialized store is never handed out.
    """

    def __init__(self, db: Database, *, clock: Clock = now_ms) -> None:
        self._db = db
        self.groups = GroupRepository(db, clock=clock)
        self.tasks = TaskRepository(db, groups=self.groups, clock=clock)
        self.settings = SettingsRepository(db)

    @classmethod
    def open(
        cls,
        db_path: str | Path,
        *,
        busy_timeout_ms: int = DEFAULT_BUSY_TIMEOUT_MS,
        default_group_name: str = DEFAULT_GROUP_NAME,
        clock: Clock = now_ms,
    ) -> TodoStore:
        db = Database.open(db_path, busy_timeout_ms=busy_timeout_ms)
        try:
            migrate(db)
        except StorageError as exc:
            db.close()
            raise StoreOpenError("migrate schema") from exc
        try:
            ensure_defaults(db, default_group_name=default_group_name, clock=clock)
        except StorageError as exc:
            db.close()
            raise StoreOpenError("init defaults") from exc

        store = cls(db, clock=clock)
        logger.info(
            "TodoStore ready db=%s groups=%s tasks=%s",
            db.path,
            store.groups.count_groups(),
            store.tasks.count_tasks(),
        )
        return store

    @property
    def path(self) -> Path:
        return self._db.path

    @property
    def closed(self) -> bool:
        return self._db.closed

    def close(self) -> None:
        self._db.close()

    def __enter__(self) -> TodoStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # ---- groups ----

    def list_groups(self) -> list[Group]:
        return self.groups.list_groups()

    def upsert_group(self, group_id: int, name: str) -> Group:
        return self.groups.upsert_group(group_id, name)

    def delete_group(self, group_id: int) -> None:
        self.groups.delete_group(group_id)

    # ---- tasks ----

    def list_tasks(self) -> list[Task]:
        return self.tasks.list_tasks()

    def upsert_task(self, task: Task) -> Task:
        return self.tasks.upsert_task(task)

    def delete_task(self, task_id: int) -> None:
        self.tasks.delete_task(task_id)

    # ---- settings ----

    def get_settings(self) -> Settings:
        return self.settings.get_settings()

    def set_settings(self, settings: Settings) -> None:
        self.settings.set_settings(settings)

    def get_last_reminder_at(self) -> int:
        return self.settings.get_last_reminder_at()

    def set_last_reminder_at(self, ts_ms: int) -> None:
        self.settings.set_last_reminder_at(ts_ms)


def open_store(db_path: str | Path, **kwargs) -> TodoStore:
    return TodoStore.open(db_path, **kwargs)


def close_store(store: TodoStore | None) -> None:
    """Close `store`; None and already-closed stores are fine."""
    if store is None:
        return
    store.close()

# src/spark_todo/app/service.py

"""
Application-facing operations on top of TodoStore.

This is what a front-end bridge calls. It adds:
- a readiness gate (the store may have failed to open at startup),
- one-field settings updates that return the new Settings,
- the done checkbox,
- reminder throttling (the reminder dialog itself lives elsewhere).
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

from ..config import AppConfig
from ..store.errors import NotFoundError, StoreError, StoreNotReadyError
from ..store.models import Board, Clock, Group, Settings, Task, TaskStatus, now_ms
from ..store.store import TodoStore, close_store

logger = logging.getLogger(__name__)

MINUTE_MS = 60 * 1000


class TodoService:
    def __init__(self, config: AppConfig, *, clock: Clock = now_ms) -> None:
        self._config = config
        self._clock = clock
        self._store: TodoStore | None = None
        self._startup_error: StoreError | None = None

    @property
    def ready(self) -> bool:
        return self._store is not None

    @property
    def startup_error(self) -> StoreError | None:
        return self._startup_error

    @property
    def reminder_interval_ms(self) -> int:
        return int(self._config.reminder_interval_minutes) * MINUTE_MS

    def start(self, db_path: str | Path | None = None) -> bool:
        """
        Open the store. Returns False (and stays not ready) if that fails.

        A service that is already running keeps its store; call shutdown()
        first to switch to another file.
        """
        if self._store is not None:
            logger.debug("Store already open db=%s", self._store.path)
            return True
        path =Path(db_path) if db_path is not None else Path(self._config.db_path)
        try:
            self._store = TodoStore.open(
                path,
                busy_timeout_ms=self._config.busy_timeout_ms,
                default_group_name=self._config.default_group_name,
                clock=self._clock,
            )
        except StoreError as exc:
            logger.exception("Failed to open store db=%s", path)
            self._store = None
            self._startup_error = exc
            return False
        self._startup_error = None
        return True

    def shutdown(self) -> None:
        store, self._store = self._store, None
        close_store(store)

    def _require_store(self) -> TodoStore:
        if self._store is not None:
            return self._store
        if self._startup_error is not None:
            raise StoreNotReadyError(
                f"initialization failed: {self._startup_error}"
            ) from self._startup_error
        raise StoreNotReadyError("store is not initialized yet")

    # ---- board ----

    def get_board(self) -> Board:
        store = self._require_store()
        return Board(
            groups=store.list_groups(),
            tasks=store.list_tasks(),
            settings=store.get_settings(),
            statuses=list(TaskStatus),
        )

    # ---- groups / tasks ----

    def upsert_group(self, group_id: int, name: str) -> Group:
        return self._require_store().upsert_group(group_id, name)

    def delete_group(self, group_id: int) -> None:
        self._require_store().delete_group(group_id)

    def upsert_task(self, task: Task) -> Task:
        return self._require_store().upsert_task(task)

    def delete_task(self, task_id: int) -> None:
        self._require_store().delete_task(task_id)

    def set_task_done(self, task_id: int, done: bool) -> Task:
        """
        The done checkbox.

        Un-checking always goes back to TODO; a task that was DOING before it
        was checked does not return to DOING.
        """
        store = self._require_store()
        task = store.tasks.get_task(task_id)
        if task is None:
            raise NotFoundError("task", int(task_id))
        status = TaskStatus.DONE if done else TaskStatus.TODO
        return store.upsert_task(replace(task, status=status))

    # ---- settings ----

    def get_settings(self) -> Settings:
        return self._require_store().get_settings()

    def _update_settings(self, **changes) -> Settings:
        store = self._require_store()
        settings = replace(store.get_settings(), **changes)
        store.set_settings(settings)
        return store.get_settings()

    def set_hide_done(self, hide: bool) -> Settings:
        return self._update_settings(hide_done=bool(hide))

    def set_always_on_top(self, on: bool) -> Settings:
        return self._update_settings(always_on_top=bool(on))

    def set_view_mode(self, mode: str) -> Settings:
        return self._update_settings(view_mode=mode)

    def set_theme(self, theme: str) -> Settings:
        return self._update_settings(theme=theme)

    def set_concise_mode(self, on: bool) -> Settings:
        return self._update_settings(concise_mode=bool(on))

    # ---- reminder ----

    def reminder_due(self, now: int | None = None) -> bool:
        """False while the last reminder is younger than the configured interval."""
        now = self._clock() if now is None else int(now)
        last_at = self._require_store().get_last_reminder_at()
        if last_at > 0 and now - last_at < self.reminder_interval_ms:
            return False
        return True

    def record_reminder(self, now: int | None = None) -> None:
        now = self._clock() if now is None else int(now)
        self._require_store().set_last_reminder_at(now)

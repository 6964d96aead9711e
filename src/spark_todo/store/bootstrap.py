# src/spark_todo/store/bootstrap.py

from __future__ import annotations

import logging

from .connection import Database
from .models import Clock, now_ms
from .settings_repo import DEFAULT_SETTING_VALUES

logger = logging.getLogger(__name__)

DEFAULT_GROUP_NAME = "默认"


def ensure_defaults(
    db: Database,
    *,
    default_group_name: str = DEFAULT_GROUP_NAME,
    clock: Clock = now_ms,
) -> None:
    """
    Seed a freshly migrated file. Safe to call on every open.

    - settings: each known key gets its default only when the key is missing
    - groups: one default group when there are none, so a task can always be created
    """
    with db.transaction(operation="init settings") as cur:
        for key, value in DEFAULT_SETTING_VALUES.items():
            cur.execute("INSERT OR IGNORE INTO settings(key, value) VALUES (?, ?)", (key, value))

    row = db.fetch_one("SELECT COUNT(1) FROM groups", operation="count groups")
    if row is not None and int(row[0]) > 0:
        return

    now = clock()
    db.execute(
        "INSERT INTO groups(name, created_at, updated_at) VALUES (?, ?, ?)",
        (default_group_name, now, now),
        operation="create default group",
    )
    logger.info("Created default group %r", default_group_name)

"""
Store subsystem.

Components:
- connection.py: the single SQLite connection (pragmas, one-per-file guard, error wrapping)
- migrations.py: idempotent schema steps (tables, indexes, late-added columns)
- bootstrap.py: default group + default settings on first open
- group_repo.py / task_repo.py / settings_repo.py: validated CRUD
- models.py / errors.py: plain records and typed failures
- store.py: TodoStore, the facade the rest of the app talks to
"""

from .errors import (
    ConstraintError,
    DuplicateNameError,
    NotFoundError,
    StorageError,
    StoreAlreadyOpenError,
    StoreClosedError,
    StoreError,
    StoreNotReadyError,
    StoreOpenError,
    ValidationError,
)
from .models import Board, Group, Quadrant, Settings, Task, TaskStatus, Theme, ViewMode
from .store import TodoStore, close_store, open_store

__all__ = [
    "Board",
    "ConstraintError",
    "DuplicateNameError",
    "Group",
    "NotFoundError",
    "Quadrant",
    "Settings",
    "StorageError",
    "StoreAlreadyOpenError",
    "StoreClosedError",
    "StoreError",
    "StoreNotReadyError",
    "StoreOpenError",
    "Task",
    "TaskStatus",
    "Theme",
    "TodoStore",
    "ValidationError",
    "ViewMode",
    "close_store",
    "open_store",
]

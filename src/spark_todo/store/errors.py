# src/spark_todo/store/errors.py

"""
Store exceptions.

Callers show ValidationError / DuplicateNameError / NotFoundError messages to
the user as-is. StorageError and its subclasses are infrastructure failures:
their message names only the operation, the engine error is kept as __cause__
and logged where it is wrapped.
"""

from __future__ import annotations


class StoreError(Exception):
    """Base class for everything raised by the store."""


class ValidationError(StoreError, ValueError):
    """Caller input was rejected before any write."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class DuplicateNameError(StoreError):
    def __init__(self, name: str) -> None:
        super().__init__(f"group name already exists: {name!r}")
        self.name = name


class NotFoundError(StoreError, LookupError):
    def __init__(self, entity: str, entity_id: int) -> None:
        super().__init__(f"{entity} not found (id={entity_id})")
        self.entity = entity
        self.entity_id = entity_id


class StoreClosedError(StoreError):
    def __init__(self) -> None:
        super().__init__("store is closed")


class StoreNotReadyError(StoreError):
    """Raised by the app service when the store is not (or could not be) opened."""


class StorageError(StoreError):
    def __init__(self, operation: str, message: str | None = None) -> None:
        super().__init__(message or f"{operation} failed")
        self.operation = operation


class ConstraintError(StorageError):
    """A schema constraint rejected a write; `errorname` is the SQLite extended code name."""

    def __init__(self, operation: str, errorname: str) -> None:
        super().__init__(operation)
        self.errorname = errorname

    @property
    def is_unique(self) -> bool:
        return self.errorname == "SQLITE_CONSTRAINT_UNIQUE"

    @property
    def is_foreign_key(self) -> bool:
        return self.errorname == "SQLITE_CONSTRAINT_FOREIGNKEY"


class StoreOpenError(StorageError):
    """The store could not be opened, migrated or bootstrapped."""


class StoreAlreadyOpenError(StoreOpenError):
    def __init__(self, path: str) -> None:
        super().__init__("open", f"store is already open in this process: {path}")
        self.path = path

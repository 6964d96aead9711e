# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from spark_todo.store import TodoStore

from .fakes import FakeClock


@pytest.fixture()
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "todo.db"


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(db_path: Path, clock: FakeClock) -> Iterator[TodoStore]:
    """
    A real SQLite-backed store per test.

    We keep SQLite here (no fakes) because the schema, constraints and
    error mapping are exactly what these tests are about.
    """
    s = TodoStore.open(db_path, clock=clock)
    try:
        yield s
    finally:
        s.close()

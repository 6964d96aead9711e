# tests/test_groups.py

from __future__ import annotations

import pytest

from spark_todo.store import (
    ConstraintError,
    DuplicateNameError,
    NotFoundError,
    Task,
    TodoStore,
    ValidationError,
)


def test_create_and_list_in_id_order(store: TodoStore) -> None:
    work = store.upsert_group(0, "  Work  ")
    home = store.upsert_group(0, "Home")

    assert work.name == "Work"
    assert work.id > 0
    assert work.created_at == work.updated_at

    groups = store.list_groups()
    assert [g.name for g in groups][1:] == ["Work", "Home"]
    assert [g.id for g in groups] == sorted(g.id for g in groups)
    assert groups[-1] == home


def test_rename_updates_name_and_timestamp(store: TodoStore) -> None:
    g = store.upsert_group(0, "Work")
    renamed = store.upsert_group(g.id, "Office")

    assert renamed.id == g.id
    assert renamed.name == "Office"
    assert renamed.created_at == g.created_at
    assert renamed.updated_at > g.updated_at


def test_duplicate_name_on_create(store: TodoStore) -> None:
    store.upsert_group(0, "Work")
    with pytest.raises(DuplicateNameError):
        store.upsert_group(0, "Work")
    with pytest.raises(DuplicateNameError):
        store.upsert_group(0, " Work ")


def test_duplicate_name_on_rename(store: TodoStore) -> None:
    store.upsert_group(0, "Work")
    home = store.upsert_group(0, "Home")
    with pytest.raises(DuplicateNameError):
        store.upsert_group(home.id, "Work")


def test_names_are_case_sensitive(store: TodoStore) -> None:
    store.upsert_group(0, "Work")
    assert store.upsert_group(0, "work").name == "work"


def test_rename_to_own_name_succeeds(store: TodoStore) -> None:
    g = store.upsert_group(0, "Work")
    assert store.upsert_group(g.id, "Work").name == "Work"


@pytest.mark.parametrize("name", ["", "   ", "\t\n"])
def test_empty_name_rejected(store: TodoStore, name: str) -> None:
    with pytest.raises(ValidationError) as ei:
        store.upsert_group(0, name)
    assert ei.value.code == "name_required"


def test_name_length_counts_code_points(store: TodoStore) -> None:
    assert store.upsert_group(0, "组" * 50).name == "组" * 50
    assert store.upsert_group(0, "a" * 50).name == "a" * 50

    with pytest.raises(ValidationError) as ei:
        store.upsert_group(0, "组" * 51)
    assert ei.value.code == "name_too_long"


def test_rename_missing_group(store: TodoStore) -> None:
    with pytest.raises(NotFoundError) as ei:
        store.upsert_group(9999, "Ghost")
    assert ei.value.entity == "group"
    assert ei.value.entity_id == 9999


def test_negative_id_rejected(store: TodoStore) -> None:
    with pytest.raises(ValidationError) as ei:
        store.upsert_group(-1, "Work")
    assert ei.value.code == "invalid_id"


@pytest.mark.parametrize("group_id", [0, -5])
def test_delete_rejects_non_positive_id(store: TodoStore, group_id: int) -> None:
    with pytest.raises(ValidationError) as ei:
        store.delete_group(group_id)
    assert ei.value.code == "invalid_id"


def test_delete_missing_group(store: TodoStore) -> None:
    with pytest.raises(NotFoundError):
        store.delete_group(12345)


def test_delete_cascades_to_tasks(store: TodoStore) -> None:
    doomed = store.upsert_group(0, "Doomed")
    kept = store.upsert_group(0, "Kept")
    for i in range(3):
        store.upsert_task(Task(id=0, group_id=doomed.id, title=f"doomed {i}"))
    survivor = store.upsert_task(Task(id=0, group_id=kept.id, title="survivor"))

    store.delete_group(doomed.id)

    assert [t.id for t in store.list_tasks()] == [survivor.id]
    assert doomed.id not in {g.id for g in store.list_groups()}


def test_group_exists(store: TodoStore) -> None:
    g = store.upsert_group(0, "Work")
    assert store.groups.group_exists(g.id)
    store.delete_group(g.id)
    assert not store.groups.group_exists(g.id)


def test_not_null_violation_is_a_plain_constraint_error(store: TodoStore) -> None:
    with pytest.raises(ConstraintError) as ei:
        store._db.execute(
            "INSERT INTO groups(name, created_at, updated_at) VALUES (NULL, 1, 1)", operation="t"
        )
    assert ei.value.errorname == "SQLITE_CONSTRAINT_NOTNULL"
    assert not ei.value.is_unique
    assert not isinstance(ei.value, DuplicateNameError)


@pytest.mark.parametrize("event", ["INSERT", "UPDATE"])
def test_non_unique_constraint_is_not_reported_as_duplicate(store: TodoStore, event: str) -> None:
    g = store.upsert_group(0, "Work")
    store._db.execute(
        f"CREATE TRIGGER reject_groups BEFORE {event} ON groups "
        "BEGIN SELECT RAISE(ABORT, 'groups are frozen'); END",
        operation="t",
    )

    with pytest.raises(ConstraintError) as ei:
        store.upsert_group(0 if event == "INSERT" else g.id, "Home")
    assert not isinstance(ei.value, DuplicateNameError)
    assert not ei.value.is_unique

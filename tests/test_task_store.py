"""Tests for the JSON-backed task store."""

from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path

import pytest

from core.commands import DateRange, FieldName, TaskKind
from tools.task_store import TaskFilter, TaskStore


@pytest.fixture()
def store(tmp_path: Path) -> TaskStore:
    return TaskStore(tmp_path / "tasks.json")


def test_add_derives_task_kind(store: TaskStore) -> None:
    floating = store.add("Read book")
    deadline = store.add("Pay rent", schedule=DateRange(datetime(2026, 10, 23, 17, 0)))
    timed = store.add(
        "Workshop",
        "bring laptop",
        DateRange(datetime(2026, 10, 21, 14, 0), datetime(2026, 10, 21, 16, 0)),
    )

    assert floating.kind is TaskKind.FLOATING_TASK
    assert deadline.kind is TaskKind.DEADLINE_TASK
    assert deadline.deadline == "2026-10-23T17:00:00"
    assert timed.kind is TaskKind.TIMED_TASK
    assert timed.start == "2026-10-21T14:00:00"
    assert timed.end == "2026-10-21T16:00:00"

    payload = json.loads(store.storage_path.read_text(encoding="utf-8"))
    assert len(payload["tasks"]) == 3
    assert "kind" not in payload["tasks"][0]


def test_list_orders_by_date_then_undated(store: TaskStore) -> None:
    store.add("Someday")
    store.add("Later", schedule=DateRange(datetime(2026, 11, 1, 9, 0)))
    store.add("Sooner", schedule=DateRange(datetime(2026, 10, 20, 9, 0)))

    assert [task.title for task in store.list_tasks()] == ["Sooner", "Later", "Someday"]


def test_update_complete_delete(store: TaskStore) -> None:
    task = store.add("Draft")
    updated = store.update(task.id, FieldName.DEADLINE, datetime(2026, 10, 30, 12, 0))
    assert updated is not None
    assert updated.deadline == "2026-10-30T12:00:00"

    renamed = store.update(task.id, FieldName.TITLE, "Final draft")
    assert renamed is not None and renamed.title == "Final draft"

    completed = store.complete(task.id)
    assert completed is not None and completed.completed is True

    removed = store.delete(task.id)
    assert removed is not None and removed.title == "Final draft"
    assert store.list_tasks() == []

    assert store.delete("missing") is None
    assert store.complete("missing") is None


def test_retrieve_filters(store: TaskStore) -> None:
    store.add("Floating")
    due = store.add("Due", schedule=DateRange(datetime(2026, 10, 20, 17, 0)))
    store.add("Slot", schedule=DateRange(datetime(2026, 10, 19, 22, 0), datetime(2026, 10, 21, 1, 0)))
    done = store.add("Done already")
    store.complete(done.id)

    home = [task.title for task in store.retrieve()]
    assert "Done already" not in home
    assert len(home) == 3

    assert len(store.retrieve(TaskFilter(show_all=True))) == 4
    assert [task.title for task in store.retrieve(TaskFilter(kind=TaskKind.DEADLINE_TASK))] == ["Due"]
    on_tuesday = [task.title for task in store.retrieve(TaskFilter(on_date=date(2026, 10, 20)))]
    assert on_tuesday == ["Slot", "Due"]
    assert store.get(due.id) is not None


def test_search_is_case_insensitive(store: TaskStore) -> None:
    store.add("Buy MILK")
    store.add("Call mom", "ask about milk")
    store.add("Gym")

    assert {task.title for task in store.search("milk")} == {"Buy MILK", "Call mom"}
    assert store.search("   ") == []


def test_snapshot_and_restore(store: TaskStore) -> None:
    store.add("Keep")
    snapshot = store.snapshot()
    store.add("Temporary")
    store.restore(snapshot)
    assert [task.title for task in store.list_tasks()] == ["Keep"]


def test_missing_or_blank_file_reads_as_empty(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "tasks.json"
    store = TaskStore(path)
    assert store.list_tasks() == []
    path.parent.mkdir(parents=True)
    path.write_text("  ", encoding="utf-8")
    assert store.list_tasks() == []


def test_invalid_tasks_payload_raises(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps({"tasks": {"id": "x"}}), encoding="utf-8")
    with pytest.raises(ValueError):
        TaskStore(path).list_tasks()


def test_completed_tasks_only_show_in_all_view(store: TaskStore) -> None:
    done = store.add("Filed taxes", schedule=DateRange(datetime(2026, 10, 20, 17, 0)))
    store.complete(done.id)

    assert store.retrieve(TaskFilter(kind=TaskKind.DEADLINE_TASK)) == []
    assert store.retrieve(TaskFilter(on_date=date(2026, 10, 20))) == []
    assert [task.title for task in store.retrieve(TaskFilter(show_all=True))] == ["Filed taxes"]


def test_writes_replace_file_without_leaving_staging_copy(tmp_path: Path) -> None:
    path = tmp_path / "data" / "tasks.json"
    store = TaskStore(path)
    store.add("First")
    store.add("Second")

    assert sorted(item.name for item in path.parent.iterdir()) == ["tasks.json"]
    assert [item["title"] for item in json.loads(path.read_text(encoding="utf-8"))["tasks"]] == ["First", "Second"]

"""File-backed task storage used by the command controller.

Tasks live in a single JSON document (``{"tasks": [...]}``) that is rewritten
atomically after every mutation. Timestamps are stored as ISO strings; the
task kind is never stored but derived from which dates are set.
"""

from __future__ import annotations

import json
import os
import uuid
from dataclasses import asdict, dataclass, replace
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from core.commands import DateRange, FieldName, TaskKind

_DEFAULT_STORAGE_PATH = Path("data/tasks.json")

Snapshot = List[Dict[str, Any]]


@dataclass
class Task:
    """Represent a single task entry."""

    id: str
    title: str
    created_at: str
    updated_at: str
    description: str = ""
    start: Optional[str] = None
    end: Optional[str] = None
    deadline: Optional[str] = None
    completed: bool = False

    @property
    def kind(self) -> TaskKind:
        if self.start and self.end:
            return TaskKind.TIMED_TASK
        if self.deadline:
            return TaskKind.DEADLINE_TASK
        return TaskKind.FLOATING_TASK

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind.value
        return data

    def occurs_on(self, day: date) -> bool:
        if self.kind is TaskKind.DEADLINE_TASK:
            return _to_date(self.deadline) == day
        if self.kind is TaskKind.TIMED_TASK:
            first, last = _to_date(self.start), _to_date(self.end)
            return first is not None and last is not None and first <= day <= last
        return False


@dataclass(frozen=True)
class TaskFilter:
    """Selection criteria for ``TaskStore.retrieve``; an empty filter is the home view."""

    show_all: bool = False
    kind: Optional[TaskKind] = None
    on_date: Optional[date] = None


class TaskStore:
    """JSON-backed task list."""

    def __init__(self, storage_path: Path | None = None) -> None:
        self._storage_path = storage_path or _DEFAULT_STORAGE_PATH

    @property
    def storage_path(self) -> Path:
        return self._storage_path

    def list_tasks(self) -> List[Task]:
        tasks = self._load_tasks()
        tasks.sort(key=_sort_key)
        return tasks

    def get(self, task_id: str) -> Optional[Task]:
        for task in self._load_tasks():
            if task.id == task_id:
                return task
        return None

    def add(self, title: str, description: str = "", schedule: Optional[DateRange] = None) -> Task:
        now = _timestamp()
        task = Task(id=uuid.uuid4().hex, title=title, description=description, created_at=now, updated_at=now)
        if schedule is not None:
            if schedule.is_range:
                task.start = schedule.start.isoformat()
                task.end = schedule.end.isoformat() if schedule.end else None
            else:
                task.deadline = schedule.start.isoformat()
        tasks = self._load_tasks()
        tasks.append(task)
        self._write_tasks(tasks)
        return task

    def delete(self, task_id: str) -> Optional[Task]:
        tasks = self._load_tasks()
        removed = next((task for task in tasks if task.id == task_id), None)
        if removed is None:
            return None
        self._write_tasks([task for task in tasks if task.id != task_id])
        return removed

    def update(self, task_id: str, field: FieldName, value: Union[str, datetime]) -> Optional[Task]:
        stored = value.isoformat() if isinstance(value, datetime) else value
        return self._replace(task_id, **{field.value: stored})

    def complete(self, task_id: str) -> Optional[Task]:
        return self._replace(task_id, completed=True)

    def retrieve(self, task_filter: Optional[TaskFilter] = None) -> List[Task]:
        """Return tasks matching ``task_filter`` in display order."""

        criteria = task_filter or TaskFilter()
        selected: List[Task] = []
        for task in self.list_tasks():
            if criteria.show_all:
                selected.append(task)
                continue
            if task.completed:
                continue
            if criteria.kind is not None and task.kind is not criteria.kind:
                continue
            if criteria.on_date is not None and not task.occurs_on(criteria.on_date):
                continue
            selected.append(task)
        return selected

    def search(self, keyword: str) -> List[Task]:
        needle = (keyword or "").strip().lower()
        if not needle:
            return []
        return [
            task
            for task in self.list_tasks()
            if needle in task.title.lower() or needle in (task.description or "").lower()
        ]

    def snapshot(self) -> Snapshot:
        return [task.to_dict() for task in self._load_tasks()]

    def restore(self, snapshot: Snapshot) -> None:
        self._write_tasks([_task_from_dict(entry) for entry in snapshot])

    def _replace(self, task_id: str, **changes: Any) -> Optional[Task]:
        tasks = self._load_tasks()
        for idx, task in enumerate(tasks):
            if task.id != task_id:
                continue
            updated = replace(task, updated_at=_timestamp(), **changes)
            tasks[idx] = updated
            self._write_tasks(tasks)
            return updated
        return None

    def _load_tasks(self) -> List[Task]:
        path = self._storage_path
        raw = path.read_text(encoding="utf-8") if path.exists() else ""
        raw_items = json.loads(raw).get("tasks", []) if raw.strip() else []
        if not isinstance(raw_items, list):
            raise ValueError("Invalid tasks format: 'tasks' must be a list")
        return [_task_from_dict(item) for item in raw_items if isinstance(item, dict) and item.get("id")]

    def _write_tasks(self, tasks: List[Task]) -> None:
        # Write beside the target and swap it in so a crash never leaves half a file.
        self._storage_path.parent.mkdir(parents=True, exist_ok=True)
        staging = self._storage_path.with_name(self._storage_path.name + ".tmp")
        staging.write_text(json.dumps({"tasks": [asdict(task) for task in tasks]}, indent=2), encoding="utf-8")
        os.replace(staging, self._storage_path)


def _task_from_dict(item: Dict[str, Any]) -> Task:
    now = _timestamp()
    return Task(
        id=str(item["id"]),
        title=str(item.get("title", "")).strip(),
        description=str(item.get("description") or "").strip(),
        start=item.get("start") or None,
        end=item.get("end") or None,
        deadline=item.get("deadline") or None,
        completed=bool(item.get("completed", False)),
        created_at=str(item.get("created_at") or now),
        updated_at=str(item.get("updated_at") or now),
    )


def _sort_key(task: Task) -> tuple:
    anchor = task.deadline or task.start
    return (anchor is None, anchor or "", task.created_at)


def _to_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        return None


def _timestamp() -> str:
    return datetime.now().replace(microsecond=0).isoformat()


__all__ = ["Task", "TaskFilter", "TaskStore"]

"""Persistence tools the command controller executes against."""

from __future__ import annotations

from tools.task_store import Task, TaskFilter, TaskStore

__all__ = ["Task", "TaskFilter", "TaskStore"]

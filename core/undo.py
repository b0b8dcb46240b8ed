"""Bounded undo history made of task-store snapshots."""

from __future__ import annotations

from collections import deque
from typing import Any, Deque, Dict, List, Optional

Snapshot = List[Dict[str, Any]]


class UndoHistory:
    """Ring buffer of snapshots taken before each mutating command."""

    def __init__(self, max_depth: int = 20) -> None:
        self._snapshots: Deque[Snapshot] = deque(maxlen=max(1, max_depth))

    def push(self, snapshot: Snapshot) -> None:
        self._snapshots.append(snapshot)

    def pop(self) -> Optional[Snapshot]:
        if not self._snapshots:
            return None
        return self._snapshots.pop()

    def clear(self) -> None:
        self._snapshots.clear()

    def __len__(self) -> int:
        return len(self._snapshots)


__all__ = ["UndoHistory", "Snapshot"]

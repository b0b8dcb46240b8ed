"""JSONL history of every command the controller handled.

Each line records what the user typed, how it was parsed and what came back,
so parser misreads can be replayed later. Files are size-capped with numbered
backups (``commands.jsonl.1``, ``.2``, ...).
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional


def _utc_now() -> str:
    return datetime.now(tz=timezone.utc).isoformat()


@dataclass
class CommandRecord:
    """WHAT: one handled command line.

    WHY: failures are only useful to look at together with the raw text and
    the error kind the parser chose.
    HOW: plain dataclass; ``new`` stamps the timestamp so callers don't.
    """

    timestamp: str
    user_text: str
    intent: Optional[str]
    success: bool
    response_text: str = ""
    command: Optional[Dict[str, Any]] = None
    error_kind: Optional[str] = None
    latency_ms: Optional[int] = None

    @classmethod
    def new(
        cls,
        *,
        user_text: str,
        intent: Optional[str],
        success: bool,
        response_text: str = "",
        command: Optional[Dict[str, Any]] = None,
        error_kind: Optional[str] = None,
        latency_ms: Optional[int] = None,
    ) -> "CommandRecord":
        return cls(
            timestamp=_utc_now(),
            user_text=user_text,
            intent=intent,
            success=success,
            response_text=response_text,
            command=command,
            error_kind=error_kind,
            latency_ms=latency_ms,
        )


class CommandLog:
    """Append-only JSONL writer with size-based rotation."""

    def __init__(
        self,
        path: Path,
        *,
        enabled: bool = True,
        max_bytes: int = 0,
        backup_count: int = 0,
    ) -> None:
        self._path = path
        self._enabled = enabled
        self._max_bytes = max_bytes
        self._backup_count = backup_count

    @property
    def path(self) -> Path:
        return self._path

    def log(self, record: CommandRecord) -> None:
        if not self._enabled:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps(asdict(record), ensure_ascii=False) + "\n"
        encoded = line.encode("utf-8")
        self._rotate_if_needed(len(encoded))
        with self._path.open("ab") as handle:
            handle.write(encoded)

    def _rotate_if_needed(self, incoming_bytes: int) -> None:
        """Shift ``path`` to ``path.1`` (and older backups up by one) when full.

        With ``backup_count`` of zero the file is simply truncated.
        """
        if self._max_bytes <= 0 or not self._path.exists():
            return
        if self._path.stat().st_size + incoming_bytes <= self._max_bytes:
            return

        if self._backup_count <= 0:
            self._path.unlink()
            return

        for index in range(self._backup_count - 1, 0, -1):
            src = Path(f"{self._path}.{index}")
            dst = Path(f"{self._path}.{index + 1}")
            if src.exists():
                src.replace(dst)

        self._path.replace(Path(f"{self._path}.1"))


__all__ = ["CommandRecord", "CommandLog"]

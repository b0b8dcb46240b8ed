"""Typed command objects produced by the command parser.

Every line the user types becomes exactly one of the frozen dataclasses below.
Each variant carries only the fields its intent needs, so the controller can
dispatch on the class without re-validating anything.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Tuple, Union


class CommandIntent(str, Enum):
    ADD = "add"
    DELETE = "delete"
    DONE = "done"
    DISPLAY = "display"
    HELP = "help"
    HOME = "home"
    HOTKEY = "hotkey"
    UPDATE = "update"
    SEARCH = "search"
    UNDO = "undo"
    EXIT = "exit"
    SYNC = "sync"

    @property
    def help_keyword(self) -> str:
        """Return the word users type after ``help`` to read about this intent."""

        if self is CommandIntent.UPDATE:
            return "edit"
        return self.value


class FieldName(str, Enum):
    TITLE = "title"
    DESCRIPTION = "description"
    START = "start"
    END = "end"
    DEADLINE = "deadline"

    @property
    def holds_datetime(self) -> bool:
        return self in (FieldName.START, FieldName.END, FieldName.DEADLINE)


class TaskKind(str, Enum):
    DEADLINE_TASK = "deadline"
    FLOATING_TASK = "floating"
    TIMED_TASK = "timed"


@dataclass(frozen=True)
class DateRange:
    """A single timestamp (``end is None``) or an ordered start/end pair."""

    start: datetime
    end: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.end is not None and self.end < self.start:
            raise ValueError("DateRange end must not precede its start.")

    @classmethod
    def from_dates(cls, dates: Tuple[datetime, ...]) -> Optional["DateRange"]:
        if not dates:
            return None
        if len(dates) == 1:
            return cls(start=dates[0])
        if len(dates) == 2:
            return cls(start=dates[0], end=dates[1])
        raise ValueError(f"Expected at most two dates, got {len(dates)}.")

    @property
    def is_range(self) -> bool:
        return self.end is not None

    def dates(self) -> Tuple[datetime, ...]:
        if self.end is None:
            return (self.start,)
        return (self.start, self.end)

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat() if self.end else None,
        }


@dataclass(frozen=True)
class AddCommand:
    intent: ClassVar[CommandIntent] = CommandIntent.ADD

    title: str
    description: str = ""
    schedule: Optional[DateRange] = None

    def __post_init__(self) -> None:
        if not self.title or ";" in self.title or "+" in self.title:
            raise ValueError(f"Invalid task title {self.title!r}.")
        if ";" in self.description:
            raise ValueError("Task description must not contain ';'.")

    @property
    def deadline(self) -> Optional[datetime]:
        if self.schedule is None or self.schedule.is_range:
            return None
        return self.schedule.start

    @property
    def start(self) -> Optional[datetime]:
        if self.schedule is None or not self.schedule.is_range:
            return None
        return self.schedule.start

    @property
    def end(self) -> Optional[datetime]:
        if self.schedule is None:
            return None
        return self.schedule.end

    def to_payload(self) -> Dict[str, Any]:
        return {
            "intent": self.intent.value,
            "title": self.title,
            "description": self.description,
            "dates": [value.isoformat() for value in self.schedule.dates()] if self.schedule else [],
        }


@dataclass(frozen=True)
class DeleteCommand:
    intent: ClassVar[CommandIntent] = CommandIntent.DELETE

    index: int

    def to_payload(self) -> Dict[str, Any]:
        return {"intent": self.intent.value, "index": self.index}


@dataclass(frozen=True)
class DoneCommand:
    intent: ClassVar[CommandIntent] = CommandIntent.DONE

    index: int

    def to_payload(self) -> Dict[str, Any]:
        return {"intent": self.intent.value, "index": self.index}


@dataclass(frozen=True)
class UpdateCommand:
    intent: ClassVar[CommandIntent] = CommandIntent.UPDATE

    index: int
    field: FieldName
    value: Union[str, datetime]

    def __post_init__(self) -> None:
        if self.field.holds_datetime and not isinstance(self.value, datetime):
            raise ValueError(f"Field '{self.field.value}' requires a datetime value.")
        if not self.field.holds_datetime and not isinstance(self.value, str):
            raise ValueError(f"Field '{self.field.value}' requires a text value.")

    def to_payload(self) -> Dict[str, Any]:
        value = self.value.isoformat() if isinstance(self.value, datetime) else self.value
        return {
            "intent": self.intent.value,
            "index": self.index,
            "field": self.field.value,
            "value": value,
        }


@dataclass(frozen=True)
class SearchCommand:
    intent: ClassVar[CommandIntent] = CommandIntent.SEARCH

    keyword: str

    def to_payload(self) -> Dict[str, Any]:
        return {"intent": self.intent.value, "keyword": self.keyword}


@dataclass(frozen=True)
class DisplayCommand:
    """View request; exactly one of ``show_all``/``kind``/``date`` is set."""

    intent: ClassVar[CommandIntent] = CommandIntent.DISPLAY

    show_all: bool = False
    kind: Optional[TaskKind] = None
    date: Optional[datetime] = None

    def __post_init__(self) -> None:
        selected = sum((self.show_all, self.kind is not None, self.date is not None))
        if selected != 1:
            raise ValueError("DisplayCommand needs exactly one of show_all, kind or date.")

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"intent": self.intent.value}
        if self.show_all:
            payload["filter"] = "all"
        elif self.kind is not None:
            payload["filter"] = "kind"
            payload["kind"] = self.kind.value
        else:
            payload["filter"] = "date"
            payload["date"] = self.date.isoformat() if self.date else None
        return payload


@dataclass(frozen=True)
class HelpCommand:
    intent: ClassVar[CommandIntent] = CommandIntent.HELP

    topic: Optional[CommandIntent] = None

    def to_payload(self) -> Dict[str, Any]:
        return {"intent": self.intent.value, "topic": self.topic.value if self.topic else None}


@dataclass(frozen=True)
class HomeCommand:
    intent: ClassVar[CommandIntent] = CommandIntent.HOME

    def to_payload(self) -> Dict[str, Any]:
        return {"intent": self.intent.value}


@dataclass(frozen=True)
class HotkeyCommand:
    intent: ClassVar[CommandIntent] = CommandIntent.HOTKEY

    def to_payload(self) -> Dict[str, Any]:
        return {"intent": self.intent.value}


@dataclass(frozen=True)
class UndoCommand:
    intent: ClassVar[CommandIntent] = CommandIntent.UNDO

    def to_payload(self) -> Dict[str, Any]:
        return {"intent": self.intent.value}


@dataclass(frozen=True)
class ExitCommand:
    intent: ClassVar[CommandIntent] = CommandIntent.EXIT

    def to_payload(self) -> Dict[str, Any]:
        return {"intent": self.intent.value}


@dataclass(frozen=True)
class SyncCommand:
    intent: ClassVar[CommandIntent] = CommandIntent.SYNC

    def to_payload(self) -> Dict[str, Any]:
        return {"intent": self.intent.value}


ParsedCommand = Union[
    AddCommand,
    DeleteCommand,
    DoneCommand,
    UpdateCommand,
    SearchCommand,
    DisplayCommand,
    HelpCommand,
    HomeCommand,
    HotkeyCommand,
    UndoCommand,
    ExitCommand,
    SyncCommand,
]


__all__ = [
    "CommandIntent",
    "FieldName",
    "TaskKind",
    "DateRange",
    "AddCommand",
    "DeleteCommand",
    "DoneCommand",
    "UpdateCommand",
    "SearchCommand",
    "DisplayCommand",
    "HelpCommand",
    "HomeCommand",
    "HotkeyCommand",
    "UndoCommand",
    "ExitCommand",
    "SyncCommand",
    "ParsedCommand",
]

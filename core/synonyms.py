"""Static synonym tables for command words, edit fields and task kinds.

Each table maps a canonical enum member to every surface form users may type.
The reverse lookups are built once at import; a surface form claimed by two
members is a configuration bug and fails loudly.
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional, Tuple, TypeVar

from core.commands import CommandIntent, FieldName, TaskKind

E = TypeVar("E")

COMMAND_SYNONYMS: Mapping[CommandIntent, Tuple[str, ...]] = {
    CommandIntent.ADD: ("add", "insert"),
    CommandIntent.DELETE: ("delete", "del", "de", "-", "remove"),
    CommandIntent.DONE: ("done", "finished", "finish", "completed", "complete"),
    CommandIntent.DISPLAY: ("display", "view", "show", "see", "list"),
    CommandIntent.HELP: ("help",),
    CommandIntent.HOME: ("home", "today"),
    CommandIntent.HOTKEY: ("hotkey", "hotkeys", "quick", "hot", "short"),
    CommandIntent.UPDATE: ("update", "edit", "change"),
    CommandIntent.SEARCH: ("search", "find"),
    CommandIntent.UNDO: ("undo",),
    CommandIntent.EXIT: ("exit",),
    CommandIntent.SYNC: ("sync",),
}

# Matched case-sensitively.
FIELD_NAME_SYNONYMS: Mapping[FieldName, Tuple[str, ...]] = {
    FieldName.TITLE: ("NAME", "TITLE"),
    FieldName.DESCRIPTION: ("DESCRIPTION", "DESC"),
    FieldName.START: ("START",),
    FieldName.END: ("END",),
    FieldName.DEADLINE: ("DEADLINE",),
}

TASK_KIND_SYNONYMS: Mapping[TaskKind, Tuple[str, ...]] = {
    TaskKind.DEADLINE_TASK: ("deadline", "due"),
    TaskKind.FLOATING_TASK: ("floating", "normal", "float"),
    TaskKind.TIMED_TASK: ("timedtask", "timed", "slot"),
}


def _build_lookup(table: Mapping[E, Tuple[str, ...]], name: str) -> Dict[str, E]:
    lookup: Dict[str, E] = {}
    for member, surface_forms in table.items():
        for surface in surface_forms:
            if surface in lookup:
                raise ValueError(f"Synonym '{surface}' is listed twice in the {name} table")
            lookup[surface] = member
    return lookup


_COMMAND_LOOKUP = _build_lookup(COMMAND_SYNONYMS, "command")
_FIELD_NAME_LOOKUP = _build_lookup(FIELD_NAME_SYNONYMS, "field name")
_TASK_KIND_LOOKUP = _build_lookup(TASK_KIND_SYNONYMS, "task kind")


def lookup_intent(token: str) -> Optional[CommandIntent]:
    """Return the intent for a command word, ignoring case."""

    return _COMMAND_LOOKUP.get((token or "").lower())


def lookup_field_name(token: str) -> Optional[FieldName]:
    return _FIELD_NAME_LOOKUP.get(token or "")


def lookup_task_kind(token: str) -> Optional[TaskKind]:
    return _TASK_KIND_LOOKUP.get((token or "").lower())


__all__ = [
    "COMMAND_SYNONYMS",
    "FIELD_NAME_SYNONYMS",
    "TASK_KIND_SYNONYMS",
    "lookup_intent",
    "lookup_field_name",
    "lookup_task_kind",
]

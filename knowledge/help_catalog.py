"""Help text for every command, rendered from the live synonym tables.

Usage lines are hand-written; the "also accepted as" lists come straight from
``core.synonyms`` so the catalog cannot drift from what the parser accepts.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from core.commands import CommandIntent
from core.synonyms import COMMAND_SYNONYMS, FIELD_NAME_SYNONYMS, TASK_KIND_SYNONYMS

_USAGE: Dict[CommandIntent, List[str]] = {
    CommandIntent.ADD: [
        "add <title>;                       floating task",
        "add <title>;<date>                 task with a deadline",
        "add <title>;<start> to <end>       timed task (also '<start> - <end>')",
        "add <title>;<date>+<description>   any of the above with a description",
        "Example: add Buy milk;tmr 5pm+semi-skimmed",
        "Dates: today, tmr, fri, next mon, 10/25, oct 25, in 3 days, 5pm, 17:00, noon.",
    ],
    CommandIntent.DELETE: [
        "delete <index>",
        "Example: delete 2",
    ],
    CommandIntent.DONE: [
        "done <index>",
        "Example: done 1",
    ],
    CommandIntent.DISPLAY: [
        "display all                        every task, including completed ones",
        "display <kind>                     deadline | floating | timed",
        "display <date>                     tasks due or scheduled on that day",
        "Example: display tomorrow",
    ],
    CommandIntent.HELP: [
        "help                               this catalog",
        "help <command>                     details for one command",
    ],
    CommandIntent.HOME: [
        "home                               incomplete tasks",
    ],
    CommandIntent.HOTKEY: [
        "hotkey                             list of short command forms",
    ],
    CommandIntent.UPDATE: [
        "edit <index> <FIELD> <new value>",
        "Fields (upper case): {fields}",
        "START, END and DEADLINE take a date phrase, e.g. edit 2 DEADLINE fri 5pm",
        "Example: edit 3 TITLE Buy oat milk",
    ],
    CommandIntent.SEARCH: [
        "search <keyword>                   tasks whose title or description contains it",
        "Example: search milk",
    ],
    CommandIntent.UNDO: [
        "undo                               revert the last add, edit, delete or done",
    ],
    CommandIntent.EXIT: [
        "exit                               leave the program",
    ],
    CommandIntent.SYNC: [
        "sync                               push the task list to the configured SYNC_URL",
    ],
}

_HOTKEYS = [
    "-  <index>     delete",
    "de <index>     delete",
    "del <index>    delete",
    "see <filter>   display",
    "list <filter>  display",
    "find <keyword> search",
    "today          home",
]

_RESERVED_NOTE = "Reserved characters: < > [ ] anywhere, '+' in titles, ';' in descriptions."


class HelpCatalog:
    """Lookup of help text by command intent."""

    def lookup(self, topic: Optional[CommandIntent] = None) -> str:
        if topic is None:
            return self.overview()
        lines = [f"{topic.help_keyword.upper()}"]
        for line in _USAGE[topic]:
            lines.append("  " + line.format(fields=self._field_names()))
        synonyms = [word for word in COMMAND_SYNONYMS[topic] if word != topic.help_keyword]
        if synonyms:
            lines.append("  Also accepted as: " + ", ".join(synonyms))
        if topic is CommandIntent.DISPLAY:
            for kind, words in TASK_KIND_SYNONYMS.items():
                lines.append(f"  {kind.value}: " + ", ".join(words))
        return "\n".join(lines)

    def overview(self) -> str:
        lines = ["Commands:"]
        for intent in CommandIntent:
            first_usage = _USAGE[intent][0].format(fields=self._field_names())
            lines.append(f"  {first_usage}")
        lines.append("Type 'help <command>' for details.")
        lines.append(_RESERVED_NOTE)
        return "\n".join(lines)

    def hotkeys(self) -> str:
        return "Shortcuts:\n" + "\n".join(f"  {line}" for line in _HOTKEYS)

    @staticmethod
    def _field_names() -> str:
        return ", ".join(word for words in FIELD_NAME_SYNONYMS.values() for word in words)


__all__ = ["HelpCatalog"]

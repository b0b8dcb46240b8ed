"""Execute parsed commands against the task store and its collaborators.

The controller is the only place where a ``ParsedCommand`` turns into side
effects. It also owns the *current view*: the list of tasks last shown to the
user. Task indices typed in ``delete``/``done``/``edit`` are 1-based positions
in that view, exactly as the user saw them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from time import perf_counter
from typing import Any, Callable, Dict, List, Optional

from core.command_log import CommandLog, CommandRecord
from core.command_parser import parse_command
from core.commands import (
    AddCommand,
    CommandIntent,
    DeleteCommand,
    DisplayCommand,
    DoneCommand,
    HelpCommand,
    ParsedCommand,
    SearchCommand,
    UpdateCommand,
)
from core.exceptions import CommandError, SyncError, TaskNotFoundError
from core.sync import SyncController
from core.undo import UndoHistory
from knowledge.help_catalog import HelpCatalog
from tools.task_store import Task, TaskFilter, TaskStore

logger = logging.getLogger(__name__)

MESSAGE_UNDO = "Undo is successful"
MESSAGE_NOTHING_TO_UNDO = "Nothing to undo"
MESSAGE_SEARCH = 'Displaying all tasks containing "{keyword}"'
MESSAGE_EXIT = "Goodbye!"
MESSAGE_EMPTY_VIEW = "No tasks to show."

ViewQuery = Callable[[], List[Task]]


@dataclass
class ControllerResponse:
    """Structured result for a single handled command line."""

    text: str
    user_text: str
    intent: Optional[str]
    success: bool
    command: Optional[Dict[str, Any]] = None
    tasks: List[Dict[str, Any]] = field(default_factory=list)
    error_kind: Optional[str] = None
    should_exit: bool = False
    latency_ms: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "user_text": self.user_text,
            "intent": self.intent,
            "success": self.success,
            "command": self.command,
            "tasks": self.tasks,
            "error_kind": self.error_kind,
            "should_exit": self.should_exit,
            "latency_ms": self.latency_ms,
        }


@dataclass
class _Outcome:
    text: str
    tasks: List[Task] = field(default_factory=list)
    success: bool = True
    error_kind: Optional[str] = None
    should_exit: bool = False


class TaskController:
    """Coordinates parsing, execution, undo and logging for one user session."""

    def __init__(
        self,
        store: TaskStore,
        *,
        help_catalog: Optional[HelpCatalog] = None,
        undo_history: Optional[UndoHistory] = None,
        sync_controller: Optional[SyncController] = None,
        command_log: Optional[CommandLog] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._store = store
        self._help = help_catalog or HelpCatalog()
        self._undo = undo_history or UndoHistory()
        self._sync = sync_controller or SyncController()
        self._log = command_log
        self._clock = clock or datetime.now
        self._view_query: ViewQuery = self._home_query
        self._view_ids: Optional[List[str]] = None
        self._handlers: Dict[CommandIntent, Callable[[Any], _Outcome]] = {
            CommandIntent.ADD: self._add,
            CommandIntent.DELETE: self._delete,
            CommandIntent.DONE: self._done,
            CommandIntent.UPDATE: self._update,
            CommandIntent.SEARCH: self._search,
            CommandIntent.DISPLAY: self._display,
            CommandIntent.HOME: self._home,
            CommandIntent.HELP: self._show_help,
            CommandIntent.HOTKEY: self._show_hotkeys,
            CommandIntent.UNDO: self._undo_last,
            CommandIntent.EXIT: self._exit,
            CommandIntent.SYNC: self._sync_tasks,
        }

    # WHAT: parse, execute and log one line of user input.
    # WHY: CLI and HTTP callers need identical behavior and error rendering.
    # HOW: parse with the controller clock as "now", run the intent handler and
    # turn parse/lookup/sync failures into a failed response instead of raising.
    def handle_message(self, message: str) -> ControllerResponse:
        started = perf_counter()
        command: Optional[ParsedCommand] = None
        try:
            command = parse_command(message, reference=self._clock())
            outcome = self.execute(command)
        except CommandError as exc:
            logger.info("Rejected %r: %s", message, exc.user_message)
            outcome = _Outcome(text=exc.user_message, success=False, error_kind=exc.kind)
        except TaskNotFoundError as exc:
            outcome = _Outcome(text=str(exc), success=False, error_kind="task_not_found")
        except SyncError as exc:
            logger.warning("Sync failed: %s", exc)
            outcome = _Outcome(text=str(exc), success=False, error_kind="sync_error")

        response = ControllerResponse(
            text=outcome.text,
            user_text=message,
            intent=command.intent.value if command is not None else None,
            success=outcome.success,
            command=command.to_payload() if command is not None else None,
            tasks=[task.to_dict() for task in outcome.tasks],
            error_kind=outcome.error_kind,
            should_exit=outcome.should_exit,
            latency_ms=int((perf_counter() - started) * 1000),
        )
        self._record(response)
        return response

    def execute(self, command: ParsedCommand) -> _Outcome:
        return self._handlers[command.intent](command)

    def current_view(self) -> List[Task]:
        return self._refresh_view()

    # ------------------------------------------------------------------
    # Mutating commands
    # ------------------------------------------------------------------
    def _add(self, command: AddCommand) -> _Outcome:
        before = self._store.snapshot()
        task = self._store.add(command.title, command.description, command.schedule)
        self._undo.push(before)
        return self._mutated(f'Added "{task.title}"')

    def _delete(self, command: DeleteCommand) -> _Outcome:
        task_id = self._task_id_at(command.index)
        before = self._store.snapshot()
        removed = self._store.delete(task_id)
        if removed is None:
            raise TaskNotFoundError(command.index)
        self._undo.push(before)
        return self._mutated(f'Deleted "{removed.title}"')

    def _done(self, command: DoneCommand) -> _Outcome:
        task_id = self._task_id_at(command.index)
        before = self._store.snapshot()
        completed = self._store.complete(task_id)
        if completed is None:
            raise TaskNotFoundError(command.index)
        self._undo.push(before)
        return self._mutated(f'Marked "{completed.title}" as done')

    def _update(self, command: UpdateCommand) -> _Outcome:
        task_id = self._task_id_at(command.index)
        before = self._store.snapshot()
        updated = self._store.update(task_id, command.field, command.value)
        if updated is None:
            raise TaskNotFoundError(command.index)
        self._undo.push(before)
        return self._mutated(f'Updated {command.field.value} of "{updated.title}"')

    def _undo_last(self, command: ParsedCommand) -> _Outcome:
        snapshot = self._undo.pop()
        if snapshot is None:
            return self._mutated(MESSAGE_NOTHING_TO_UNDO)
        self._store.restore(snapshot)
        return self._mutated(MESSAGE_UNDO)

    def _mutated(self, feedback: str) -> _Outcome:
        """Re-query the current view and show it, so the next index matches what is on screen."""

        tasks = self._refresh_view()
        return _Outcome(text=_with_listing(feedback, tasks), tasks=tasks)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------
    def _search(self, command: SearchCommand) -> _Outcome:
        keyword = command.keyword
        tasks = self._switch_view(lambda: self._store.search(keyword))
        return _Outcome(text=_with_listing(MESSAGE_SEARCH.format(keyword=keyword), tasks), tasks=tasks)

    def _display(self, command: DisplayCommand) -> _Outcome:
        if command.show_all:
            task_filter = TaskFilter(show_all=True)
            header = "All tasks"
        elif command.kind is not None:
            task_filter = TaskFilter(kind=command.kind)
            header = f"{command.kind.value.capitalize()} tasks"
        else:
            day = command.date.date() if command.date else self._clock().date()
            task_filter = TaskFilter(on_date=day)
            header = f"Tasks on {day.isoformat()}"
        tasks = self._switch_view(lambda: self._store.retrieve(task_filter))
        return _Outcome(text=_with_listing(header, tasks), tasks=tasks)

    def _home(self, command: ParsedCommand) -> _Outcome:
        tasks = self._switch_view(self._home_query)
        return _Outcome(text=_with_listing("Incomplete tasks", tasks), tasks=tasks)

    def _home_query(self) -> List[Task]:
        return self._store.retrieve(TaskFilter())

    def _switch_view(self, query: ViewQuery) -> List[Task]:
        self._view_query = query
        return self._refresh_view()

    def _refresh_view(self) -> List[Task]:
        tasks = self._view_query()
        self._view_ids = [task.id for task in tasks]
        return tasks

    def _task_id_at(self, index: int) -> str:
        if self._view_ids is None:
            self._refresh_view()
        view = self._view_ids or []
        if not 1 <= index <= len(view):
            raise TaskNotFoundError(index)
        return view[index - 1]

    # ------------------------------------------------------------------
    # Session commands
    # ------------------------------------------------------------------
    def _show_help(self, command: HelpCommand) -> _Outcome:
        return _Outcome(text=self._help.lookup(command.topic))

    def _show_hotkeys(self, command: ParsedCommand) -> _Outcome:
        return _Outcome(text=self._help.hotkeys())

    def _exit(self, command: ParsedCommand) -> _Outcome:
        return _Outcome(text=MESSAGE_EXIT, should_exit=True)

    def _sync_tasks(self, command: ParsedCommand) -> _Outcome:
        count = self._sync.sync(self._store.snapshot())
        noun = "task" if count == 1 else "tasks"
        return _Outcome(text=f"Synced {count} {noun}")

    def _record(self, response: ControllerResponse) -> None:
        if self._log is None:
            return
        self._log.log(
            CommandRecord.new(
                user_text=response.user_text,
                intent=response.intent,
                success=response.success,
                response_text=response.text,
                command=response.command,
                error_kind=response.error_kind,
                latency_ms=response.latency_ms,
            )
        )


def render_tasks(tasks: List[Task]) -> str:
    """Render tasks as the numbered list users refer to by index."""

    if not tasks:
        return MESSAGE_EMPTY_VIEW
    lines = []
    for position, task in enumerate(tasks, start=1):
        status_box = "x" if task.completed else " "
        parts = [f"{position}. [{status_box}] {task.title}"]
        if task.start and task.end:
            parts.append(f"({_short(task.start)} - {_short(task.end)})")
        elif task.deadline:
            parts.append(f"(due {_short(task.deadline)})")
        if task.description:
            parts.append(f"- {task.description}")
        lines.append(" ".join(parts))
    return "\n".join(lines)


def _with_listing(header: str, tasks: List[Task]) -> str:
    return f"{header}\n{render_tasks(tasks)}"


def _short(value: str) -> str:
    try:
        return datetime.fromisoformat(value).strftime("%a %d %b %Y %H:%M")
    except ValueError:
        return value


__all__ = ["TaskController", "ControllerResponse", "render_tasks"]

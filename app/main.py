"""Assemble the task controller and run the interactive CLI loop."""

from __future__ import annotations

import logging

from app.config import (
    get_command_log_path,
    get_log_backup_count,
    get_log_level,
    get_log_max_bytes,
    get_sync_timeout,
    get_sync_url,
    get_tasks_path,
    get_undo_depth,
    is_logging_enabled,
)
from core.command_log import CommandLog
from core.controller import TaskController
from core.sync import SyncController
from core.undo import UndoHistory
from knowledge.help_catalog import HelpCatalog
from tools.task_store import TaskStore


# -- Controller construction ---------------------------------------------------
def build_controller() -> TaskController:
    """Wire up the store and collaborators for CLI and the web API.

    WHAT: instantiate the JSON task store, undo history, help catalog, sync
    client and command log.
    WHY: every entry point (CLI/web) must share identical wiring so behavior
    stays reproducible across environments.
    HOW: pull runtime configuration from ``app.config`` helpers and hand the
    resulting instances to ``core.controller.TaskController``.
    """
    store = TaskStore(get_tasks_path())
    command_log = CommandLog(
        get_command_log_path(),
        enabled=is_logging_enabled(),
        max_bytes=get_log_max_bytes(),
        backup_count=get_log_backup_count(),
    )
    sync = SyncController(get_sync_url(), timeout=get_sync_timeout())
    return TaskController(
        store,
        help_catalog=HelpCatalog(),
        undo_history=UndoHistory(max_depth=get_undo_depth()),
        sync_controller=sync,
        command_log=command_log,
    )


# -- Interactive CLI loop ------------------------------------------------------
def main() -> None:
    """Minimal CLI driver that proxies stdin to the controller.

    WHAT: read command lines, forward them to ``handle_message``, and echo the
    response.
    WHY: gives a local surface identical to the HTTP API so parser behavior can
    be checked by hand.
    HOW: reuse ``build_controller`` (same stack the API uses) and stop on
    EOF/KeyboardInterrupt or when the controller reports an exit command.
    """
    logging.basicConfig(level=get_log_level(), format="%(levelname)s %(name)s: %(message)s")
    controller = build_controller()
    print(controller.handle_message("home").text)
    print("Type 'help' for the command catalog, 'exit' to stop.")

    while True:
        try:
            message = input("> ")
        except (EOFError, KeyboardInterrupt):
            print("\nExiting.")
            break

        if not message.strip():
            continue

        response = controller.handle_message(message)
        print(response.text)
        if response.should_exit:
            break


if __name__ == "__main__":
    main()

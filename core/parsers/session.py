"""Parsers for commands that carry no task data (help, undo, sync, ...)."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from core.commands import ExitCommand, HelpCommand, HomeCommand, HotkeyCommand, SyncCommand, UndoCommand
from core.parser_utils import second_token
from core.synonyms import lookup_intent
from core.exceptions import UnrecognizedCommandError


def parse_help(message: str, reference: Optional[datetime] = None) -> HelpCommand:
    """``help`` alone is general help; ``help <command word>`` targets one intent."""
    token = second_token(message)
    if token is None:
        return HelpCommand()
    topic = lookup_intent(token)
    if topic is None:
        raise UnrecognizedCommandError()
    return HelpCommand(topic=topic)


def parse_home(message: str, reference: Optional[datetime] = None) -> HomeCommand:
    return HomeCommand()


def parse_hotkey(message: str, reference: Optional[datetime] = None) -> HotkeyCommand:
    return HotkeyCommand()


def parse_undo(message: str, reference: Optional[datetime] = None) -> UndoCommand:
    return UndoCommand()


def parse_exit(message: str, reference: Optional[datetime] = None) -> ExitCommand:
    return ExitCommand()


def parse_sync(message: str, reference: Optional[datetime] = None) -> SyncCommand:
    return SyncCommand()


__all__ = ["parse_help", "parse_home", "parse_hotkey", "parse_undo", "parse_exit", "parse_sync"]

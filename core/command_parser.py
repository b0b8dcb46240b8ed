"""Command parser that turns one line of user input into a typed command."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Dict, Optional

from core.commands import CommandIntent, ParsedCommand
from core.exceptions import CommandError, InvalidFormatError, UnrecognizedCommandError
from core.parser_utils import check_reserved_characters, split_first_token
from core.parsers import session, tasks, views
from core.synonyms import lookup_intent

logger = logging.getLogger(__name__)

IntentParser = Callable[[str, Optional[datetime]], ParsedCommand]

_PARSERS: Dict[CommandIntent, IntentParser] = {
    CommandIntent.ADD: tasks.parse_add,
    CommandIntent.DELETE: tasks.parse_delete,
    CommandIntent.DONE: tasks.parse_done,
    CommandIntent.UPDATE: tasks.parse_update,
    CommandIntent.SEARCH: views.parse_search,
    CommandIntent.DISPLAY: views.parse_display,
    CommandIntent.HELP: session.parse_help,
    CommandIntent.HOME: session.parse_home,
    CommandIntent.HOTKEY: session.parse_hotkey,
    CommandIntent.UNDO: session.parse_undo,
    CommandIntent.EXIT: session.parse_exit,
    CommandIntent.SYNC: session.parse_sync,
}


def resolve_intent(message: str) -> CommandIntent:
    """Map the first word of ``message`` onto a command intent."""

    token, _ = split_first_token(message)
    intent = lookup_intent(token)
    if intent is None:
        raise UnrecognizedCommandError()
    return intent


def parse_command(message: str, *, reference: Optional[datetime] = None) -> ParsedCommand:
    """Parse a raw command line or raise a ``CommandError``.

    WHAT: reserved-character guard, intent lookup, then the intent's parser.
    WHY: the user should always see a message scoped to the command they
    typed ("help add") rather than whatever low-level error an extractor hit.
    HOW: ``CommandError`` subclasses pass through untouched; ``ValueError`` and
    ``IndexError`` from extractors become the intent's ``InvalidFormatError``.
    ``reference`` pins "now" for relative dates.
    """
    message = message or ""
    check_reserved_characters(message)
    intent = resolve_intent(message)

    try:
        command = _PARSERS[intent](message, reference)
    except CommandError:
        raise
    except (ValueError, IndexError) as exc:
        logger.debug("Rejecting %s command %r: %s", intent.value, message, exc)
        raise InvalidFormatError(intent) from exc

    logger.debug("Parsed %s command: %s", intent.value, command.to_payload())
    return command


__all__ = ["parse_command", "resolve_intent", "ParsedCommand"]

"""Parsers for read-only list commands: display and search."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from core.commands import CommandIntent, DisplayCommand, SearchCommand
from core.exceptions import CommandError, InvalidFormatError
from core.parser_utils import extract_keyword, extract_remainder, resolve_dates, second_token
from core.synonyms import lookup_task_kind

VIEW_ALL_TOKEN = "all"


def parse_search(message: str, reference: Optional[datetime] = None) -> SearchCommand:
    return SearchCommand(keyword=extract_keyword(message))


def parse_display(message: str, reference: Optional[datetime] = None) -> DisplayCommand:
    """WHAT: pick the view filter for ``display ...``.

    WHY: ``display deadline`` and ``display tomorrow`` share one command word,
    so the filter kind has to be inferred from the text.
    HOW: try ``all``, then a task-kind synonym, then a date phrase; the first
    that fits wins, so a word that is both a kind and a date reads as a kind.
    """
    token = second_token(message)
    if token == VIEW_ALL_TOKEN:
        return DisplayCommand(show_all=True)

    kind = lookup_task_kind(token or "")
    if kind is not None:
        return DisplayCommand(kind=kind)

    try:
        dates = resolve_dates(extract_remainder(message), reference=reference)
    except CommandError as exc:
        raise InvalidFormatError(CommandIntent.DISPLAY) from exc
    return DisplayCommand(date=dates[0])


__all__ = ["parse_display", "parse_search", "VIEW_ALL_TOKEN"]

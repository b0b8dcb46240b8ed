"""Parsers for commands that change a single task: add, edit, delete, done."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from core.commands import AddCommand, CommandIntent, DateRange, DeleteCommand, DoneCommand, FieldName, UpdateCommand
from core.exceptions import InvalidFormatError
from core.parser_utils import (
    extract_add_date_phrase,
    extract_description,
    extract_field_name,
    extract_index,
    extract_new_value,
    extract_title,
    resolve_dates,
    split_first_token,
    validate_description_text,
    validate_title_text,
)


def parse_add(message: str, reference: Optional[datetime] = None) -> AddCommand:
    """Parse ``add <title>;<date phrase>+<description>``.

    The date phrase is optional: a blank phrase gives a floating task, one
    date a deadline, two dates a start/end slot. Anything more is rejected.
    """
    title = extract_title(message)
    description = extract_description(message)
    phrase = extract_add_date_phrase(message)

    dates = resolve_dates(phrase, reference=reference) if phrase else []
    if len(dates) > 2:
        raise InvalidFormatError(CommandIntent.ADD)
    return AddCommand(title=title, description=description, schedule=DateRange.from_dates(tuple(dates)))


def parse_delete(message: str, reference: Optional[datetime] = None) -> DeleteCommand:
    index, _ = extract_index(message)
    return DeleteCommand(index=index)


def parse_done(message: str, reference: Optional[datetime] = None) -> DoneCommand:
    index, _ = extract_index(message)
    return DoneCommand(index=index)


def parse_update(message: str, reference: Optional[datetime] = None) -> UpdateCommand:
    """Parse ``edit <index> <FIELD> <new value>``."""
    try:
        index, residual = extract_index(message)
    except ValueError as exc:
        raise InvalidFormatError(CommandIntent.UPDATE) from exc
    # A missing value is reported before an unknown field name ("edit 2 start").
    field_token, value_text = split_first_token(residual)
    if field_token:
        raw_value = extract_new_value(value_text)
    field, _ = extract_field_name(residual)
    return UpdateCommand(index=index, field=field, value=_coerce_new_value(field, raw_value, reference))


def _coerce_new_value(field: FieldName, raw_value: str, reference: Optional[datetime]) -> Union[str, datetime]:
    if field is FieldName.TITLE:
        return validate_title_text(raw_value)
    if field is FieldName.DESCRIPTION:
        return validate_description_text(raw_value)
    if field.holds_datetime:
        return resolve_dates(raw_value, reference=reference)[0]
    raise AssertionError(f"Unhandled field name {field!r}")


__all__ = ["parse_add", "parse_delete", "parse_done", "parse_update"]

"""Field extractors that pull one datum at a time out of a raw command line.

Each helper takes the raw (or residual) string and returns its datum, plus the
unparsed remainder when later extractors need it. None of them keep state, so
they can be called in any order and tested on their own.
"""

from __future__ import annotations

from typing import Optional, Tuple

from core.commands import FieldName
from core.exceptions import (
    MESSAGE_MISSING_FIELD_NAME,
    MESSAGE_MISSING_NEW_VALUE,
    MESSAGE_MISSING_TITLE,
    InvalidFieldNameError,
    MissingDelimiterError,
    MissingFieldError,
    ReservedCharacterError,
)
from core.synonyms import lookup_field_name

FIELD_DELIMITER = ";"
DESCRIPTION_MARKER = "+"
RESERVED_CHARACTERS = ("<", ">", "[", "]")


def split_first_token(text: str) -> Tuple[str, str]:
    """Return the first whitespace-delimited token and everything after it."""

    parts = (text or "").split(None, 1)
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1]


def second_token(message: str) -> Optional[str]:
    _, rest = split_first_token(message)
    token, _ = split_first_token(rest)
    return token or None


def check_reserved_characters(message: str) -> None:
    """Reject ``< > [ ]`` anywhere in the input, checked in that order."""

    for character in RESERVED_CHARACTERS:
        if character in message:
            raise ReservedCharacterError(character)


def validate_title_text(title: str) -> str:
    if DESCRIPTION_MARKER in title:
        raise ReservedCharacterError.in_title()
    if FIELD_DELIMITER in title:
        raise ReservedCharacterError(FIELD_DELIMITER)
    return title


def validate_description_text(description: str) -> str:
    if FIELD_DELIMITER in description:
        raise ReservedCharacterError.in_description()
    return description


def extract_title(message: str) -> str:
    """Return the text between the command word and the first ``;``."""

    if FIELD_DELIMITER not in message:
        raise MissingDelimiterError()
    _, rest = split_first_token(message)
    title = rest.split(FIELD_DELIMITER, 1)[0].strip()
    if not title:
        raise MissingFieldError(MESSAGE_MISSING_TITLE)
    return validate_title_text(title)


def extract_description(message: str) -> str:
    """Return everything after the first ``+``; empty when there is none."""

    marker = message.find(DESCRIPTION_MARKER)
    if marker == -1 or marker == len(message) - 1:
        return ""
    description = message[marker + 1:]
    return validate_description_text(description).strip()


def extract_add_date_phrase(message: str) -> str:
    """Return the date phrase of an add command: between ``;`` and ``+``."""

    if FIELD_DELIMITER not in message:
        return ""
    after_title = message.split(FIELD_DELIMITER, 1)[1]
    return after_title.split(DESCRIPTION_MARKER, 1)[0].strip()


def extract_index(message: str) -> Tuple[int, str]:
    """Return the 1-based task index after the command word and the remainder.

    Raises ``ValueError`` for a missing or non-numeric index; the command
    parser turns that into the intent's format error.
    """

    _, rest = split_first_token(message)
    token, remainder = split_first_token(rest)
    if not token:
        raise ValueError("Task index is missing.")
    return int(token), remainder


def extract_field_name(residual: str) -> Tuple[FieldName, str]:
    token, remainder = split_first_token(residual)
    if not token:
        raise MissingFieldError(MESSAGE_MISSING_FIELD_NAME)
    field = lookup_field_name(token)
    if field is None:
        raise InvalidFieldNameError(token)
    return field, remainder


def extract_new_value(residual: str) -> str:
    value = (residual or "").strip()
    if not value:
        raise MissingFieldError(MESSAGE_MISSING_NEW_VALUE)
    return value


def extract_keyword(message: str) -> str:
    _, rest = split_first_token(message)
    keyword = rest.strip()
    if not keyword:
        raise ValueError("Search keyword is missing.")
    return keyword


def extract_remainder(message: str) -> str:
    _, rest = split_first_token(message)
    return rest.strip()


__all__ = [
    "FIELD_DELIMITER",
    "DESCRIPTION_MARKER",
    "RESERVED_CHARACTERS",
    "split_first_token",
    "second_token",
    "check_reserved_characters",
    "validate_title_text",
    "validate_description_text",
    "extract_title",
    "extract_description",
    "extract_add_date_phrase",
    "extract_index",
    "extract_field_name",
    "extract_new_value",
    "extract_keyword",
    "extract_remainder",
]

"""Shared extractor helpers for command parsing."""

from .text import (
    check_reserved_characters,
    extract_add_date_phrase,
    extract_description,
    extract_field_name,
    extract_index,
    extract_keyword,
    extract_new_value,
    extract_remainder,
    extract_title,
    second_token,
    split_first_token,
    validate_description_text,
    validate_title_text,
)
from .datetime import inherit_meridiem, normalize_date_phrase, resolve_dates

__all__ = [
    "check_reserved_characters",
    "extract_add_date_phrase",
    "extract_description",
    "extract_field_name",
    "extract_index",
    "extract_keyword",
    "extract_new_value",
    "extract_remainder",
    "extract_title",
    "second_token",
    "split_first_token",
    "validate_description_text",
    "validate_title_text",
    "inherit_meridiem",
    "normalize_date_phrase",
    "resolve_dates",
]

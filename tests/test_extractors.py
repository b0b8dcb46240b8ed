from __future__ import annotations

import pytest

from core.commands import FieldName
from core.exceptions import InvalidFieldNameError, MissingDelimiterError, MissingFieldError, ReservedCharacterError
from core.parser_utils import (
    check_reserved_characters,
    extract_add_date_phrase,
    extract_description,
    extract_field_name,
    extract_index,
    extract_keyword,
    extract_new_value,
    extract_title,
    second_token,
    split_first_token,
)


def test_split_first_token() -> None:
    assert split_first_token("  add  Buy milk ") == ("add", "Buy milk ")
    assert split_first_token("home") == ("home", "")
    assert split_first_token("") == ("", "")


def test_second_token() -> None:
    assert second_token("display all tasks") == "all"
    assert second_token("display") is None


def test_extract_title_and_description() -> None:
    message = "add  Write report ;mon+ with charts "
    assert extract_title(message) == "Write report"
    assert extract_description(message) == "with charts"
    assert extract_add_date_phrase(message) == "mon"


def test_extract_description_absent_or_trailing_marker() -> None:
    assert extract_description("add Pay rent;fri") == ""
    assert extract_description("add Pay rent;fri+") == ""


def test_extract_title_errors() -> None:
    with pytest.raises(MissingDelimiterError):
        extract_title("add Pay rent")
    with pytest.raises(MissingFieldError):
        extract_title("add   ;fri")


def test_extract_index_returns_remainder() -> None:
    assert extract_index("edit 4 TITLE New") == (4, "TITLE New")
    with pytest.raises(ValueError):
        extract_index("delete")
    with pytest.raises(ValueError):
        extract_index("delete 1st")


def test_extract_field_name() -> None:
    assert extract_field_name("START tmr 9am") == (FieldName.START, "tmr 9am")
    assert extract_field_name("NAME x") == (FieldName.TITLE, "x")
    with pytest.raises(InvalidFieldNameError) as excinfo:
        extract_field_name("Start tmr")
    assert excinfo.value.field_name == "Start"
    with pytest.raises(MissingFieldError):
        extract_field_name("  ")


def test_extract_new_value() -> None:
    assert extract_new_value("  fresh title ") == "fresh title"
    with pytest.raises(MissingFieldError):
        extract_new_value("")


def test_extract_keyword() -> None:
    assert extract_keyword("search  milk run ") == "milk run"
    with pytest.raises(ValueError):
        extract_keyword("search   ")


def test_reserved_characters_checked_in_order() -> None:
    check_reserved_characters("add plain title;")
    with pytest.raises(ReservedCharacterError) as excinfo:
        check_reserved_characters("add [x] <y>")
    assert excinfo.value.character == "<"

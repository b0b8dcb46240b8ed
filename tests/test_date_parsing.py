from __future__ import annotations

from datetime import date, datetime, time

import pytest

from core.exceptions import InvalidDateTimeFormatError
from core.parser_utils import inherit_meridiem, normalize_date_phrase, resolve_dates
from core.text_parsing import find_datetimes, parse_clock, resolve_weekday

# Monday
REFERENCE = datetime(2026, 10, 19, 9, 30)


@pytest.mark.parametrize(
    "phrase,expected",
    [
        ("today", datetime(2026, 10, 19, 9, 30)),
        ("tomorrow 5pm", datetime(2026, 10, 20, 17, 0)),
        ("fri", datetime(2026, 10, 23, 9, 30)),
        ("mon", datetime(2026, 10, 19, 9, 30)),
        ("next mon", datetime(2026, 10, 26, 9, 30)),
        ("10/25", datetime(2026, 10, 25, 9, 30)),
        ("10/25/27 8am", datetime(2027, 10, 25, 8, 0)),
        ("oct 25 3pm", datetime(2026, 10, 25, 15, 0)),
        ("25th december", datetime(2026, 12, 25, 9, 30)),
        ("in 3 days", datetime(2026, 10, 22, 9, 30)),
        ("in 2 hours", datetime(2026, 10, 19, 11, 30)),
        ("noon", datetime(2026, 10, 19, 12, 0)),
        ("17:45", datetime(2026, 10, 19, 17, 45)),
        ("wed at 7", datetime(2026, 10, 21, 7, 0)),
        ("12am", datetime(2026, 10, 19, 0, 0)),
    ],
)
def test_single_phrases(phrase: str, expected: datetime) -> None:
    assert find_datetimes(phrase, reference=REFERENCE) == [expected]


def test_range_shares_day() -> None:
    assert find_datetimes("fri 2pm to 5pm", reference=REFERENCE) == [
        datetime(2026, 10, 23, 14, 0),
        datetime(2026, 10, 23, 17, 0),
    ]


def test_inherited_day_rolls_over_midnight() -> None:
    assert find_datetimes("10pm to 1am", reference=REFERENCE) == [
        datetime(2026, 10, 19, 22, 0),
        datetime(2026, 10, 20, 1, 0),
    ]


def test_unknown_words_are_ignored() -> None:
    assert find_datetimes("whenever works", reference=REFERENCE) == []


def test_normalize_date_phrase() -> None:
    assert normalize_date_phrase("  Tmr   2-5PM ") == "tomorrow 2 to 5pm"


@pytest.mark.parametrize(
    "phrase,expected",
    [
        ("2 to 5pm", "2pm to 5pm"),
        ("fri 2 to 5pm", "fri 2pm to 5pm"),
        ("2am to 5pm", "2am to 5pm"),
        ("2pm to 5", "2pm to 5"),
        ("mon to fri 5pm", "mon to fri 5pm"),
    ],
)
def test_inherit_meridiem_only_copies_trailing_pm(phrase: str, expected: str) -> None:
    assert inherit_meridiem(phrase) == expected


def test_resolve_dates_range_with_dash() -> None:
    assert resolve_dates("tmr 9am-11am", reference=REFERENCE) == [
        datetime(2026, 10, 20, 9, 0),
        datetime(2026, 10, 20, 11, 0),
    ]


def test_resolve_dates_rejects_empty_phrase() -> None:
    with pytest.raises(InvalidDateTimeFormatError):
        resolve_dates("", reference=REFERENCE)


def test_resolve_dates_rejects_half_range() -> None:
    with pytest.raises(InvalidDateTimeFormatError):
        resolve_dates("fri to whenever", reference=REFERENCE)


def test_resolve_dates_rejects_explicitly_reversed_range() -> None:
    with pytest.raises(InvalidDateTimeFormatError):
        resolve_dates("fri 5pm to wed 5pm", reference=REFERENCE)


def test_parse_clock_bounds() -> None:
    assert parse_clock(12, 0, "pm") == time(12, 0)
    assert parse_clock(12, 0, "am") == time(0, 0)
    assert parse_clock(13, 0, "pm") is None
    assert parse_clock(24, 0) is None
    assert parse_clock(9, 60) is None


def test_resolve_weekday() -> None:
    monday = date(2026, 10, 19)
    assert resolve_weekday("mon", monday) == monday
    assert resolve_weekday("mon", monday, strictly_after=True) == date(2026, 10, 26)
    assert resolve_weekday("sun", monday) == date(2026, 10, 25)
    assert resolve_weekday("someday", monday) is None


@pytest.mark.parametrize("phrase", ["in 99999999 days", "in 9999999999 hours", "in 99999 years"])
def test_out_of_range_offsets_resolve_to_nothing(phrase: str) -> None:
    assert find_datetimes(phrase, reference=REFERENCE) == []
    with pytest.raises(InvalidDateTimeFormatError):
        resolve_dates(phrase, reference=REFERENCE)

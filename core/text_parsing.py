"""Date/time grammar for free-text task commands.

The grammar is a single alternation of token patterns scanned left to right.
Tokens are grouped into "slots" (a day plus a time of day); every completed
slot becomes one timestamp. ``to`` always closes a slot, so ``fri 2pm to 5pm``
yields two timestamps on the same Friday.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterator, List, Optional

from dateutil.relativedelta import FR, MO, SA, SU, TH, TU, WE, relativedelta

_WEEKDAYS = {
    "monday": MO,
    "mon": MO,
    "tuesday": TU,
    "tues": TU,
    "tue": TU,
    "wednesday": WE,
    "wed": WE,
    "thursday": TH,
    "thurs": TH,
    "thur": TH,
    "thu": TH,
    "friday": FR,
    "fri": FR,
    "saturday": SA,
    "sat": SA,
    "sunday": SU,
    "sun": SU,
}

_MONTHS = {
    "january": 1,
    "jan": 1,
    "february": 2,
    "feb": 2,
    "march": 3,
    "mar": 3,
    "april": 4,
    "apr": 4,
    "may": 5,
    "june": 6,
    "jun": 6,
    "july": 7,
    "jul": 7,
    "august": 8,
    "aug": 8,
    "september": 9,
    "sept": 9,
    "sep": 9,
    "october": 10,
    "oct": 10,
    "november": 11,
    "nov": 11,
    "december": 12,
    "dec": 12,
}

_RELATIVE_DAYS = {
    "today": 0,
    "tomorrow": 1,
    "yesterday": -1,
}

_OFFSET_UNITS = {
    "minute": "minutes",
    "min": "minutes",
    "hour": "hours",
    "hr": "hours",
    "day": "days",
    "week": "weeks",
    "month": "months",
    "year": "years",
}

_NAMED_TIMES = {
    "noon": time(12, 0),
    "midnight": time(0, 0),
}


def _alternation(names) -> str:
    return "|".join(sorted(names, key=len, reverse=True))


_TOKEN_PATTERN = re.compile(
    rf"""
    (?P<offset>\bin\s+(?P<offset_amount>\d+)\s+(?P<offset_unit>{_alternation(_OFFSET_UNITS)})s?\b)
    |(?P<numeric>\b(?P<num_month>\d{{1,2}})/(?P<num_day>\d{{1,2}})(?:/(?P<num_year>\d{{4}}|\d{{2}}))?\b)
    |(?P<month_day>\b(?P<md_month>{_alternation(_MONTHS)})\.?\s+(?P<md_day>\d{{1,2}})(?:st|nd|rd|th)?\b(?:,?\s+(?P<md_year>\d{{4}})\b)?)
    |(?P<day_month>\b(?P<dm_day>\d{{1,2}})(?:st|nd|rd|th)?\s+(?P<dm_month>{_alternation(_MONTHS)})\b(?:\s+(?P<dm_year>\d{{4}})\b)?)
    |(?P<clock>\b(?P<clock_hour>\d{{1,2}})(?::(?P<clock_minute>\d{{2}}))?\s*(?P<meridiem>am|pm)\b)
    |(?P<clock24>\b(?P<h24_hour>\d{{1,2}}):(?P<h24_minute>\d{{2}})\b)
    |(?P<at_hour>\bat\s+(?P<at_value>\d{{1,2}})\b(?!\s*(?::|am\b|pm\b)))
    |(?P<weekday>\b(?:(?P<weekday_prefix>next|this)\s+)?(?P<weekday_name>{_alternation(_WEEKDAYS)})\b)
    |(?P<relative>\b(?:{_alternation(_RELATIVE_DAYS)})\b)
    |(?P<named_time>\b(?:{_alternation(_NAMED_TIMES)})\b)
    |(?P<now>\bnow\b)
    |(?P<separator>\bto\b)
    """,
    re.VERBOSE,
)


@dataclass
class _Token:
    kind: str
    day: Optional[date] = None
    clock: Optional[time] = None
    moment: Optional[datetime] = None


@dataclass
class _Slot:
    day: Optional[date] = None
    clock: Optional[time] = None
    moment: Optional[datetime] = None

    def is_empty(self) -> bool:
        return self.day is None and self.clock is None and self.moment is None


def find_datetimes(text: str, reference: Optional[datetime] = None) -> List[datetime]:
    """Return every timestamp mentioned in ``text`` in order of appearance.

    Days without a time of day take the reference time; times without a day
    reuse the previous slot's day (or the reference day for the first slot).
    An end time that would land before the timestamp just before it, and whose
    day was inherited, rolls over to the following day.
    """

    reference = (reference or datetime.now()).replace(second=0, microsecond=0)
    results: List[datetime] = []
    previous_day: Optional[date] = None
    for slot in _group_slots(_tokenize(text or "", reference)):
        if slot.moment is not None:
            value = slot.moment
        else:
            day = slot.day or previous_day or reference.date()
            clock = slot.clock if slot.clock is not None else reference.time()
            value = datetime.combine(day, clock)
            if slot.day is None and results and value < results[-1]:
                value += timedelta(days=1)
        previous_day = value.date()
        results.append(value)
    return results


def parse_clock(hour: int, minute: int = 0, meridiem: Optional[str] = None) -> Optional[time]:
    """Convert 12h (with ``meridiem``) or 24h clock readings into ``time``."""

    if not 0 <= minute <= 59:
        return None
    if meridiem:
        if not 1 <= hour <= 12:
            return None
        hour = hour % 12
        if meridiem == "pm":
            hour += 12
    elif not 0 <= hour <= 23:
        return None
    return time(hour, minute)


def resolve_weekday(name: str, reference: date, *, strictly_after: bool = False) -> Optional[date]:
    weekday = _WEEKDAYS.get(name)
    if weekday is None:
        return None
    if strictly_after:
        return reference + relativedelta(days=+1, weekday=weekday(+1))
    return reference + relativedelta(weekday=weekday(+1))


def _tokenize(text: str, reference: datetime) -> Iterator[_Token]:
    for match in _TOKEN_PATTERN.finditer(text.lower()):
        token = _build_token(match, reference)
        if token is not None:
            yield token


def _build_token(match: re.Match[str], reference: datetime) -> Optional[_Token]:
    kind = match.lastgroup or ""
    today = reference.date()

    if kind == "separator":
        return _Token(kind)

    if kind == "now":
        return _Token(kind, moment=reference)

    if kind == "offset":
        unit = _OFFSET_UNITS[match.group("offset_unit")]
        try:
            shifted = reference + relativedelta(**{unit: int(match.group("offset_amount"))})
        except (OverflowError, ValueError):
            # Offsets past datetime.max contribute no timestamp.
            return None
        if unit in ("minutes", "hours"):
            return _Token(kind, moment=shifted)
        return _Token(kind, day=shifted.date())

    if kind == "relative":
        return _Token(kind, day=today + timedelta(days=_RELATIVE_DAYS[match.group(kind)]))

    if kind == "weekday":
        strictly_after = match.group("weekday_prefix") == "next"
        return _Token(kind, day=resolve_weekday(match.group("weekday_name"), today, strictly_after=strictly_after))

    if kind == "numeric":
        day = _build_date(
            match.group("num_year"),
            int(match.group("num_month")),
            int(match.group("num_day")),
            today,
        )
        return _Token(kind, day=day) if day else None

    if kind == "month_day":
        day = _build_date(match.group("md_year"), _MONTHS[match.group("md_month")], int(match.group("md_day")), today)
        return _Token(kind, day=day) if day else None

    if kind == "day_month":
        day = _build_date(match.group("dm_year"), _MONTHS[match.group("dm_month")], int(match.group("dm_day")), today)
        return _Token(kind, day=day) if day else None

    if kind == "clock":
        clock = parse_clock(
            int(match.group("clock_hour")),
            int(match.group("clock_minute") or 0),
            match.group("meridiem"),
        )
        return _Token(kind, clock=clock) if clock else None

    if kind == "clock24":
        clock = parse_clock(int(match.group("h24_hour")), int(match.group("h24_minute")))
        return _Token(kind, clock=clock) if clock else None

    if kind == "at_hour":
        clock = parse_clock(int(match.group("at_value")))
        return _Token(kind, clock=clock) if clock else None

    if kind == "named_time":
        return _Token(kind, clock=_NAMED_TIMES[match.group(kind)])

    return None


def _build_date(raw_year: Optional[str], month: int, day: int, today: date) -> Optional[date]:
    year = today.year
    if raw_year:
        year = int(raw_year)
        if year < 100:
            year += 2000
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _group_slots(tokens: Iterator[_Token]) -> List[_Slot]:
    slots: List[_Slot] = []
    current = _Slot()

    def close() -> _Slot:
        if not current.is_empty():
            slots.append(current)
        return _Slot()

    for token in tokens:
        if token.kind == "separator":
            current = close()
            continue
        if token.moment is not None:
            current = close()
            slots.append(_Slot(moment=token.moment))
            continue
        if token.day is not None:
            if current.day is not None:
                current = close()
            current.day = token.day
        if token.clock is not None:
            if current.clock is not None:
                current = close()
            current.clock = token.clock
    close()
    return slots


__all__ = ["find_datetimes", "parse_clock", "resolve_weekday"]

"""Date-phrase resolution shared by the add, edit and display parsers."""

from __future__ import annotations

import re
from datetime import datetime
from typing import List, Optional

from core.exceptions import InvalidDateTimeFormatError
from core.text_parsing import find_datetimes

_TMR_PATTERN = re.compile(r"\btmr\b")
_RANGE_PATTERN = re.compile(r"\bto\b")


def normalize_date_phrase(text: str) -> str:
    """Lowercase, turn ``-`` into ``to`` and expand ``tmr``."""

    result = (text or "").lower().replace("-", " to ")
    result = _TMR_PATTERN.sub("tomorrow", result)
    return " ".join(result.split())


def inherit_meridiem(phrase: str) -> str:
    """Copy a trailing ``pm`` onto a bare start time (``2 to 5pm`` -> ``2pm to 5pm``).

    Only the "end has pm, start has nothing" shape is rewritten; a start with
    am/pm and a bare end is left as typed.
    """

    match = _RANGE_PATTERN.search(phrase)
    if not match or not phrase.endswith("pm"):
        return phrase
    head = phrase[: match.start()].rstrip()
    if not head or head.endswith(("am", "pm")) or not head[-1].isdigit():
        return phrase
    return f"{head}pm {phrase[match.start():]}"


def is_range_phrase(phrase: str) -> bool:
    return bool(_RANGE_PATTERN.search(phrase))


def resolve_dates(text: str, *, reference: Optional[datetime] = None) -> List[datetime]:
    """WHAT: turn a free-text date phrase into ordered timestamps.

    WHY: add/edit/display all accept phrases like ``tmr 5pm`` or
    ``fri 2-5pm`` and must agree on how they are read.
    HOW: normalize, apply the pm inheritance rule, run the grammar in
    ``core.text_parsing`` and reject empty results, half-resolved ranges and
    ranges that end before they start.
    """

    phrase = inherit_meridiem(normalize_date_phrase(text))
    dates = find_datetimes(phrase, reference=reference)
    if not dates:
        raise InvalidDateTimeFormatError()
    if is_range_phrase(phrase):
        if len(dates) == 1:
            raise InvalidDateTimeFormatError()
        if dates[1] < dates[0]:
            raise InvalidDateTimeFormatError()
    return dates


__all__ = ["normalize_date_phrase", "inherit_meridiem", "is_range_phrase", "resolve_dates"]

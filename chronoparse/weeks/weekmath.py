"""ISO Week Arithmetic
--------------------

Pure calendar functions converting between (year, month, day) and
(ISO week, ISO week-year). No text or locale knowledge lives here.

ISO 8601 rules:
  1. Weeks start on Monday
  2. Week 1 is the week containing the year's first Thursday
     (equivalently, the week containing 4 January)
  3. The ISO week-year can differ from the calendar year near year ends

Examples:
    >>> week_start(1, 2023)
    datetime.date(2023, 1, 2)

    >>> iso_week_of(date(2024, 12, 30))
    (1, 2025)

    >>> expand_two_digit_year("'23")
    2023
"""

from __future__ import annotations
from datetime import date, datetime, timedelta
from typing import Tuple, Union

try:
    from dateutil.relativedelta import relativedelta
except ImportError as e:
    raise ImportError("python-dateutil not installed. pip install python-dateutil") from e


DateLike = Union[date, datetime]

# Sliding window pivot for bare two-digit years: 00-49 -> 20xx, 50-99 -> 19xx
TWO_DIGIT_YEAR_PIVOT = 50


# ---- Week boundaries ----

def week_start(iso_week: int, iso_week_year: int) -> date:
    """
    Return the Monday of ISO week `iso_week` in ISO week-year `iso_week_year`.

    Pure arithmetic: week 53 of a year that only has 52 weeks lands on
    the Monday of week 1 of the following year. Parsers reject such
    requests before they get here (see weeks_in_year).

    Args:
        iso_week: ISO week number (1-53)
        iso_week_year: ISO week-year

    Returns:
        date of the Monday starting that week

    Examples:
        >>> week_start(1, 2023)
        datetime.date(2023, 1, 2)

        >>> week_start(1, 2020)
        datetime.date(2019, 12, 30)

        >>> week_start(2, 2025)
        datetime.date(2025, 1, 6)
    """
    jan4 = date(iso_week_year, 1, 4)
    week1_monday = jan4 - timedelta(days=jan4.weekday())
    return week1_monday + timedelta(days=(iso_week - 1) * 7)


def week_end(iso_week: int, iso_week_year: int) -> date:
    """Return the Sunday closing ISO week `iso_week` of `iso_week_year`."""
    return week_start(iso_week, iso_week_year) + timedelta(days=6)


def iso_week_of(instant: DateLike) -> Tuple[int, int]:
    """
    Compute (week, week_year) for a date or datetime.

    The week-year is the calendar year of the Thursday in the same
    Monday-start week; the week is the offset of this week's Monday from
    the Monday of ISO week 1 of that week-year.

    Args:
        instant: date or datetime (datetimes use their own calendar fields)

    Returns:
        (iso_week, iso_week_year) tuple

    Examples:
        >>> iso_week_of(date(2024, 12, 30))
        (1, 2025)

        >>> iso_week_of(date(2023, 1, 1))
        (52, 2022)

        >>> iso_week_of(date(2023, 1, 2))
        (1, 2023)
    """
    day = _as_date(instant)
    monday = day - timedelta(days=day.weekday())
    thursday = monday + timedelta(days=3)
    week_year = thursday.year
    week = (monday - week_start(1, week_year)).days // 7 + 1
    return (week, week_year)


def weeks_in_year(iso_week_year: int) -> int:
    """
    Number of ISO weeks (52 or 53) in an ISO week-year.

    28 December always falls in the last ISO week of its year.

    Examples:
        >>> weeks_in_year(2020)
        53

        >>> weeks_in_year(2023)
        52
    """
    return iso_week_of(date(iso_week_year, 12, 28))[0]


def is_valid_week(iso_week: int, iso_week_year: int) -> bool:
    """True if `iso_week` exists in `iso_week_year`."""
    return 1 <= iso_week <= weeks_in_year(iso_week_year)


# ---- Shifting ----

def add_weeks(instant: DateLike, weeks: int) -> DateLike:
    """
    Shift a date or datetime by exactly `weeks` * 7 days.

    The weekday and time of day never drift.

    Examples:
        >>> add_weeks(date(2023, 1, 15), -2)
        datetime.date(2023, 1, 1)
    """
    return instant + relativedelta(weeks=weeks)


# ---- Years ----

def expand_two_digit_year(text: str) -> int:
    """
    Expand a two-digit year token to a four-digit year.

    Apostrophe-prefixed tokens ('23) always mean 20xx. Bare tokens use a
    sliding window around TWO_DIGIT_YEAR_PIVOT.

    Args:
        text: Year token such as "23", "78" or "'23"

    Returns:
        Four-digit year

    Raises:
        ValueError: If the token is not one or two digits

    Examples:
        >>> expand_two_digit_year("23")
        2023

        >>> expand_two_digit_year("78")
        1978

        >>> expand_two_digit_year("'23")
        2023
    """
    token = text.strip()
    apostrophe = token[:1] in ("'", "’")
    digits = token[1:] if apostrophe else token

    if not digits.isdigit() or len(digits) > 2:
        raise ValueError(f"Not a two-digit year: {text!r}")

    value = int(digits)
    if apostrophe or value < TWO_DIGIT_YEAR_PIVOT:
        return 2000 + value
    return 1900 + value


def _as_date(instant: DateLike) -> date:
    if isinstance(instant, datetime):
        return instant.date()
    return instant


__all__ = [
    "week_start",
    "week_end",
    "iso_week_of",
    "weeks_in_year",
    "is_valid_week",
    "add_weeks",
    "expand_two_digit_year",
    "TWO_DIGIT_YEAR_PIVOT",
]

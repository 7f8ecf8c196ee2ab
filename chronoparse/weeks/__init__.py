"""ISO week arithmetic.

Public API:
    week_start(iso_week, iso_week_year) -> date
    week_end(iso_week, iso_week_year) -> date
    iso_week_of(instant) -> (week, week_year)
    weeks_in_year(iso_week_year) -> int
    add_weeks(instant, n) -> instant
    expand_two_digit_year(text) -> int
"""

from chronoparse.weeks.weekmath import (
    week_start,
    week_end,
    iso_week_of,
    weeks_in_year,
    is_valid_week,
    add_weeks,
    expand_two_digit_year,
)

__all__ = [
    "week_start",
    "week_end",
    "iso_week_of",
    "weeks_in_year",
    "is_valid_week",
    "add_weeks",
    "expand_two_digit_year",
]

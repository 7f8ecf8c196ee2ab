"""English Time Expression Parser
------------------------------

Recognizes times of day, optionally followed by a timezone abbreviation:

  - "15:30", "at 9:45", "3:05:10 pm", "15:30:00.250"
  - "3pm", "11 a.m.", "at 7 PM"
  - "at 15", "@ 9", "at 9 o'clock"
  - "noon", "midday", "midnight"
  - "15:30 CET", "3pm EST" (abbreviations from the context)

Only the time of day is known; the date stays implied from the reference.
"""

from __future__ import annotations
from typing import Dict, Optional, Tuple
import re

from chronoparse.components.componentcontext import ParsingContext
from chronoparse.components.componentresult import Candidate
from chronoparse.components.componenttypes import Field, Meridiem
from chronoparse.parsers.parserbase import ParserWithWordBoundary, matched_alternative
from chronoparse.shared_utils import alternation


AT_PREFIX = r"(?:(?:at|@)\s*)"
MERIDIEM_TOKEN = r"[ap]\.?\s?m\.?"

ALTERNATIVES = ("clock", "meridiem", "at_hour", "casual")

TIME_PATTERN = "|".join((
    rf"(?P<clock>{AT_PREFIX}?(?P<clock_hour>\d{{1,2}}):(?P<clock_minute>\d{{2}})"
    rf"(?::(?P<clock_second>\d{{2}})(?:\.(?P<clock_millisecond>\d{{1,3}}))?)?"
    rf"(?:\s*(?P<clock_meridiem>{MERIDIEM_TOKEN}))?)",
    rf"(?P<meridiem>{AT_PREFIX}?(?P<meridiem_hour>\d{{1,2}})\s*(?P<meridiem_meridiem>{MERIDIEM_TOKEN}))",
    rf"(?P<at_hour>{AT_PREFIX}(?P<at_hour_hour>\d{{1,2}})(?:\s*o['’]clock)?)",
    r"(?P<casual>(?P<casual_word>noon|midday|midnight))",
))

# word -> (hour, meridiem)
CASUAL_TIMES: Dict[str, Tuple[int, Meridiem]] = {
    "noon": (12, Meridiem.PM),
    "midday": (12, Meridiem.PM),
    "midnight": (0, Meridiem.AM),
}


def _meridiem_of(token: Optional[str]) -> Optional[Meridiem]:
    if not token:
        return None
    return Meridiem.PM if token[0].lower() == "p" else Meridiem.AM


def to_24_hour(hour: int, meridiem: Optional[Meridiem]) -> Optional[int]:
    """
    Validate an hour and convert it to the 24-hour clock.

    Examples:
        >>> to_24_hour(3, Meridiem.PM)
        15

        >>> to_24_hour(12, Meridiem.AM)
        0

        >>> to_24_hour(15, Meridiem.PM)
        None
    """
    if meridiem is None:
        return hour if 0 <= hour <= 23 else None
    if not 1 <= hour <= 12:
        return None
    if meridiem == Meridiem.PM:
        return hour % 12 + 12
    return hour % 12


class ENTimeExpressionParser(ParserWithWordBoundary):
    """Times of day with optional meridiem and timezone."""

    tag = "ENTimeExpressionParser"

    def inner_pattern(self, context: ParsingContext) -> str:
        pattern = f"(?:{TIME_PATTERN})"
        if context.timezones:
            pattern += rf"(?:\s*(?P<zone>{alternation(context.timezones)}))?"
        return pattern

    def extract(self, context: ParsingContext, match: re.Match) -> Optional[Candidate]:
        alternative = matched_alternative(match, ALTERNATIVES)
        if alternative is None:
            return None

        if alternative == "casual":
            hour, meridiem = CASUAL_TIMES[match.group("casual_word").lower()]
            minute = second = millisecond = None
            explicit_meridiem = True
        else:
            meridiem = _meridiem_of(match.groupdict().get(f"{alternative}_meridiem"))
            explicit_meridiem = meridiem is not None
            hour = to_24_hour(int(match.group(f"{alternative}_hour")), meridiem)
            if hour is None:
                return None
            minute = _optional_int(match, f"{alternative}_minute")
            second = _optional_int(match, f"{alternative}_second")
            fraction = match.groupdict().get(f"{alternative}_millisecond")
            millisecond = int(fraction.ljust(3, "0")) if fraction else None
            if (minute is not None and minute > 59) or (second is not None and second > 59):
                return None

        candidate = self.candidate_from_match(context, match)
        store = candidate.start
        store.assign(Field.HOUR, hour)
        if minute is not None:
            store.assign(Field.MINUTE, minute)
        if second is not None:
            store.assign(Field.SECOND, second)
        if millisecond is not None:
            store.assign(Field.MILLISECOND, millisecond)

        if explicit_meridiem:
            store.assign(Field.MERIDIEM, meridiem)
        else:
            store.imply(Field.MERIDIEM, Meridiem.PM if hour >= 12 else Meridiem.AM)

        zone = match.groupdict().get("zone")
        if zone:
            store.assign(Field.TIMEZONE_OFFSET, context.timezone_offset(zone))

        return candidate


def _optional_int(match: re.Match, group: str) -> Optional[int]:
    value = match.groupdict().get(group)
    return int(value) if value is not None else None


__all__ = [
    "ENTimeExpressionParser",
    "to_24_hour",
]

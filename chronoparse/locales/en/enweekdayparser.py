"""English Weekday Parser
----------------------

Recognizes weekday names, optionally with a week modifier:

  - "Monday", "Fri", "Thurs."
  - "next Friday", "last Tuesday", "this Wednesday"
  - "Friday next week", "Monday last week"

The weekday is always known (Monday = 0 ... Sunday = 6). With a modifier
the day sits in the reference's ISO week shifted by the modifier, and the
date is known. Without one the nearest such weekday (at most three days
away) is used and the date stays implied.
"""

from __future__ import annotations
from datetime import timedelta
from types import MappingProxyType
from typing import Mapping, Optional
import re

from chronoparse.components.componentcontext import ParsingContext
from chronoparse.components.componentresult import Candidate
from chronoparse.components.componenttypes import Field
from chronoparse.parsers.parserbase import ParserWithWordBoundary, imply_week_from_date
from chronoparse.shared_utils import alternation


class ENWeekdayParser(ParserWithWordBoundary):
    """Weekday names with an optional leading or trailing week modifier."""

    tag = "ENWeekdayParser"

    def __init__(self, weekdays: Mapping[str, int], modifiers: Mapping[str, int]):
        """
        Args:
            weekdays: Weekday name or abbreviation -> weekday (Monday = 0)
            modifiers: Modifier word -> week offset ("next" -> 1)
        """
        self.weekdays = MappingProxyType({k.lower(): int(v) for k, v in weekdays.items()})
        self.modifiers = MappingProxyType({k.lower(): int(v) for k, v in modifiers.items()})

        modifier = alternation(self.modifiers)
        self._inner = (
            rf"(?:(?P<prefix>{modifier})\s+)?"
            rf"(?P<weekday>{alternation(self.weekdays)})\.?"
            rf"(?:\s+(?P<suffix>{modifier})\s+week)?"
        )

    def inner_pattern(self, context: ParsingContext) -> str:
        return self._inner

    def extract(self, context: ParsingContext, match: re.Match) -> Optional[Candidate]:
        weekday = self.weekdays.get(match.group("weekday").lower())
        if weekday is None:
            return None

        prefix, suffix = match.group("prefix"), match.group("suffix")
        if prefix and suffix:
            return None
        modifier = prefix or suffix

        reference = context.reference_local.date()
        if modifier is None:
            diff = weekday - reference.weekday()
            if diff > 3:
                diff -= 7
            elif diff < -3:
                diff += 7
            day = reference + timedelta(days=diff)
        else:
            monday = reference - timedelta(days=reference.weekday())
            day = monday + timedelta(days=weekday + 7 * self.modifiers[modifier.lower()])

        candidate = self.candidate_from_match(context, match)
        store = candidate.start
        store.assign(Field.WEEKDAY, weekday)
        if modifier is None:
            store.imply(Field.YEAR, day.year)
            store.imply(Field.MONTH, day.month)
            store.imply(Field.DAY, day.day)
        else:
            store.assign(Field.YEAR, day.year)
            store.assign(Field.MONTH, day.month)
            store.assign(Field.DAY, day.day)
        imply_week_from_date(store)

        context.debug(f"Weekday {match.group(0)!r}: {day.isoformat()}")
        return candidate


__all__ = [
    "ENWeekdayParser",
]

"""English Casual Date Parser
--------------------------

Recognizes day words relative to the reference date:

  - "today", "tomorrow", "yesterday"
  - "the day after tomorrow", "the day before yesterday"

The day, month and year are known; the time of day stays implied.
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
from chronoparse.shared_utils import phrase_alternation, phrase_key


class ENCasualDateParser(ParserWithWordBoundary):
    """Day words: today, tomorrow, yesterday and their two-day variants."""

    tag = "ENCasualDateParser"

    def __init__(self, days: Mapping[str, int]):
        """
        Args:
            days: Day word or phrase -> day offset ("tomorrow" -> 1)
        """
        self.days = MappingProxyType({phrase_key(k): int(v) for k, v in days.items()})
        self._inner = rf"(?:the\s+)?(?P<day_words>{phrase_alternation(self.days)})"

    def inner_pattern(self, context: ParsingContext) -> str:
        return self._inner

    def extract(self, context: ParsingContext, match: re.Match) -> Optional[Candidate]:
        offset = self.days.get(phrase_key(match.group("day_words")))
        if offset is None:
            return None

        day = context.reference_local.date() + timedelta(days=offset)
        candidate = self.candidate_from_match(context, match)
        store = candidate.start
        store.assign(Field.YEAR, day.year)
        store.assign(Field.MONTH, day.month)
        store.assign(Field.DAY, day.day)
        imply_week_from_date(store)
        return candidate


__all__ = [
    "ENCasualDateParser",
]

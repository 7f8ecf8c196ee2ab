"""English Month Date Parser
-------------------------

Recognizes calendar dates built around a month name or an ISO date:

  - "January 15", "Jan 15, 2024", "Sept. 3rd"
  - "15 Jan 2024", "15th of March", "the 22nd of March"
  - "the 22nd" (month and year implied from the reference)
  - "2024-01-15"

Day and month are known when present in the text; the year is known only
when the text carries one. The ISO week fields are implied from the date
itself so they never disagree with it.
"""

from __future__ import annotations
from types import MappingProxyType
from typing import Mapping, Optional
import re

from chronoparse.components.componentcontext import ParsingContext
from chronoparse.components.componentresult import Candidate
from chronoparse.components.componenttypes import Field
from chronoparse.parsers.parserbase import (
    ParserWithWordBoundary,
    imply_week_from_date,
    matched_alternative,
)
from chronoparse.shared_utils import alternation


ORDINAL_SUFFIX = r"(?:st|nd|rd|th)"

ALTERNATIVES = ("little", "middle", "ordinal", "iso")


class ENMonthDateParser(ParserWithWordBoundary):
    """Day-and-month dates, with or without a year."""

    tag = "ENMonthDateParser"

    def __init__(self, months: Mapping[str, int]):
        """
        Args:
            months: Month name or abbreviation -> month number
        """
        self.months = MappingProxyType({k.lower(): int(v) for k, v in months.items()})

        month = alternation(self.months)
        self._inner = "|".join((
            # 15 Jan 2024 / the 22nd of March
            rf"(?P<little>(?:the\s+)?(?P<little_day>\d{{1,2}}){ORDINAL_SUFFIX}?(?:\s+of)?\s+"
            rf"(?P<little_month>{month})\.?(?:,?\s+(?P<little_year>\d{{4}}))?)",
            # January 15 / Jan 15, 2024
            rf"(?P<middle>(?P<middle_month>{month})\.?\s+(?:the\s+)?(?P<middle_day>\d{{1,2}}){ORDINAL_SUFFIX}?"
            rf"(?:,?\s+(?P<middle_year>\d{{4}}))?)",
            # the 22nd
            rf"(?P<ordinal>the\s+(?P<ordinal_day>\d{{1,2}}){ORDINAL_SUFFIX})",
            # 2024-01-15
            r"(?P<iso>(?P<iso_year>\d{4})-(?P<iso_month>\d{1,2})-(?P<iso_day>\d{1,2}))",
        ))

    def inner_pattern(self, context: ParsingContext) -> str:
        return self._inner

    def month_number(self, token: Optional[str]) -> Optional[int]:
        if token is None:
            return None
        if token.isdigit():
            return int(token)
        return self.months.get(token.lower().rstrip("."))

    def extract(self, context: ParsingContext, match: re.Match) -> Optional[Candidate]:
        alternative = matched_alternative(match, ALTERNATIVES)
        if alternative is None:
            return None

        groups = match.groupdict()
        day = int(groups[f"{alternative}_day"])
        month = self.month_number(groups.get(f"{alternative}_month"))
        year = groups.get(f"{alternative}_year")

        candidate = self.candidate_from_match(context, match)
        store = candidate.start
        store.assign(Field.DAY, day)
        if month is not None:
            store.assign(Field.MONTH, month)
        if year is not None:
            store.assign(Field.YEAR, int(year))

        # Invalid dates (April 31, February 29 of a common year) are rejected
        if not imply_week_from_date(store):
            return None

        return candidate


__all__ = [
    "ENMonthDateParser",
]

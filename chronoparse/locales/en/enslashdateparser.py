"""English Slash Date Parser
-------------------------

Recognizes numeric dates written with slashes, month first:

  - "1/15/2024", "01/15/24"
  - "1/15" (year implied from the reference)
  - "15/1/2024" (a first number above 12 can only be the day)
"""

from __future__ import annotations
from typing import Optional
import re

from chronoparse.components.componentcontext import ParsingContext
from chronoparse.components.componentresult import Candidate
from chronoparse.components.componenttypes import Field
from chronoparse.parsers.parserbase import (
    ParserWithWordBoundary,
    imply_week_from_date,
    parse_year_token,
)


SLASH_DATE_PATTERN = (
    r"(?<!/)(?P<first>\d{1,2})/(?P<second>\d{1,2})"
    r"(?:/(?P<year>\d{4}|\d{2}))?(?!/\d)"
)


class ENSlashDateFormatParser(ParserWithWordBoundary):
    """Month/day[/year] dates."""

    tag = "ENSlashDateFormatParser"

    def inner_pattern(self, context: ParsingContext) -> str:
        return SLASH_DATE_PATTERN

    def extract(self, context: ParsingContext, match: re.Match) -> Optional[Candidate]:
        month, day = int(match.group("first")), int(match.group("second"))
        if month > 12 and day <= 12:
            month, day = day, month

        candidate = self.candidate_from_match(context, match)
        store = candidate.start
        store.assign(Field.MONTH, month)
        store.assign(Field.DAY, day)

        year_token = match.group("year")
        if year_token is not None:
            store.assign(Field.YEAR, parse_year_token(year_token))

        if not imply_week_from_date(store):
            return None
        return candidate


__all__ = [
    "ENSlashDateFormatParser",
]

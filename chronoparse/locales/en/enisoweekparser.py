"""English ISO Week Number Parser
------------------------------

Recognizes explicit ISO week references:

  - "Week 42", "Wk 42", "week number 28", "week #37", "Week 15th"
  - "Week 15 of 2023", "Week 15, 2023", "Week 15 27", "Wk 15 '23"
  - "the 22nd week", "the 22nd week of 2023"
  - "2023-W15", "2024W42"
  - "W15-2023", "W42/2024", "W15-'23"
  - "W15"

Each alternative of the combined pattern is a named group; the alternative
that matched decides which groups hold the week and the year.
"""

from __future__ import annotations
from typing import Dict, Optional, Tuple
import re

from chronoparse.components.componentcontext import ParsingContext
from chronoparse.components.componentresult import Candidate
from chronoparse.parsers.parserbase import (
    ParserWithWordBoundary,
    assign_week,
    matched_alternative,
    parse_week_token,
    parse_year_token,
)


WEEK_WORD = r"(?:week|wk)\.?"
ORDINAL_SUFFIX = r"(?:st|nd|rd|th)"
YEAR_TOKEN = r"(?:\d{4}|['’]\d{2}|\d{2})"
# a year slot never starts a time of day ("Week 15 12:00", "Week 15 11 pm")
NOT_TIME = r"(?!:\d|\s*[ap]\.?\s?m\.?(?!\w))"

PATTERN_ALTERNATIVES = (
    # Week 15 / Wk 15 '23 / week number 28 / week #37 / Week 15 of 2023
    rf"(?P<named>{WEEK_WORD}\s*(?:number\s+|no\.?\s*)?(?:#\s*)?(?P<named_week>\d{{1,2}}){ORDINAL_SUFFIX}?"
    rf"(?:(?:\s*,\s*|\s+(?:of|in)\s+|\s+)(?P<named_year>{YEAR_TOKEN}){NOT_TIME})?)",
    # the 22nd week (of 2023)
    rf"(?P<ordinal>the\s+(?P<ordinal_week>\d{{1,2}}){ORDINAL_SUFFIX}\s+{WEEK_WORD}"
    rf"(?:\s+(?:of|in)\s+(?P<ordinal_year>{YEAR_TOKEN}))?)",
    # 2023-W15 / 2023W15
    r"(?P<year_first>(?P<year_first_year>\d{4})-?W(?P<year_first_week>\d{1,2}))",
    # W15-2023 / W15/2023 / W15-'23
    rf"(?P<week_first>W(?P<week_first_week>\d{{1,2}})[-/](?P<week_first_year>{YEAR_TOKEN}))",
    # W15
    r"(?P<bare>W(?P<bare_week>\d{1,2}))",
)

# alternative -> (week group, year group)
ALTERNATIVE_GROUPS: Dict[str, Tuple[str, Optional[str]]] = {
    "named": ("named_week", "named_year"),
    "ordinal": ("ordinal_week", "ordinal_year"),
    "year_first": ("year_first_week", "year_first_year"),
    "week_first": ("week_first_week", "week_first_year"),
    "bare": ("bare_week", None),
}


class ENISOWeekNumberParser(ParserWithWordBoundary):
    """Explicit ISO week numbers, with or without a year."""

    tag = "ENISOWeekParser"

    def inner_pattern(self, context: ParsingContext) -> str:
        return "|".join(PATTERN_ALTERNATIVES)

    def extract(self, context: ParsingContext, match: re.Match) -> Optional[Candidate]:
        alternative = matched_alternative(match, ALTERNATIVE_GROUPS)
        if alternative is None:
            return None

        week_group, year_group = ALTERNATIVE_GROUPS[alternative]
        week = parse_week_token(match.group(week_group))
        if week is None:
            return None

        year_token = match.group(year_group) if year_group else None
        week_year = parse_year_token(year_token)
        if year_token is not None and week_year is None:
            return None

        candidate = self.candidate_from_match(context, match)
        if not assign_week(context, candidate.start, week, week_year):
            return None

        context.debug(f"ISO week ({alternative}) {match.group(0)!r}: week={week}, year={week_year}")
        return candidate


__all__ = [
    "ENISOWeekNumberParser",
]

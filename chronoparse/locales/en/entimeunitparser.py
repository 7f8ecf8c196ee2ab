"""English Time Unit Parsers
-------------------------

Recognizes amounts of time counted from the reference instant:

  - ENTimeUnitAgoFormatParser: "3 days ago", "an hour ago", "2 months earlier"
  - ENTimeUnitLaterFormatParser: "in 2 hours", "5 minutes later",
    "3 days from now", "after 2 years"

Weeks are left to the relative week parser. The shifted date is known;
for second, minute and hour amounts the clock time is known as well,
otherwise it is implied from the shifted instant.
"""

from __future__ import annotations
from types import MappingProxyType
from typing import Mapping, Optional, Tuple
import re

try:
    from dateutil.relativedelta import relativedelta
except ImportError as e:
    raise ImportError("python-dateutil not installed. pip install python-dateutil") from e

from chronoparse.components.componentcontext import ParsingContext
from chronoparse.components.componentresult import Candidate
from chronoparse.components.componenttypes import Field
from chronoparse.parsers.parserbase import (
    ParserWithWordBoundary,
    imply_week_from_date,
    matched_alternative,
    parse_count_token,
)
from chronoparse.shared_utils import alternation


CLOCK_UNITS = ("hours", "minutes", "seconds")


class ENTimeUnitParser(ParserWithWordBoundary):
    """
    Base for "<count> <unit>" amounts shifted away from the reference.

    Subclasses set `direction` (+1 or -1) and `templates`, one pattern per
    named alternative, where `{amount}` stands for the count and unit.
    """

    direction = 1
    templates: Tuple[Tuple[str, str], ...] = ()

    def __init__(self, units: Mapping[str, str], number_words: Mapping[str, int]):
        """
        Args:
            units: Unit word or abbreviation -> relativedelta keyword
                ("hr" -> "hours")
            number_words: Count word -> value ("two" -> 2)
        """
        self.units = MappingProxyType({k.lower(): v for k, v in units.items()})
        self.number_words = MappingProxyType({k.lower(): int(v) for k, v in number_words.items()})

        count = rf"(?:\d{{1,3}}|{alternation(self.number_words)})"
        unit = alternation(self.units)

        def amount(name: str) -> str:
            return rf"(?P<count_{name}>{count})\s+(?P<unit_{name}>{unit})s?"

        self._inner = "|".join(
            rf"(?P<{name}>{template.format(amount=amount(name))})"
            for name, template in self.templates
        )

    def inner_pattern(self, context: ParsingContext) -> str:
        return self._inner

    def extract(self, context: ParsingContext, match: re.Match) -> Optional[Candidate]:
        name = matched_alternative(match, [n for n, _ in self.templates])
        if name is None:
            return None

        count = parse_count_token(match.group(f"count_{name}"), self.number_words)
        unit = self.units.get(match.group(f"unit_{name}").lower())
        if count is None or unit is None:
            return None

        try:
            shifted = context.reference_local + relativedelta(**{unit: self.direction * count})
        except (ValueError, OverflowError):
            return None

        candidate = self.candidate_from_match(context, match)
        store = candidate.start
        store.assign(Field.YEAR, shifted.year)
        store.assign(Field.MONTH, shifted.month)
        store.assign(Field.DAY, shifted.day)

        clock = (
            (Field.HOUR, shifted.hour),
            (Field.MINUTE, shifted.minute),
            (Field.SECOND, shifted.second),
        )
        for field, value in clock:
            if unit in CLOCK_UNITS:
                store.assign(field, value)
            else:
                store.imply(field, value)

        imply_week_from_date(store)
        context.debug(f"Time unit {match.group(0)!r}: {self.direction * count} {unit} -> {shifted}")
        return candidate


class ENTimeUnitAgoFormatParser(ENTimeUnitParser):
    """Amounts of time before the reference."""

    tag = "ENTimeUnitAgoFormatParser"
    direction = -1
    templates = (
        ("ago", r"{amount}\s+(?:ago|earlier)"),
    )


class ENTimeUnitLaterFormatParser(ENTimeUnitParser):
    """Amounts of time after the reference."""

    tag = "ENTimeUnitLaterFormatParser"
    direction = 1
    templates = (
        ("within", r"(?:in|after)\s+{amount}"),
        ("later", r"{amount}\s+(?:later|from\s+now)"),
    )


__all__ = [
    "ENTimeUnitParser",
    "ENTimeUnitAgoFormatParser",
    "ENTimeUnitLaterFormatParser",
]

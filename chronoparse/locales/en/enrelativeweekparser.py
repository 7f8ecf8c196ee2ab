"""English Relative Week Parser
----------------------------

Recognizes weeks expressed relative to the reference instant:

  - "this week", "last week", "next week", "previous week", "coming week"
  - "the week before last", "the week after next"
  - "3 weeks ago", "a week ago", "two weeks ago"
  - "in 2 weeks", "in one week"
  - "4 weeks from now"

The reference instant is shifted by whole weeks and the ISO week and
week-year of the result are both assigned known.
"""

from __future__ import annotations
from types import MappingProxyType
from typing import Mapping, Optional
import re

from chronoparse.components.componentcontext import ParsingContext
from chronoparse.components.componentresult import Candidate
from chronoparse.parsers.parserbase import (
    ParserWithWordBoundary,
    assign_known_week,
    matched_alternative,
    parse_count_token,
)
from chronoparse.shared_utils import alternation, phrase_alternation, phrase_key
from chronoparse.weeks.weekmath import add_weeks, iso_week_of


ALTERNATIVES = ("phrase", "modifier", "ago", "within", "from_now")


class ENRelativeWeekParser(ParserWithWordBoundary):
    """Weeks relative to the reference: modifiers, fixed phrases and counts."""

    tag = "ENRelativeWeekParser"

    def __init__(
        self,
        modifiers: Mapping[str, int],
        phrases: Mapping[str, int],
        number_words: Mapping[str, int],
    ):
        """
        Args:
            modifiers: Modifier word -> week offset ("last" -> -1)
            phrases: Fixed phrase -> week offset ("week before last" -> -2)
            number_words: Count word -> value ("two" -> 2)
        """
        self.modifiers = MappingProxyType({k.lower(): int(v) for k, v in modifiers.items()})
        self.phrases = MappingProxyType({phrase_key(k): int(v) for k, v in phrases.items()})
        self.number_words = MappingProxyType({k.lower(): int(v) for k, v in number_words.items()})

        count = rf"(?:\d{{1,3}}|{alternation(self.number_words)})"
        phrase = phrase_alternation(self.phrases)
        self._inner = "|".join((
            rf"(?P<phrase>(?:the\s+)?(?P<phrase_words>{phrase}))",
            rf"(?P<modifier>(?:the\s+)?(?P<modifier_word>{alternation(self.modifiers)})\s+week)",
            rf"(?P<ago>(?P<ago_count>{count})\s+weeks?\s+ago)",
            rf"(?P<within>in\s+(?P<within_count>{count})\s+weeks?)",
            rf"(?P<from_now>(?P<from_now_count>{count})\s+weeks?\s+from\s+now)",
        ))

    def inner_pattern(self, context: ParsingContext) -> str:
        return self._inner

    def week_offset(self, alternative: str, match: re.Match) -> Optional[int]:
        """Signed number of weeks between the reference and the matched week."""
        if alternative == "phrase":
            return self.phrases.get(phrase_key(match.group("phrase_words")))
        if alternative == "modifier":
            return self.modifiers.get(match.group("modifier_word").lower())

        count = parse_count_token(match.group(f"{alternative}_count"), self.number_words)
        if count is None:
            return None
        return -count if alternative == "ago" else count

    def extract(self, context: ParsingContext, match: re.Match) -> Optional[Candidate]:
        alternative = matched_alternative(match, ALTERNATIVES)
        if alternative is None:
            return None

        offset = self.week_offset(alternative, match)
        if offset is None:
            return None

        try:
            shifted = add_weeks(context.reference_local, offset)
        except (ValueError, OverflowError):
            return None
        week, week_year = iso_week_of(shifted)

        candidate = self.candidate_from_match(context, match)
        assign_known_week(candidate.start, week, week_year)

        context.debug(f"Relative week {match.group(0)!r}: offset={offset} -> week {week} of {week_year}")
        return candidate


__all__ = [
    "ENRelativeWeekParser",
]

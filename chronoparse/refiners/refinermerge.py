"""Merging Refiners
---------------

Refiners that combine neighbouring pieces of text into one candidate:

  - MergeDateTimeRefiner: "Jan 15" + "at 3pm" -> one date-time
  - MergeDateRangeRefiner: "Week 45" + "to" + "Week 48" -> one range
  - ExtractYearSuffixRefiner: "W15" + ", 2023" -> week 15 of 2023

A year stated on one range endpoint is implied on the other, and an end
that falls before its start rolls forward rather than swapping places.

The text between two candidates is compared after normalize_connector_text,
so "at", " AT " and "at\\n" are the same connector.
"""

from __future__ import annotations
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple
import re

from chronoparse.components.componentcontext import ParsingContext
from chronoparse.components.componentresult import Candidate
from chronoparse.components.componentstore import ComponentStore
from chronoparse.components.componenttypes import Field
from chronoparse.parsers.parserbase import (
    derive_week_dates,
    has_stated_year,
    imply_week_from_date,
    parse_year_token,
    share_year,
    shift_implied,
)
from chronoparse.refiners.refinerbase import MergingRefiner, Refiner
from chronoparse.shared_utils import alternation, normalize_connector_text
from chronoparse.weeks.weekmath import is_valid_week


CLOCK_FIELDS = (Field.HOUR, Field.MINUTE, Field.SECOND, Field.MILLISECOND)


def _span(context: ParsingContext, first: Candidate, second: Candidate) -> tuple:
    index = min(first.index, second.index)
    end_index = max(first.end_index, second.end_index)
    return index, context.text[index:end_index]


# ============================================================================
# Date + time
# ============================================================================

def merge_time_into(target: ComponentStore, time_store: ComponentStore) -> ComponentStore:
    """
    Copy the time of day from `time_store` onto `target`.

    Clock fields are copied as known (whether they were known or implied in
    `time_store`); meridiem and timezone only when `time_store` knows them.
    """
    for field in CLOCK_FIELDS:
        value = time_store.get(field)
        if value is not None:
            target.assign(field, value)

    for field in (Field.MERIDIEM, Field.TIMEZONE_OFFSET):
        if time_store.is_known(field):
            target.assign(field, time_store.get(field))

    for tag in time_store.tags:
        target.add_tag(tag)
    return target


class MergeDateTimeRefiner(MergingRefiner):
    """Combine a date-only candidate with an adjacent time-only candidate."""

    def __init__(self, connectors: Iterable[str]):
        self.connectors = frozenset(normalize_connector_text(c) for c in connectors)

    def should_merge(self, context: ParsingContext, between: str, current: Candidate, following: Candidate) -> bool:
        if normalize_connector_text(between) not in self.connectors:
            return False

        date_then_time = current.start.is_only_date() and following.start.is_only_time()
        time_then_date = current.start.is_only_time() and following.start.is_only_date()
        return date_then_time or time_then_date

    def merge(self, context: ParsingContext, between: str, current: Candidate, following: Candidate) -> Candidate:
        if current.start.is_only_date():
            date_side, time_side = current, following
        else:
            date_side, time_side = following, current

        start = merge_time_into(date_side.start.clone(), time_side.start)

        end = None
        if date_side.end is not None:
            end = merge_time_into(date_side.end.clone(), time_side.start)
        elif time_side.end is not None:
            end = merge_time_into(date_side.start.clone(), time_side.end)

        index, text = _span(context, current, following)
        return Candidate(index, text, start, end, current.tags | following.tags)


# ============================================================================
# Ranges
# ============================================================================

class MergeDateRangeRefiner(MergingRefiner):
    """
    Combine two endpoints separated by a range connector.

    A year stated on only one endpoint ("Jan 5 to Jan 9, 2023") is implied
    on the other before the two are compared; ordering then follows
    order_endpoints. A prefix word ("from", "between") directly before the
    first endpoint is absorbed into the result.
    """

    def __init__(
        self,
        connectors: Iterable[str],
        prefixes: Iterable[str] = (),
        paired_connectors: Optional[Mapping[str, str]] = None,
    ):
        """
        Args:
            connectors: Connectors accepted between any two endpoints
            prefixes: Words that may precede the first endpoint
            paired_connectors: prefix -> connector accepted only after that
                prefix ("between" -> "and")
        """
        self.connectors = frozenset(normalize_connector_text(c) for c in connectors)
        self.paired_connectors = MappingProxyType({
            k.lower(): normalize_connector_text(v) for k, v in (paired_connectors or {}).items()
        })
        words = set(p.lower() for p in prefixes) | set(self.paired_connectors)
        self._prefix_re = re.compile(rf"(?<!\w)(?P<prefix>{alternation(words)})\s+$", re.IGNORECASE) if words else None

    def prefix_match(self, context: ParsingContext, candidate: Candidate) -> Optional[re.Match]:
        if self._prefix_re is None:
            return None
        return self._prefix_re.search(context.text, 0, candidate.index)

    def should_merge(self, context: ParsingContext, between: str, current: Candidate, following: Candidate) -> bool:
        if current.end is not None or following.end is not None:
            return False

        connector = normalize_connector_text(between)
        if connector not in self.connectors:
            prefix = self.prefix_match(context, current)
            if prefix is None or self.paired_connectors.get(prefix.group("prefix").lower()) != connector:
                return False

        both_dates = current.start.has_known_date() and following.start.has_known_date()
        both_times = current.start.is_only_time() and following.start.is_only_time()
        if not (both_dates or both_times):
            return False

        return current.start.resolve() is not None and following.start.resolve() is not None

    def merge(self, context: ParsingContext, between: str, current: Candidate, following: Candidate) -> Candidate:
        start, end = current.start.clone(), following.start.clone()
        if has_stated_year(start) and not has_stated_year(end):
            end = share_year(start, end)
        elif has_stated_year(end) and not has_stated_year(start):
            start = share_year(end, start)

        start, end = order_endpoints(start, end)

        index, text = _span(context, current, following)
        prefix = self.prefix_match(context, current)
        if prefix is not None:
            index = prefix.start()
            text = context.text[index:following.end_index]

        return Candidate(index, text, start, end, current.tags | following.tags)


def order_endpoints(start: ComponentStore, end: ComponentStore) -> Tuple[ComponentStore, ComponentStore]:
    """
    Put two range endpoints in chronological order.

    When the end falls before the start, an end with an open year (or
    week-year, week, day) moves forward one period; failing that, an open
    start moves back one period; failing that, the endpoints swap.

    Examples:
        "Dec 28 to Jan 3"   -> 28 Dec .. 3 Jan of the following year
        "Friday - Monday"   -> Friday .. the Monday after it
        "W48-2023 - W45-2023" -> W45 .. W48
    """
    start_at, end_at = start.resolve(), end.resolve()
    if start_at is None or end_at is None or start_at <= end_at:
        return start, end

    rolled = shift_implied(end, 1)
    if rolled is not None and rolled.resolve() >= start_at:
        return start, rolled

    rolled = shift_implied(start, -1)
    if rolled is not None and rolled.resolve() <= end_at:
        return rolled, end

    return end, start


# ============================================================================
# Year suffix
# ============================================================================

YEAR_SUFFIX_RE = re.compile(r"\s*(?:,\s*|(?:of|in)\s+)?(?P<year>\d{4}|['’]\d{2})(?!\w)", re.IGNORECASE)


class ExtractYearSuffixRefiner(Refiner):
    """
    Absorb a year directly following a candidate ("W15, 2023", "W52 '20").

    Applies to week candidates whose ISO week-year is not known (the year
    becomes the week-year) and to date candidates whose calendar year is not
    known. A year that would make the week or date invalid is left alone.
    For a range the year goes to the end; the start takes it as implied.
    """

    def refine(self, context: ParsingContext, candidates: List[Candidate]) -> List[Candidate]:
        refined = []
        for candidate in candidates:
            absorbed = self.absorb_suffix(context, candidate)
            if absorbed is None:
                refined.append(candidate)
                continue

            context.debug(f"Year suffix absorbed: {absorbed.text!r}")
            refined.append(absorbed)

        return refined

    def absorb_suffix(self, context: ParsingContext, candidate: Candidate) -> Optional[Candidate]:
        """New candidate extended over the trailing year, or None."""
        match = YEAR_SUFFIX_RE.match(context.text, candidate.end_index)
        if match is None:
            return None

        year = parse_year_token(match.group("year"))
        text = context.text[candidate.index:match.end()]

        if candidate.end is None:
            start = candidate.start.clone()
            if not self.absorb_year(start, year):
                return None
            return Candidate(candidate.index, text, start, None, candidate.tags)

        end = candidate.end.clone()
        if not self.absorb_year(end, year):
            return None
        start, end = order_endpoints(share_year(end, candidate.start), end)
        return Candidate(candidate.index, text, start, end, candidate.tags)

    @staticmethod
    def absorb_year(store: ComponentStore, year: int) -> bool:
        if store.is_known(Field.ISO_WEEK) and not store.is_known(Field.ISO_WEEK_YEAR):
            if not is_valid_week(store.get(Field.ISO_WEEK), year):
                return False
            store.assign(Field.ISO_WEEK_YEAR, year)
            derive_week_dates(store)
            return True

        if store.has_known_week() or store.is_known(Field.YEAR):
            return False

        if store.is_known(Field.MONTH) or store.is_known(Field.DAY):
            store.assign(Field.YEAR, year)
            return imply_week_from_date(store)

        return False


__all__ = [
    "MergeDateTimeRefiner",
    "MergeDateRangeRefiner",
    "ExtractYearSuffixRefiner",
    "merge_time_into",
    "order_endpoints",
]

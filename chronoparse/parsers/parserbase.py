"""Parser Contract
---------------

Every locale parser produces a compiled pattern and turns each match into
zero or one Candidate. This module holds the contract plus the generic
numeric disambiguation helpers shared by week-bearing parsers.

Extraction rules for week-bearing parsers:
  1. Week numbers outside 1-53 (or 53 in a 52-week year) are rejected
  2. Year-slot tokens are classified by magnitude and marker:
     >= 1000 is a year, 'NN is 20NN, bare NN uses the sliding window
  3. The week is always known; the week-year is known only when the text
     carries one, otherwise it is implied from the reference ISO week-year
  4. The hour is marked absent so the same digits never resurface as a time
  5. Y/M/D are derived from the Monday of the week and assigned known
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from datetime import date, timedelta
from functools import lru_cache
from typing import List, Mapping, Optional
import re

from chronoparse.components.componentcontext import ParsingContext
from chronoparse.components.componentresult import Candidate
from chronoparse.components.componentstore import ComponentStore
from chronoparse.components.componenttypes import Field
from chronoparse.weeks.weekmath import (
    expand_two_digit_year,
    is_valid_week,
    iso_week_of,
    week_start,
)

MIN_WEEK = 1
MAX_WEEK = 53


# ============================================================================
# Contract
# ============================================================================

class Parser(ABC):
    """Base class for all parsers.

    Subclasses set `tag`, which is attached to every candidate they produce
    so refiners can tell interpretations apart.
    """

    tag: str = ""

    @abstractmethod
    def pattern(self, context: ParsingContext) -> re.Pattern:
        """Compiled expression matched against the whole text."""

    @abstractmethod
    def extract(self, context: ParsingContext, match: re.Match) -> Optional[Candidate]:
        """Turn one match into a Candidate, or None if the match is invalid."""

    def execute(self, context: ParsingContext) -> List[Candidate]:
        """Scan the context text and collect every successful extraction."""
        name = type(self).__name__
        candidates = []

        for match in self.pattern(context).finditer(context.text):
            candidate = self.extract(context, match)
            if candidate is None:
                context.debug(f"{name} rejected {match.group(0)!r} at {match.start()}")
                continue

            if self.tag:
                candidate.add_tag(self.tag)
                candidate.start.add_tag(self.tag)
            context.debug(f"{name} extracted {candidate!r}")
            candidates.append(candidate)

        return candidates


class ParserWithWordBoundary(Parser):
    """Parser whose inner pattern must not start or end inside a word."""

    flags = re.IGNORECASE

    @abstractmethod
    def inner_pattern(self, context: ParsingContext) -> str:
        """Uncompiled pattern without boundary guards."""

    def pattern(self, context: ParsingContext) -> re.Pattern:
        return compile_bounded(self.inner_pattern(context), self.flags)

    def candidate_from_match(self, context: ParsingContext, match: re.Match) -> Candidate:
        return context.create_candidate(match.start(), match.group(0))


@lru_cache(maxsize=256)
def compile_bounded(inner: str, flags: int = re.IGNORECASE) -> re.Pattern:
    """Compile `inner` guarded so it neither starts nor ends inside a word."""
    return re.compile(r"(?<!\w)(?:" + inner + r")(?!\w)", flags)


def matched_alternative(match: re.Match, alternatives) -> Optional[str]:
    """
    Name of the alternative of a combined pattern that produced `match`.

    Each alternative is wrapped in its own named group; exactly one of them
    participates in any match.
    """
    for name in alternatives:
        if match.group(name) is not None:
            return name
    return None


# ============================================================================
# Numeric disambiguation
# ============================================================================

def parse_week_token(token: Optional[str]) -> Optional[int]:
    """
    Week-slot token to week number.

    Returns:
        Week number in [1, 53], or None

    Examples:
        >>> parse_week_token("15")
        15

        >>> parse_week_token("54")
        None
    """
    if token is None or not token.strip().isdigit():
        return None
    week = int(token)
    if MIN_WEEK <= week <= MAX_WEEK:
        return week
    return None


def parse_year_token(token: Optional[str]) -> Optional[int]:
    """
    Year-slot token to a four-digit year.

    Examples:
        >>> parse_year_token("2023")
        2023

        >>> parse_year_token("'23")
        2023

        >>> parse_year_token("27")
        2027

        >>> parse_year_token("78")
        1978

        >>> parse_year_token("123")
        None
    """
    if token is None:
        return None
    token = token.strip()
    if token[:1] in ("'", "’"):
        return expand_two_digit_year(token)
    if not token.isdigit():
        return None

    value = int(token)
    if value >= 1000:
        return value
    if len(token) <= 2:
        return expand_two_digit_year(token)
    return None


def parse_count_token(token: Optional[str], number_words: Mapping[str, int]) -> Optional[int]:
    """Count token ("3", "three", "a") to an int, or None."""
    if token is None:
        return None
    token = token.strip().lower()
    if token.isdigit():
        return int(token)
    return number_words.get(token)


# ============================================================================
# Week assignment
# ============================================================================

def assign_week(
    context: ParsingContext,
    store: ComponentStore,
    week: Optional[int],
    week_year: Optional[int] = None,
) -> bool:
    """
    Apply the week extraction rules to `store`.

    Args:
        context: Parsing context (supplies the reference ISO week-year)
        store: Store to populate
        week: Week number from the text
        week_year: ISO week-year from the text, or None if the text had none

    Returns:
        False if the week is invalid for the resolved week-year
    """
    if week is None or not MIN_WEEK <= week <= MAX_WEEK:
        return False

    resolved_year = week_year if week_year is not None else iso_week_of(context.reference_local)[1]
    if not is_valid_week(week, resolved_year):
        context.debug(f"Week {week} does not exist in ISO week-year {resolved_year}")
        return False

    store.assign(Field.ISO_WEEK, week)
    if week_year is not None:
        store.assign(Field.ISO_WEEK_YEAR, week_year)
    else:
        store.imply(Field.ISO_WEEK_YEAR, resolved_year)

    store.assign_absent(Field.HOUR)
    derive_week_dates(store)
    return True


def assign_known_week(store: ComponentStore, week: int, week_year: int) -> None:
    """Assign a fully-determined week (both fields known) and its dates."""
    store.assign(Field.ISO_WEEK, week)
    store.assign(Field.ISO_WEEK_YEAR, week_year)
    store.assign_absent(Field.HOUR)
    derive_week_dates(store)


def derive_week_dates(store: ComponentStore) -> None:
    """Assign Y/M/D of the Monday of the store's ISO week as known."""
    monday = week_start(store.get(Field.ISO_WEEK), store.get(Field.ISO_WEEK_YEAR))
    store.assign(Field.YEAR, monday.year)
    store.assign(Field.MONTH, monday.month)
    store.assign(Field.DAY, monday.day)


def imply_week_from_date(store: ComponentStore) -> bool:
    """
    Re-imply the ISO week fields from the store's current Y/M/D.

    Keeps a date candidate's implied week consistent with its own date
    instead of the reference instant. Known week fields are left alone.

    Returns:
        False if Y/M/D do not form a valid date
    """
    try:
        day = date(store.get(Field.YEAR), store.get(Field.MONTH), store.get(Field.DAY))
    except (TypeError, ValueError):
        return False

    week, week_year = iso_week_of(day)
    store.imply(Field.ISO_WEEK, week)
    store.imply(Field.ISO_WEEK_YEAR, week_year)
    return True


# ============================================================================
# Open fields
# ============================================================================

def has_stated_year(store: ComponentStore) -> bool:
    """
    True if the text gave the store's year.

    Week stores carry a known calendar year derived from their Monday, so
    for them only the ISO week-year counts.
    """
    if store.is_known(Field.ISO_WEEK):
        return store.is_known(Field.ISO_WEEK_YEAR)
    return store.is_known(Field.YEAR)


def is_only_weekday(store: ComponentStore) -> bool:
    """Weekday known, calendar date and week left open."""
    return (
        store.is_known(Field.WEEKDAY)
        and not store.has_known_week()
        and not any(store.is_known(f) for f in (Field.YEAR, Field.MONTH, Field.DAY))
    )


def shift_implied(store: ComponentStore, steps: int) -> Optional[ComponentStore]:
    """
    Move `store` by `steps` periods along the coarsest field the text left open.

      - known week, implied week-year: week-years
      - only a weekday known: weeks
      - day or month known, implied year: years
      - only a time of day known: days

    Args:
        store: Store to shift (left untouched)
        steps: Signed number of periods

    Returns:
        Shifted copy, or None if nothing is open or the result is invalid
    """
    shifted = store.clone()

    if store.is_known(Field.ISO_WEEK):
        if store.is_known(Field.ISO_WEEK_YEAR):
            return None
        week_year = store.get(Field.ISO_WEEK_YEAR) + steps
        if not is_valid_week(store.get(Field.ISO_WEEK), week_year):
            return None
        shifted.imply(Field.ISO_WEEK_YEAR, week_year)
        derive_week_dates(shifted)
        return shifted

    if store.has_known_week():
        return None

    if is_only_weekday(store) or store.is_only_time():
        days = 7 * steps if is_only_weekday(store) else steps
        try:
            day = date(store.get(Field.YEAR), store.get(Field.MONTH), store.get(Field.DAY)) + timedelta(days=days)
        except (TypeError, ValueError, OverflowError):
            return None
        shifted.imply(Field.YEAR, day.year)
        shifted.imply(Field.MONTH, day.month)
        shifted.imply(Field.DAY, day.day)
        imply_week_from_date(shifted)
        return shifted

    if (store.is_known(Field.MONTH) or store.is_known(Field.DAY)) and not store.is_known(Field.YEAR):
        shifted.imply(Field.YEAR, store.get(Field.YEAR) + steps)
        if not imply_week_from_date(shifted):
            return None
        return shifted

    return None


def share_year(source: ComponentStore, target: ComponentStore) -> ComponentStore:
    """
    Copy of `target` with the year of `source` implied where `target` has none.

    Weeks take the ISO week-year of `source`, dates its calendar year. A year
    that would make `target` invalid is not applied.
    """
    shared = target.clone()
    if has_stated_year(target):
        return shared

    if target.is_known(Field.ISO_WEEK):
        week_year = source.get(Field.ISO_WEEK_YEAR)
        if week_year is None or not is_valid_week(target.get(Field.ISO_WEEK), week_year):
            return shared
        shared.imply(Field.ISO_WEEK_YEAR, week_year)
        derive_week_dates(shared)
        return shared

    if target.is_known(Field.MONTH) or target.is_known(Field.DAY):
        shared.imply(Field.YEAR, source.get(Field.YEAR))
        if not imply_week_from_date(shared):
            return target.clone()
    return shared


__all__ = [
    "Parser",
    "ParserWithWordBoundary",
    "matched_alternative",
    "parse_week_token",
    "parse_year_token",
    "parse_count_token",
    "assign_week",
    "assign_known_week",
    "derive_week_dates",
    "imply_week_from_date",
    "has_stated_year",
    "is_only_weekday",
    "shift_implied",
    "share_year",
    "MIN_WEEK",
    "MAX_WEEK",
]

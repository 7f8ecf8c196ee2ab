"""Candidates and public results.

A Candidate is an in-progress parse result owned by one parse call: a text
span, a start ComponentStore, an optional end store and a set of tags used
by refiners to disambiguate. Surviving candidates are converted once into
immutable ParsedResult records.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta
from types import MappingProxyType
from typing import FrozenSet, Iterable, Mapping, Optional, Set
import logging

from chronoparse.components.componentstore import ComponentStore
from chronoparse.components.componenttypes import Field
from chronoparse.weeks.weekmath import week_start

logger = logging.getLogger(__name__)


# ============================================================================
# Public records
# ============================================================================

@dataclass(frozen=True)
class ParsedResultDate:
    """One resolved endpoint of a result.

    Week accessors are computed from the stored maps on every call.
    """

    date: datetime
    known_values: Mapping[Field, int]
    implied_values: Mapping[Field, int]
    absent_fields: FrozenSet[Field] = frozenset()

    @classmethod
    def from_store(cls, store: ComponentStore) -> Optional["ParsedResultDate"]:
        instant = store.resolve()
        if instant is None:
            return None
        return cls(
            date=instant,
            known_values=MappingProxyType(store.known_values()),
            implied_values=MappingProxyType(store.implied_values()),
            absent_fields=store.absent_fields(),
        )

    def get(self, component: Field) -> Optional[int]:
        if component in self.known_values:
            return self.known_values[component]
        return self.implied_values.get(component)

    def is_certain(self, component: Field) -> bool:
        return component in self.known_values

    @property
    def iso_week(self) -> Optional[int]:
        return self.get(Field.ISO_WEEK)

    @property
    def iso_week_year(self) -> Optional[int]:
        return self.get(Field.ISO_WEEK_YEAR)

    @property
    def iso_week_start(self) -> Optional[datetime]:
        """Monday 00:00 of the ISO week, in the result's timezone."""
        week, week_year = self.iso_week, self.iso_week_year
        if week is None or week_year is None:
            return None
        try:
            monday = week_start(week, week_year)
        except (ValueError, OverflowError):
            return None
        return datetime(monday.year, monday.month, monday.day, tzinfo=self.date.tzinfo)

    @property
    def iso_week_end(self) -> Optional[datetime]:
        """Sunday 00:00 of the ISO week, in the result's timezone."""
        start = self.iso_week_start
        if start is None:
            return None
        return start + timedelta(days=6)


@dataclass(frozen=True)
class ParsedResult:
    """A date (or date range) found in the text."""

    index: int
    text: str
    start: ParsedResultDate
    end: Optional[ParsedResultDate] = None
    tags: FrozenSet[str] = frozenset()

    @property
    def date(self) -> datetime:
        return self.start.date


# ============================================================================
# Candidate
# ============================================================================

class Candidate:
    """Internal parse result, mutable while the refiner pipeline runs."""

    def __init__(
        self,
        index: int,
        text: str,
        start: ComponentStore,
        end: Optional[ComponentStore] = None,
        tags: Iterable[str] = (),
    ):
        self.index = index
        self.text = text
        self.start = start
        self.end = end
        self._tags: Set[str] = set(tags)

    @property
    def end_index(self) -> int:
        return self.index + len(self.text)

    def add_tag(self, tag: str) -> "Candidate":
        self._tags.add(tag)
        return self

    def has_tag(self, tag: str) -> bool:
        return tag in self._tags

    def has_any_tag(self, tags: Iterable[str]) -> bool:
        return any(tag in self._tags for tag in tags)

    @property
    def tags(self) -> FrozenSet[str]:
        return frozenset(self._tags)

    def overlaps(self, other: "Candidate") -> bool:
        return self.index < other.end_index and other.index < self.end_index

    def clone(self) -> "Candidate":
        return Candidate(
            self.index,
            self.text,
            self.start.clone(),
            self.end.clone() if self.end is not None else None,
            self._tags,
        )

    def to_public_result(self) -> Optional[ParsedResult]:
        """
        Convert to an immutable ParsedResult.

        Returns:
            ParsedResult, or None if the start cannot be resolved. An end that
            cannot be resolved is dropped, keeping the start.
        """
        start = ParsedResultDate.from_store(self.start)
        if start is None:
            logger.debug(f"Dropping unresolvable candidate {self.text!r} at {self.index}")
            return None

        end = ParsedResultDate.from_store(self.end) if self.end is not None else None
        return ParsedResult(index=self.index, text=self.text, start=start, end=end, tags=self.tags)

    def __repr__(self) -> str:
        return f"Candidate(index={self.index}, text={self.text!r}, start={self.start!r}, end={self.end!r}, tags={sorted(self._tags)})"


__all__ = [
    "Candidate",
    "ParsedResult",
    "ParsedResultDate",
]

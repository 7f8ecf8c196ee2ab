"""Component Value Store
---------------------

Holds the partially-known date of one candidate: for every Field either a
known value (read from the text), an implied value (a default), or an
explicit "absent" marker that stops any later step from inferring it.

Key rules:
  1. Known always shadows implied; assign() discards an implied value
  2. Absent is sticky: imply() is a no-op until a known value is assigned
  3. get() returns known, else implied, else None
  4. A new store implies Y/M/D from the reference instant, 12:00:00.000,
     and the ISO week/week-year of the reference (computed, never copied
     from the calendar year)
"""

from __future__ import annotations
from datetime import datetime, tzinfo
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Set

from chronoparse.components.componenttypes import (
    Absent,
    DATE_FIELDS,
    Field,
    FieldState,
    Implied,
    Known,
    WEEK_FIELDS,
    offset_tzinfo,
)
from chronoparse.weeks.weekmath import iso_week_of, week_start


# Noon keeps week/day results clear of DST and offset edges
DEFAULT_HOUR = 12


class ComponentStore:
    """Per-field known/implied/absent state for one candidate date."""

    def __init__(self, reference: datetime, known: Optional[Mapping[Field, int]] = None):
        """
        Args:
            reference: Timezone-aware reference instant, already converted to
                the timezone the text should be read in
            known: Optional initial known values
        """
        self.reference = reference
        self._states: Dict[Field, FieldState] = {}
        self._tags: Set[str] = set()

        for field, value in (known or {}).items():
            self.assign(field, value)

        self.imply(Field.YEAR, reference.year)
        self.imply(Field.MONTH, reference.month)
        self.imply(Field.DAY, reference.day)
        self.imply(Field.HOUR, DEFAULT_HOUR)
        self.imply(Field.MINUTE, 0)
        self.imply(Field.SECOND, 0)
        self.imply(Field.MILLISECOND, 0)

        week, week_year = iso_week_of(reference)
        self.imply(Field.ISO_WEEK, week)
        self.imply(Field.ISO_WEEK_YEAR, week_year)

    # ---- State transitions ----

    def assign(self, field: Field, value: int) -> "ComponentStore":
        self._states[field] = Known(int(value))
        return self

    def imply(self, field: Field, value: int) -> "ComponentStore":
        if isinstance(self._states.get(field), (Known, Absent)):
            return self
        self._states[field] = Implied(int(value))
        return self

    def assign_absent(self, field: Field) -> "ComponentStore":
        """Mark `field` as never-to-be-inferred (until a known value arrives)."""
        self._states[field] = Absent()
        return self

    def promote(self, field: Field) -> "ComponentStore":
        """Move an implied value to known. No-op if absent, unset or known."""
        state = self._states.get(field)
        if isinstance(state, Implied):
            self._states[field] = Known(state.value)
        return self

    def delete(self, fields: Iterable[Field]) -> "ComponentStore":
        """Forget any state for `fields`, letting them be implied again."""
        for field in fields:
            self._states.pop(field, None)
        return self

    # ---- Reads ----

    def get(self, field: Field) -> Optional[int]:
        state = self._states.get(field)
        if isinstance(state, (Known, Implied)):
            return state.value
        return None

    def state(self, field: Field) -> Optional[FieldState]:
        return self._states.get(field)

    def is_known(self, field: Field) -> bool:
        return isinstance(self._states.get(field), Known)

    def is_absent(self, field: Field) -> bool:
        return isinstance(self._states.get(field), Absent)

    def is_only_date(self) -> bool:
        """Date or week fields known, no time-of-day known."""
        return not self.is_known(Field.HOUR) and self.has_known_date()

    def is_only_time(self) -> bool:
        """Time of day known, no date or week fields known."""
        return self.is_known(Field.HOUR) and not self.has_known_date()

    def has_known_date(self) -> bool:
        return any(self.is_known(field) for field in DATE_FIELDS)

    def has_known_week(self) -> bool:
        return any(self.is_known(field) for field in WEEK_FIELDS)

    def known_values(self) -> Dict[Field, int]:
        return {f: s.value for f, s in self._states.items() if isinstance(s, Known)}

    def implied_values(self) -> Dict[Field, int]:
        return {f: s.value for f, s in self._states.items() if isinstance(s, Implied)}

    def absent_fields(self) -> FrozenSet[Field]:
        return frozenset(f for f, s in self._states.items() if isinstance(s, Absent))

    # ---- Tags ----

    def add_tag(self, tag: str) -> "ComponentStore":
        self._tags.add(tag)
        return self

    def has_tag(self, tag: str) -> bool:
        return tag in self._tags

    @property
    def tags(self) -> FrozenSet[str]:
        return frozenset(self._tags)

    # ---- Copy / resolution ----

    def clone(self) -> "ComponentStore":
        cloned = ComponentStore.__new__(ComponentStore)
        cloned.reference = self.reference
        cloned._states = dict(self._states)
        cloned._tags = set(self._tags)
        return cloned

    def tzinfo(self) -> tzinfo:
        offset = self.get(Field.TIMEZONE_OFFSET)
        if offset is not None:
            return offset_tzinfo(offset)
        return self.reference.tzinfo

    def resolve(self) -> Optional[datetime]:
        """
        Compute the instant these components describe.

        A known ISO week or week-year takes precedence over Y/M/D: the date is
        the Monday of that week. Otherwise Y/M/D/H/M/S are used with unset
        fields defaulted to the reference date and 12:00:00.

        Returns:
            Timezone-aware datetime, or None if the fields do not form a
            valid calendar instant
        """
        hour = self._value_or(Field.HOUR, DEFAULT_HOUR)
        minute = self._value_or(Field.MINUTE, 0)
        second = self._value_or(Field.SECOND, 0)
        microsecond = self._value_or(Field.MILLISECOND, 0) * 1000

        try:
            if self.has_known_week():
                week = self.get(Field.ISO_WEEK)
                week_year = self.get(Field.ISO_WEEK_YEAR)
                if week is None or week_year is None:
                    return None
                day = week_start(week, week_year)
                year, month, dom = day.year, day.month, day.day
            else:
                year = self._value_or(Field.YEAR, self.reference.year)
                month = self._value_or(Field.MONTH, self.reference.month)
                dom = self._value_or(Field.DAY, self.reference.day)

            return datetime(year, month, dom, hour, minute, second, microsecond, tzinfo=self.tzinfo())
        except (ValueError, OverflowError):
            return None

    def _value_or(self, field: Field, default: int) -> int:
        value = self.get(field)
        return default if value is None else value

    def __repr__(self) -> str:
        return f"ComponentStore(known={self.known_values()}, implied={self.implied_values()}, absent={sorted(self.absent_fields())})"


__all__ = [
    "ComponentStore",
    "DEFAULT_HOUR",
]

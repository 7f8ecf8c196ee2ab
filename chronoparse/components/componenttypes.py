"""Component Types
---------------

Closed vocabularies shared by every stage of the parser:

  - Field: the semantic date/time slots a candidate can carry
  - Known / Implied / Absent: per-field state of a component store
  - TimezoneSpec: NamedZone | OffsetMinutes
  - DebugSink: DebugOff | DebugFlag | DebugCallback
  - ParsingReference / ParsingOptions: inputs of a parse call
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from enum import Enum
from typing import Callable, Mapping, Optional, Union
import logging

try:
    from dateutil import tz
except ImportError as e:
    raise ImportError("python-dateutil not installed. pip install python-dateutil") from e

logger = logging.getLogger(__name__)


class Field(str, Enum):
    """Semantic date/time slots.

    ISO_WEEK and ISO_WEEK_YEAR are independent of YEAR/MONTH/DAY: the same
    instant yields both, but they can disagree near year boundaries.
    """

    YEAR = "year"
    MONTH = "month"
    DAY = "day"
    WEEKDAY = "weekday"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"
    MILLISECOND = "millisecond"
    MERIDIEM = "meridiem"
    TIMEZONE_OFFSET = "timezone_offset"
    ISO_WEEK = "iso_week"
    ISO_WEEK_YEAR = "iso_week_year"


DATE_FIELDS = (Field.YEAR, Field.MONTH, Field.DAY, Field.WEEKDAY, Field.ISO_WEEK, Field.ISO_WEEK_YEAR)
WEEK_FIELDS = (Field.ISO_WEEK, Field.ISO_WEEK_YEAR)


class Meridiem(int, Enum):
    AM = 0
    PM = 1


# ============================================================================
# Per-field state
# ============================================================================

@dataclass(frozen=True)
class Known:
    """Value explicitly present in the source text."""
    value: int


@dataclass(frozen=True)
class Implied:
    """Default inferred from the reference instant or a parser."""
    value: int


@dataclass(frozen=True)
class Absent:
    """Field deliberately barred from inference."""


FieldState = Union[Known, Implied, Absent]


# ============================================================================
# Timezones
# ============================================================================

@dataclass(frozen=True)
class NamedZone:
    """Timezone given by IANA name ("Europe/Berlin") or abbreviation ("CET")."""
    name: str


@dataclass(frozen=True)
class OffsetMinutes:
    """Timezone given as a fixed offset from UTC in minutes."""
    minutes: int


TimezoneSpec = Union[NamedZone, OffsetMinutes]


def offset_tzinfo(minutes: int) -> tzinfo:
    """Fixed-offset tzinfo for an offset in minutes (0 -> UTC)."""
    if minutes == 0:
        return tz.UTC
    return tz.tzoffset(None, minutes * 60)


def resolve_timezone(
    spec: Optional[TimezoneSpec],
    abbreviations: Optional[Mapping[str, int]] = None,
) -> Optional[tzinfo]:
    """
    Turn a TimezoneSpec into a tzinfo.

    Named zones are looked up in the caller's abbreviation mapping first,
    then in the system zone database through dateutil.

    Args:
        spec: NamedZone, OffsetMinutes or None
        abbreviations: Custom abbreviation -> minute offset mapping

    Returns:
        tzinfo, or None when no spec was given or the name is unknown

    Examples:
        >>> resolve_timezone(OffsetMinutes(120))
        tzoffset(None, 7200)

        >>> resolve_timezone(NamedZone("XYZ"), {"XYZ": -300})
        tzoffset(None, -18000)
    """
    if spec is None:
        return None

    if isinstance(spec, OffsetMinutes):
        return offset_tzinfo(spec.minutes)

    if abbreviations:
        minutes = abbreviations.get(spec.name.upper(), abbreviations.get(spec.name))
        if minutes is not None:
            return offset_tzinfo(minutes)

    zone = tz.gettz(spec.name)
    if zone is None:
        logger.warning(f"Unknown timezone {spec.name!r}, falling back to reference offset")
    return zone


# ============================================================================
# Debug side channel
# ============================================================================

@dataclass(frozen=True)
class DebugOff:
    pass


@dataclass(frozen=True)
class DebugFlag:
    enabled: bool = True


@dataclass(frozen=True)
class DebugCallback:
    callback: Callable[[str], None]


DebugSink = Union[DebugOff, DebugFlag, DebugCallback]


# ============================================================================
# Parse inputs
# ============================================================================

@dataclass(frozen=True)
class ParsingReference:
    """Reference instant ("now") plus the timezone calendar fields are read in."""

    instant: datetime = field(default_factory=lambda: datetime.now(tz.UTC))
    timezone: Optional[TimezoneSpec] = None


@dataclass(frozen=True)
class ParsingOptions:
    """Per-call parsing options.

    forward_date: push results that are unambiguously in the past to their
        next occurrence
    debug: where debug messages go
    timezones: custom timezone abbreviation -> minute offset mapping
    """

    forward_date: bool = False
    debug: DebugSink = DebugOff()
    timezones: Mapping[str, int] = field(default_factory=dict)


__all__ = [
    "Field",
    "DATE_FIELDS",
    "WEEK_FIELDS",
    "Meridiem",
    "Known",
    "Implied",
    "Absent",
    "FieldState",
    "NamedZone",
    "OffsetMinutes",
    "TimezoneSpec",
    "offset_tzinfo",
    "resolve_timezone",
    "DebugOff",
    "DebugFlag",
    "DebugCallback",
    "DebugSink",
    "ParsingReference",
    "ParsingOptions",
]

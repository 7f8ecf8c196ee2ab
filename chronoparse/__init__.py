"""chronoparse - Natural-Language Date Extraction

Public API for finding dates, times, ISO weeks and ranges in free text.

Usage:
    from chronoparse import parse, parse_date, ParsingReference, NamedZone

    # All results, in text order
    results = parse("Can we meet week 15 of 2023 or the week after next?")
    results[0].start.iso_week         # Returns: 15
    results[0].start.iso_week_start   # Returns: Monday 00:00 of that week

    # First start instant only
    parse_date("Jan 15 at 3pm")       # Returns: datetime(..., 1, 15, 15, 0, ...)

    # Explicit reference instant and timezone
    ref = ParsingReference(datetime(2023, 1, 15), NamedZone("Europe/Berlin"))
    parse("the week before last", ref)[0].start.iso_week   # Returns: 52

    # Strict configuration (no relative expressions)
    from chronoparse import strict
    strict().parse("W15-2023")
"""

__version__ = "0.0.1"

# ============================================================================
# Parse API
# ============================================================================

from .chronoapi import (
    parse,        # Primary API - all results in text order
    parse_date,   # First result's start instant
)
from .chrono import Chrono

# ============================================================================
# Configurations
# ============================================================================

from .locales.en.enconfiguration import (
    casual,                # Lenient English configuration
    strict,                # Formal English configuration
    build_configuration,   # Build a named configuration from enconfig.yaml
)

# ============================================================================
# Inputs and Results
# ============================================================================

from .components.componenttypes import (
    Field,
    ParsingReference,
    ParsingOptions,
    NamedZone,
    OffsetMinutes,
    DebugOff,
    DebugFlag,
    DebugCallback,
)
from .components.componentresult import ParsedResult, ParsedResultDate

# ============================================================================
# ISO Week Arithmetic
# ============================================================================

from .weeks.weekmath import (
    week_start,
    week_end,
    iso_week_of,
    weeks_in_year,
    add_weeks,
    expand_two_digit_year,
)

__all__ = [
    # Version
    "__version__",

    # ========================================================================
    # PRIMARY APIS - Start here!
    # ========================================================================
    "parse",        # Text -> list of ParsedResult
    "parse_date",   # Text -> first start datetime

    # ========================================================================
    # Configurations
    # ========================================================================
    "Chrono",
    "casual",
    "strict",
    "build_configuration",

    # ========================================================================
    # Inputs and Results
    # ========================================================================
    "Field",
    "ParsingReference",
    "ParsingOptions",
    "NamedZone",
    "OffsetMinutes",
    "DebugOff",
    "DebugFlag",
    "DebugCallback",
    "ParsedResult",
    "ParsedResultDate",

    # ========================================================================
    # ISO Week Arithmetic
    # ========================================================================
    "week_start",
    "week_end",
    "iso_week_of",
    "weeks_in_year",
    "add_weeks",
    "expand_two_digit_year",
]

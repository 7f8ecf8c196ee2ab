"""Refiner pipeline stages.

Public API:
    Refiner, Filter, MergingRefiner  - base classes
    MergeDateTimeRefiner             - date + adjacent time
    MergeDateRangeRefiner            - two endpoints joined by a range connector
    ExtractYearSuffixRefiner         - trailing four-digit year
    UnlikelyFormatFilter             - bare numbers (and, strict, dateless text)
    PrioritizeTagRefiner             - tagged interpretations win at one offset
    PrioritizeSpecificRefiner        - most specific of overlapping spans
    ForwardDateRefiner               - implied past dates to next occurrence
"""

from chronoparse.refiners.refinerbase import Refiner, Filter, MergingRefiner
from chronoparse.refiners.refinermerge import (
    MergeDateTimeRefiner,
    MergeDateRangeRefiner,
    ExtractYearSuffixRefiner,
    merge_time_into,
)
from chronoparse.refiners.refinerfilter import (
    UnlikelyFormatFilter,
    PrioritizeTagRefiner,
    PrioritizeSpecificRefiner,
)
from chronoparse.refiners.refinerforward import ForwardDateRefiner

__all__ = [
    "Refiner",
    "Filter",
    "MergingRefiner",
    "MergeDateTimeRefiner",
    "MergeDateRangeRefiner",
    "ExtractYearSuffixRefiner",
    "merge_time_into",
    "UnlikelyFormatFilter",
    "PrioritizeTagRefiner",
    "PrioritizeSpecificRefiner",
    "ForwardDateRefiner",
]

"""Date component model.

Public API:
    Field                     - semantic date/time slots
    ComponentStore            - per-field known/implied/absent state
    Candidate                 - in-progress parse result
    ParsedResult / ParsedResultDate - immutable public results
    ParsingContext            - per-call text, reference and options
    ParsingReference / ParsingOptions, TimezoneSpec, DebugSink variants
"""

from chronoparse.components.componenttypes import (
    Field,
    Meridiem,
    Known,
    Implied,
    Absent,
    NamedZone,
    OffsetMinutes,
    DebugOff,
    DebugFlag,
    DebugCallback,
    ParsingReference,
    ParsingOptions,
)
from chronoparse.components.componentstore import ComponentStore
from chronoparse.components.componentresult import (
    Candidate,
    ParsedResult,
    ParsedResultDate,
)
from chronoparse.components.componentcontext import ParsingContext

__all__ = [
    "Field",
    "Meridiem",
    "Known",
    "Implied",
    "Absent",
    "NamedZone",
    "OffsetMinutes",
    "DebugOff",
    "DebugFlag",
    "DebugCallback",
    "ParsingReference",
    "ParsingOptions",
    "ComponentStore",
    "Candidate",
    "ParsedResult",
    "ParsedResultDate",
    "ParsingContext",
]

"""Date extraction API.

Public entry points for finding dates, times, ISO weeks and ranges in free
text. Uses the English casual configuration unless another Chrono is given.
"""

from datetime import datetime
from typing import List, Optional

from chronoparse.chrono import Chrono, ReferenceLike
from chronoparse.components.componentresult import ParsedResult
from chronoparse.components.componenttypes import ParsingOptions
from chronoparse.locales.en.enconfiguration import casual


def parse(
    text: str,
    reference: ReferenceLike = None,
    options: Optional[ParsingOptions] = None,
    configuration: Optional[Chrono] = None,
) -> List[ParsedResult]:
    """
    Extract every date-like expression from text.

    Supports:
      - ISO weeks: "Week 42", "Wk 15 '23", "the 22nd week of 2023", "2024-W42", "W15"
      - Relative weeks: "last week", "the week before last", "in 3 weeks"
      - Dates: "Jan 15, 2024", "15th of March", "2024-01-15"
      - Times: "15:30", "3pm EST", "at 9"
      - Date-times and ranges: "Jan 15 at 3pm", "from Week 45 to Week 48"

    Key Behaviors:
      1. Fields read from the text are known; everything else is implied
         from the reference instant (default: now, UTC)
      2. ISO week and ISO week-year are kept separate from the calendar
         year: "Week 1 of 2020" starts on 30 December 2019
      3. Results come back in text order, one per non-overlapping span

    Args:
        text: Text to scan
        reference: ParsingReference, bare datetime, or None for now (UTC)
        options: ParsingOptions (forward_date, debug sink, custom timezones)
        configuration: Chrono to use (default: English casual)

    Returns:
        List of ParsedResult; empty if nothing was found

    Examples:
        >>> results = parse("Week 15", datetime(2023, 6, 1))
        >>> results[0].start.iso_week, results[0].start.iso_week_year
        (15, 2023)

        >>> parse("from Week 45 to Week 48", datetime(2023, 6, 1))[0].end.iso_week
        48
    """
    chrono = configuration if configuration is not None else casual()
    return chrono.parse(text, reference, options)


def parse_date(
    text: str,
    reference: ReferenceLike = None,
    options: Optional[ParsingOptions] = None,
    configuration: Optional[Chrono] = None,
) -> Optional[datetime]:
    """
    Start instant of the first date-like expression in text.

    Examples:
        >>> parse_date("Week 1 of 2020", datetime(2023, 6, 1))
        datetime.datetime(2019, 12, 30, 12, 0, tzinfo=tzutc())

        >>> parse_date("nothing here") is None
        True
    """
    chrono = configuration if configuration is not None else casual()
    return chrono.parse_date(text, reference, options)


__all__ = [
    "parse",
    "parse_date",
]

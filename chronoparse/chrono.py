"""Chrono Engine
-------------

A Chrono is an immutable configuration: an ordered tuple of parsers, an
ordered tuple of refiners and the timezone abbreviations the parsers may
use. One parse call:

  1. Builds a ParsingContext from the text, reference and options
  2. Runs every parser and concatenates their candidates
  3. Runs the refiners in order, each on the previous stage's output
  4. Converts surviving candidates to immutable ParsedResult records,
     ordered by their position in the text

Configurations are safe to share; every call allocates its own context.
"""

from __future__ import annotations
from datetime import datetime
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Union
import logging

from chronoparse.components.componentcontext import ParsingContext
from chronoparse.components.componentresult import ParsedResult
from chronoparse.components.componenttypes import ParsingOptions, ParsingReference
from chronoparse.parsers.parserbase import Parser
from chronoparse.refiners.refinerbase import Refiner

logger = logging.getLogger(__name__)

ReferenceLike = Union[ParsingReference, datetime, None]


def coerce_reference(reference: ReferenceLike) -> ParsingReference:
    """
    Accept a ParsingReference, a bare datetime or None (now, UTC).

    Raises:
        ValueError: For any other type
    """
    if reference is None:
        return ParsingReference()
    if isinstance(reference, ParsingReference):
        return reference
    if isinstance(reference, datetime):
        return ParsingReference(instant=reference)
    raise ValueError(f"Unsupported reference type: {type(reference).__name__}")


class Chrono:
    """Immutable parser + refiner configuration."""

    def __init__(
        self,
        parsers: Iterable[Parser],
        refiners: Iterable[Refiner] = (),
        abbreviations: Optional[Mapping[str, int]] = None,
        name: str = "custom",
    ):
        self._parsers = tuple(parsers)
        self._refiners = tuple(refiners)
        self._abbreviations = MappingProxyType({k.upper(): int(v) for k, v in (abbreviations or {}).items()})
        self._name = name

    @property
    def parsers(self) -> tuple:
        return self._parsers

    @property
    def refiners(self) -> tuple:
        return self._refiners

    @property
    def abbreviations(self) -> Mapping[str, int]:
        return self._abbreviations

    @property
    def name(self) -> str:
        return self._name

    def parse(
        self,
        text: str,
        reference: ReferenceLike = None,
        options: Optional[ParsingOptions] = None,
    ) -> List[ParsedResult]:
        """
        Extract every date, date-time, week or range mentioned in `text`.

        Args:
            text: Free-form text
            reference: Reference instant ("now"); see coerce_reference
            options: ParsingOptions (forward dating, debug sink, timezones)

        Returns:
            List of ParsedResult ordered by position in the text; empty if
            nothing was found or the text is blank
        """
        if not text or not text.strip():
            return []

        context = ParsingContext(text, coerce_reference(reference), options, self._abbreviations)

        candidates = []
        for parser in self._parsers:
            found = parser.execute(context)
            context.debug(f"{type(parser).__name__}: {len(found)} candidate(s)")
            candidates.extend(found)
        candidates.sort(key=lambda c: c.index)

        for refiner in self._refiners:
            candidates = refiner.refine(context, candidates)
            context.debug(f"{refiner!r}: {len(candidates)} candidate(s) remain")

        results = []
        for candidate in candidates:
            result = candidate.to_public_result()
            if result is not None:
                results.append(result)
        results.sort(key=lambda r: r.index)

        logger.debug(f"[{self._name}] {len(results)} result(s) in {text!r}")
        return results

    def parse_date(
        self,
        text: str,
        reference: ReferenceLike = None,
        options: Optional[ParsingOptions] = None,
    ) -> Optional[datetime]:
        """Start instant of the first result, or None."""
        results = self.parse(text, reference, options)
        return results[0].date if results else None

    def __repr__(self) -> str:
        return f"Chrono(name={self._name!r}, parsers={len(self._parsers)}, refiners={len(self._refiners)})"


__all__ = [
    "Chrono",
    "coerce_reference",
    "ReferenceLike",
]

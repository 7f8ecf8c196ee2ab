"""Refiner Contract
----------------

A refiner is one stage of the post-processing pipeline: it takes the full
candidate list produced by the parsers (or by the previous stage) and
returns a new list. Stages run strictly in sequence; a candidate dropped by
one stage is never seen by the next.

Two reusable shapes:
  - Filter: keeps candidates one at a time
  - MergingRefiner: walks candidates in text order and combines neighbours
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List

from chronoparse.components.componentcontext import ParsingContext
from chronoparse.components.componentresult import Candidate


class Refiner(ABC):
    """Base class for pipeline stages."""

    @abstractmethod
    def refine(self, context: ParsingContext, candidates: List[Candidate]) -> List[Candidate]:
        """Return the refined candidate list. Input order is by text index."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Filter(Refiner):
    """Refiner that drops candidates failing `is_valid`."""

    @abstractmethod
    def is_valid(self, context: ParsingContext, candidate: Candidate) -> bool:
        ...

    def refine(self, context: ParsingContext, candidates: List[Candidate]) -> List[Candidate]:
        kept = []
        for candidate in candidates:
            if self.is_valid(context, candidate):
                kept.append(candidate)
            else:
                context.debug(f"{type(self).__name__} removed {candidate.text!r} at {candidate.index}")
        return kept


class MergingRefiner(Refiner):
    """
    Refiner that combines adjacent candidates.

    Candidates are visited in text order. Two neighbours are offered to
    `should_merge` only when they do not overlap; the text between them is
    passed along so subclasses can check connectors. A merged candidate can
    merge again with the next neighbour.
    """

    @abstractmethod
    def should_merge(self, context: ParsingContext, between: str, current: Candidate, following: Candidate) -> bool:
        ...

    @abstractmethod
    def merge(self, context: ParsingContext, between: str, current: Candidate, following: Candidate) -> Candidate:
        ...

    def refine(self, context: ParsingContext, candidates: List[Candidate]) -> List[Candidate]:
        if len(candidates) < 2:
            return list(candidates)

        ordered = sorted(candidates, key=lambda c: c.index)
        merged = []
        current = ordered[0]

        for following in ordered[1:]:
            if following.index >= current.end_index:
                between = context.text[current.end_index:following.index]
                if self.should_merge(context, between, current, following):
                    combined = self.merge(context, between, current, following)
                    context.debug(f"{type(self).__name__} merged {current.text!r} + {following.text!r} -> {combined.text!r}")
                    current = combined
                    continue

            merged.append(current)
            current = following

        merged.append(current)
        return merged


__all__ = [
    "Refiner",
    "Filter",
    "MergingRefiner",
]

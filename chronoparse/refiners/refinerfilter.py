"""Filtering and prioritizing refiners.

  - UnlikelyFormatFilter: drops bare or dotted numbers ("15", "1.5")
  - PrioritizeTagRefiner: at one start offset, tagged interpretations win
  - PrioritizeSpecificRefiner: among overlapping spans the most specific wins
"""

from __future__ import annotations
from typing import Dict, Iterable, List
import re

from chronoparse.components.componentcontext import ParsingContext
from chronoparse.components.componentresult import Candidate
from chronoparse.components.componenttypes import Field
from chronoparse.refiners.refinerbase import Filter, Refiner


BARE_NUMBER_RE = re.compile(r"\d+(?:[.,]\d+)*")


class UnlikelyFormatFilter(Filter):
    """
    Drop candidates that are unlikely to be dates.

    Always drops candidates whose whole text is a bare or dotted number.
    In strict mode also drops candidates with no known date, week or hour.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict

    def is_valid(self, context: ParsingContext, candidate: Candidate) -> bool:
        if BARE_NUMBER_RE.fullmatch(candidate.text.strip()):
            return False

        if self.strict:
            store = candidate.start
            return store.has_known_date() or store.is_known(Field.HOUR)

        return True

    def __repr__(self) -> str:
        return f"UnlikelyFormatFilter(strict={self.strict})"


class PrioritizeTagRefiner(Refiner):
    """
    Resolve competing interpretations that start at the same offset.

    Candidates are grouped by start index. In a group with more than one
    member, if any member carries a priority tag, only those members survive.
    Otherwise the group is kept as is.
    """

    def __init__(self, priority_tags: Iterable[str]):
        self.priority_tags = frozenset(priority_tags)

    def refine(self, context: ParsingContext, candidates: List[Candidate]) -> List[Candidate]:
        groups: Dict[int, List[Candidate]] = {}
        for candidate in candidates:
            groups.setdefault(candidate.index, []).append(candidate)

        refined = []
        for index in sorted(groups):
            group = groups[index]
            if len(group) > 1:
                preferred = [c for c in group if c.has_any_tag(self.priority_tags)]
                if preferred:
                    for dropped in group:
                        if dropped not in preferred:
                            context.debug(f"Priority tags dropped {dropped.text!r} at {index}")
                    group = preferred
            refined.extend(group)

        return refined


def _known_count(candidate: Candidate) -> int:
    count = len(candidate.start.known_values())
    if candidate.end is not None:
        count += len(candidate.end.known_values())
    return count


class PrioritizeSpecificRefiner(Refiner):
    """
    Keep one candidate per group of overlapping spans.

    The longer span wins; on equal length the candidate with more known
    fields wins; on a full tie the one seen first is kept.
    """

    def refine(self, context: ParsingContext, candidates: List[Candidate]) -> List[Candidate]:
        ordered = sorted(candidates, key=lambda c: (c.index, -len(c.text)))
        kept: List[Candidate] = []

        for candidate in ordered:
            if kept and kept[-1].overlaps(candidate):
                previous = kept[-1]
                if self._more_specific(candidate, previous):
                    context.debug(f"{candidate.text!r} replaces overlapping {previous.text!r}")
                    kept[-1] = candidate
                else:
                    context.debug(f"{previous.text!r} hides overlapping {candidate.text!r}")
                continue
            kept.append(candidate)

        return kept

    @staticmethod
    def _more_specific(candidate: Candidate, other: Candidate) -> bool:
        if len(candidate.text) != len(other.text):
            return len(candidate.text) > len(other.text)
        return _known_count(candidate) > _known_count(other)


__all__ = [
    "UnlikelyFormatFilter",
    "PrioritizeTagRefiner",
    "PrioritizeSpecificRefiner",
]

"""Forward-date refiner.

With `ParsingOptions(forward_date=True)` a candidate that is only implied to
lie in the past is moved to its next occurrence:

  - a week whose week-year was implied: next week-year
  - a day and month whose year was implied: next year
  - a weekday on its own: next week
  - a time of day on its own: next day

Candidates with an explicit year, week-year or full range are never moved.
"""

from __future__ import annotations
from typing import List, Optional

from chronoparse.components.componentcontext import ParsingContext
from chronoparse.components.componentresult import Candidate
from chronoparse.components.componentstore import ComponentStore
from chronoparse.components.componenttypes import Field
from chronoparse.parsers.parserbase import is_only_weekday, shift_implied
from chronoparse.refiners.refinerbase import Refiner
from chronoparse.weeks.weekmath import iso_week_of


class ForwardDateRefiner(Refiner):

    def refine(self, context: ParsingContext, candidates: List[Candidate]) -> List[Candidate]:
        if not context.options.forward_date:
            return candidates

        refined = []
        for candidate in candidates:
            forwarded = self.forward(context, candidate.start) if candidate.end is None else None
            if forwarded is None:
                refined.append(candidate)
                continue

            context.debug(f"Forwarded {candidate.text!r} to {forwarded.resolve()}")
            refined.append(Candidate(candidate.index, candidate.text, forwarded, None, candidate.tags))

        return refined

    def forward(self, context: ParsingContext, store: ComponentStore) -> Optional[ComponentStore]:
        """Forwarded copy of `store`, or None if it stays where it is."""
        reference = context.reference_local

        if store.is_known(Field.ISO_WEEK):
            if store.is_known(Field.ISO_WEEK_YEAR):
                return None
            ref_week, ref_year = iso_week_of(reference)
            if (store.get(Field.ISO_WEEK_YEAR), store.get(Field.ISO_WEEK)) >= (ref_year, ref_week):
                return None
            return shift_implied(store, 1)

        instant = store.resolve()
        if instant is None:
            return None

        if store.is_only_time():
            if instant >= reference:
                return None
            return shift_implied(store, 1)

        if is_only_weekday(store) or store.is_known(Field.MONTH) or store.is_known(Field.DAY):
            if instant.date() >= reference.date():
                return None
            return shift_implied(store, 1)

        return None


__all__ = [
    "ForwardDateRefiner",
]

"""Parsing context: everything one parse call shares between its stages."""

from __future__ import annotations
from datetime import datetime, tzinfo
from types import MappingProxyType
from typing import Mapping, Optional
import logging

try:
    from dateutil import tz
except ImportError as e:
    raise ImportError("python-dateutil not installed. pip install python-dateutil") from e

from chronoparse.components.componentresult import Candidate
from chronoparse.components.componentstore import ComponentStore
from chronoparse.components.componenttypes import (
    DebugCallback,
    DebugFlag,
    Field,
    ParsingOptions,
    ParsingReference,
    resolve_timezone,
)

logger = logging.getLogger(__name__)
debug_logger = logging.getLogger("chronoparse")


class ParsingContext:
    """
    Per-call state: input text, reference instant, options.

    The reference instant is converted once to the timezone the text should
    be read in; every store created through the context is seeded from it.
    A naive reference instant is read as wall time in the requested zone,
    or as UTC when no zone is given.
    """

    def __init__(
        self,
        text: str,
        reference: Optional[ParsingReference] = None,
        options: Optional[ParsingOptions] = None,
        abbreviations: Optional[Mapping[str, int]] = None,
    ):
        self.text = text
        self.reference = reference or ParsingReference()
        self.options = options or ParsingOptions()

        merged = dict(abbreviations or {})
        merged.update({k.upper(): v for k, v in self.options.timezones.items()})
        self.timezones: Mapping[str, int] = MappingProxyType(merged)

        self.tzinfo = self._reference_tzinfo()
        instant = self.reference.instant
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=self.tzinfo)
        self.reference_local: datetime = instant.astimezone(self.tzinfo)

    def _reference_tzinfo(self) -> tzinfo:
        zone = resolve_timezone(self.reference.timezone, self.timezones)
        if zone is not None:
            return zone
        if self.reference.instant.tzinfo is not None:
            return self.reference.instant.tzinfo
        return tz.UTC

    def create_components(self, known: Optional[Mapping[Field, int]] = None) -> ComponentStore:
        return ComponentStore(self.reference_local, known)

    def create_candidate(
        self,
        index: int,
        text: str,
        start: Optional[ComponentStore] = None,
        end: Optional[ComponentStore] = None,
    ) -> Candidate:
        return Candidate(index, text, start if start is not None else self.create_components(), end)

    def timezone_offset(self, abbreviation: str) -> Optional[int]:
        """Minute offset for a timezone abbreviation, or None if unknown."""
        return self.timezones.get(abbreviation.upper())

    def debug(self, message: str) -> None:
        """Send a message to the debug side channel; never raises."""
        logger.debug(message)

        sink = self.options.debug
        if isinstance(sink, DebugFlag):
            if sink.enabled:
                debug_logger.info(f"[chronoparse] {message}")
        elif isinstance(sink, DebugCallback):
            try:
                sink.callback(message)
            except Exception as e:
                logger.warning(f"Debug callback failed: {e}")


__all__ = [
    "ParsingContext",
]

"""Shared test fixtures for chronoparse tests."""

import pytest
from datetime import datetime

from dateutil import tz

from chronoparse.components.componentcontext import ParsingContext
from chronoparse.components.componenttypes import ParsingOptions, ParsingReference


@pytest.fixture
def reference_2023():
    """Thursday 1 June 2023, 09:30 UTC (ISO week 22 of 2023)."""
    return datetime(2023, 6, 1, 9, 30, tzinfo=tz.UTC)


@pytest.fixture
def reference_mid_january():
    """Sunday 15 January 2023, 10:00 UTC (ISO week 2 of 2023)."""
    return datetime(2023, 1, 15, 10, 0, tzinfo=tz.UTC)


@pytest.fixture
def make_context(reference_2023):
    """Factory for ParsingContext objects with a fixed reference.

    Example:
        def test_something(make_context):
            context = make_context("Week 15")
            assert context.reference_local.year == 2023
    """
    def _make(text, reference=None, options=None, abbreviations=None):
        ref = ParsingReference(instant=reference or reference_2023)
        return ParsingContext(text, ref, options or ParsingOptions(), abbreviations)
    return _make


@pytest.fixture
def debug_messages():
    """List collecting messages sent to a DebugCallback."""
    return []

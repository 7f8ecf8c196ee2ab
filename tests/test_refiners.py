"""Tests for the refiner pipeline stages.

Each stage is tested on its own with hand-built candidates, then through
the full English configuration.

Run with: pytest tests/test_refiners.py -v
"""

import pytest
from datetime import datetime

from dateutil import tz

from chronoparse import parse
from chronoparse.components.componentresult import Candidate
from chronoparse.components.componenttypes import Field, ParsingOptions
from chronoparse.parsers.parserbase import assign_week
from chronoparse.refiners import (
    ExtractYearSuffixRefiner,
    ForwardDateRefiner,
    MergeDateRangeRefiner,
    MergeDateTimeRefiner,
    PrioritizeSpecificRefiner,
    PrioritizeTagRefiner,
    UnlikelyFormatFilter,
)


REFERENCE_2024 = datetime(2024, 6, 1, 12, 0, tzinfo=tz.UTC)


def week_candidate(context, index, text, week, week_year=None):
    candidate = context.create_candidate(index, text)
    assert assign_week(context, candidate.start, week, week_year)
    candidate.add_tag("ENISOWeekParser")
    return candidate


def time_candidate(context, index, text, hour, minute=0):
    candidate = context.create_candidate(index, text)
    candidate.start.assign(Field.HOUR, hour).assign(Field.MINUTE, minute)
    return candidate


def date_candidate(context, index, text, month, day):
    candidate = context.create_candidate(index, text)
    candidate.start.assign(Field.MONTH, month).assign(Field.DAY, day)
    return candidate


# ============================================================================
# Merging
# ============================================================================

class TestMergeDateTime:
    """Test combining a date with an adjacent time"""

    def test_date_then_time(self, make_context):
        """Test 'Jan 15' + 'at' + '3pm' -> 15 January 15:00"""
        context = make_context("Jan 15 at 3pm")
        refiner = MergeDateTimeRefiner(["", "at"])
        merged = refiner.refine(context, [
            date_candidate(context, 0, "Jan 15", 1, 15),
            time_candidate(context, 10, "3pm", 15),
        ])
        assert len(merged) == 1
        assert merged[0].text == "Jan 15 at 3pm"
        assert merged[0].start.is_known(Field.HOUR)
        assert merged[0].start.get(Field.DAY) == 15
        assert merged[0].start.resolve() == datetime(2023, 1, 15, 15, 0, tzinfo=tz.UTC)

    def test_time_then_date(self, make_context):
        """Test a time before its date merges and keeps the first index"""
        context = make_context("15:30 on Jan 15")
        refiner = MergeDateTimeRefiner(["on"])
        merged = refiner.refine(context, [
            time_candidate(context, 0, "15:30", 15, 30),
            date_candidate(context, 9, "Jan 15", 1, 15),
        ])
        assert len(merged) == 1
        assert merged[0].index == 0
        assert merged[0].start.get(Field.MINUTE) == 30

    def test_unknown_connector_not_merged(self, make_context):
        """Test 'or' between a date and a time does not merge"""
        context = make_context("Jan 15 or 3pm")
        refiner = MergeDateTimeRefiner(["", "at"])
        merged = refiner.refine(context, [
            date_candidate(context, 0, "Jan 15", 1, 15),
            time_candidate(context, 10, "3pm", 15),
        ])
        assert len(merged) == 2

    def test_two_dates_not_merged(self, make_context):
        """Test two adjacent dates stay separate"""
        context = make_context("Jan 15 Jan 16")
        refiner = MergeDateTimeRefiner([""])
        merged = refiner.refine(context, [
            date_candidate(context, 0, "Jan 15", 1, 15),
            date_candidate(context, 7, "Jan 16", 1, 16),
        ])
        assert len(merged) == 2

    def test_week_with_time(self, reference_2023):
        """Test 'Week 15 at 10:00' -> Monday 10 April 10:00"""
        results = parse("Week 15 at 10:00", reference_2023)
        assert len(results) == 1
        assert results[0].date == datetime(2023, 4, 10, 10, 0, tzinfo=tz.UTC)


class TestMergeDateRange:
    """Test combining range endpoints"""

    def test_from_week_to_week(self, reference_2023):
        """Test 'from Week 45 to Week 48' -> one range with the prefix absorbed"""
        results = parse("from Week 45 to Week 48", reference_2023)
        assert len(results) == 1
        result = results[0]
        assert result.text == "from Week 45 to Week 48"
        assert result.index == 0
        assert result.start.iso_week == 45
        assert result.end.iso_week == 48
        assert result.start.iso_week_start == datetime(2023, 11, 6, tzinfo=tz.UTC)
        assert result.end.iso_week_start == datetime(2023, 11, 27, tzinfo=tz.UTC)

    def test_reversed_stated_endpoints_swap(self, make_context):
        """Test 'W48-2023 - W45-2023': both years stated, endpoints swap"""
        context = make_context("W48-2023 - W45-2023")
        refiner = MergeDateRangeRefiner(["-"])
        merged = refiner.refine(context, [
            week_candidate(context, 0, "W48-2023", 48, 2023),
            week_candidate(context, 11, "W45-2023", 45, 2023),
        ])
        assert len(merged) == 1
        assert merged[0].start.get(Field.ISO_WEEK) == 45
        assert merged[0].end.get(Field.ISO_WEEK) == 48
        assert merged[0].end.get(Field.ISO_WEEK_YEAR) == 2023

    def test_reversed_implied_end_rolls_forward(self, make_context):
        """Test 'Week 48 - Week 45' with implied years: the end moves to the next week-year"""
        context = make_context("Week 48 - Week 45")
        refiner = MergeDateRangeRefiner(["-"])
        merged = refiner.refine(context, [
            week_candidate(context, 0, "Week 48", 48),
            week_candidate(context, 10, "Week 45", 45),
        ])
        assert len(merged) == 1
        start, end = merged[0].start, merged[0].end
        assert (start.get(Field.ISO_WEEK), start.get(Field.ISO_WEEK_YEAR)) == (48, 2023)
        assert (end.get(Field.ISO_WEEK), end.get(Field.ISO_WEEK_YEAR)) == (45, 2024)
        assert not end.is_known(Field.ISO_WEEK_YEAR)

    def test_merge_leaves_inputs_untouched(self, make_context):
        """Test merging does not change the endpoint candidates"""
        context = make_context("Week 48 - Week 45")
        first = week_candidate(context, 0, "Week 48", 48)
        second = week_candidate(context, 10, "Week 45", 45)
        MergeDateRangeRefiner(["-"]).refine(context, [first, second])
        assert second.start.get(Field.ISO_WEEK_YEAR) == 2023

    def test_dates_roll_over_year_end(self):
        """Test 'from Dec 28 to Jan 3' -> 28 December .. 3 January of the following year"""
        results = parse("from Dec 28 to Jan 3", REFERENCE_2024)
        assert len(results) == 1
        assert results[0].start.date.date() == datetime(2024, 12, 28).date()
        assert results[0].end.date.date() == datetime(2025, 1, 3).date()
        assert not results[0].end.is_certain(Field.YEAR)

    def test_end_year_shared_with_start_week(self):
        """Test 'from Week 45 to Week 48 of 2023': the start takes 2023 as implied"""
        results = parse("from Week 45 to Week 48 of 2023", REFERENCE_2024)
        assert len(results) == 1
        start, end = results[0].start, results[0].end
        assert (start.iso_week, start.iso_week_year) == (45, 2023)
        assert (end.iso_week, end.iso_week_year) == (48, 2023)
        assert not start.is_certain(Field.ISO_WEEK_YEAR)
        assert end.is_certain(Field.ISO_WEEK_YEAR)

    def test_end_year_shared_with_start_date(self):
        """Test 'between Jan 5 and Jan 9, 2023' stays within 2023"""
        results = parse("between Jan 5 and Jan 9, 2023", REFERENCE_2024)
        assert len(results) == 1
        assert results[0].start.date.date() == datetime(2023, 1, 5).date()
        assert results[0].end.date.date() == datetime(2023, 1, 9).date()

    def test_start_year_shared_with_end(self, make_context):
        """Test 'W45-2022 - W48': the end takes the start's week-year"""
        context = make_context("W45-2022 - W48")
        merged = MergeDateRangeRefiner(["-"]).refine(context, [
            week_candidate(context, 0, "W45-2022", 45, 2022),
            week_candidate(context, 11, "W48", 48),
        ])
        assert merged[0].end.get(Field.ISO_WEEK_YEAR) == 2022
        assert not merged[0].end.is_known(Field.ISO_WEEK_YEAR)

    def test_weekday_range_rolls_forward(self, reference_2023):
        """Test 'Friday - Monday' on Thursday 1 June 2023 -> 2 June .. 5 June"""
        results = parse("Friday - Monday", reference_2023)
        assert len(results) == 1
        assert results[0].start.date.date() == datetime(2023, 6, 2).date()
        assert results[0].end.date.date() == datetime(2023, 6, 5).date()

    def test_between_and(self, reference_2023):
        """Test 'between Jan 5 and Jan 9' is a range"""
        results = parse("between Jan 5 and Jan 9", reference_2023)
        assert len(results) == 1
        assert results[0].text == "between Jan 5 and Jan 9"
        assert results[0].start.date.day == 5
        assert results[0].end.date.day == 9

    def test_and_without_between_is_not_a_range(self, reference_2023):
        """Test 'Jan 5 and Jan 9' gives two results"""
        results = parse("Jan 5 and Jan 9", reference_2023)
        assert len(results) == 2

    def test_time_range(self, reference_2023):
        """Test '15:00 - 17:30' is a time range"""
        results = parse("15:00 - 17:30", reference_2023)
        assert len(results) == 1
        assert results[0].start.get(Field.HOUR) == 15
        assert results[0].end.get(Field.HOUR) == 17

    def test_date_and_time_not_a_range(self, make_context):
        """Test a date and a time never form a range"""
        context = make_context("Jan 5 - 3pm")
        refiner = MergeDateRangeRefiner(["-"])
        merged = refiner.refine(context, [
            date_candidate(context, 0, "Jan 5", 1, 5),
            time_candidate(context, 8, "3pm", 15),
        ])
        assert len(merged) == 2


class TestExtractYearSuffix:
    """Test absorbing a trailing year"""

    def test_week_absorbs_year(self, make_context):
        """Test 'W15, 2021' -> week 15 of 2021"""
        context = make_context("W15, 2021")
        candidate = week_candidate(context, 0, "W15", 15)
        refined = ExtractYearSuffixRefiner().refine(context, [candidate])
        assert refined[0].text == "W15, 2021"
        assert refined[0].start.is_known(Field.ISO_WEEK_YEAR)
        assert refined[0].start.get(Field.ISO_WEEK_YEAR) == 2021
        assert refined[0].start.resolve().date() == datetime(2021, 4, 12).date()

    def test_week_absorbs_apostrophe_year(self, make_context):
        """Test \"W52 '20\" -> week 52 of 2020, Monday 21 December 2020"""
        context = make_context("W52 '20")
        candidate = week_candidate(context, 0, "W52", 52)
        refined = ExtractYearSuffixRefiner().refine(context, [candidate])
        assert refined[0].text == "W52 '20"
        assert refined[0].start.get(Field.ISO_WEEK_YEAR) == 2020
        assert refined[0].start.resolve().date() == datetime(2020, 12, 21).date()

    def test_input_candidate_untouched(self, make_context):
        """Test the refiner returns a new candidate and leaves its input alone"""
        context = make_context("W15, 2021")
        candidate = week_candidate(context, 0, "W15", 15)
        refined = ExtractYearSuffixRefiner().refine(context, [candidate])
        assert refined[0] is not candidate
        assert candidate.text == "W15"
        assert not candidate.start.is_known(Field.ISO_WEEK_YEAR)
        assert candidate.start.get(Field.ISO_WEEK_YEAR) == 2023

    def test_range_end_absorbs_year(self, make_context):
        """Test 'from W45 to W48, 2023': the end takes 2023, the start implies it"""
        context = make_context("from W45 to W48, 2023", reference=REFERENCE_2024)
        start = week_candidate(context, 5, "W45", 45).start
        end = week_candidate(context, 12, "W48", 48).start
        candidate = Candidate(0, "from W45 to W48", start, end, ["ENISOWeekParser"])
        refined = ExtractYearSuffixRefiner().refine(context, [candidate])
        assert refined[0].text == "from W45 to W48, 2023"
        assert refined[0].end.is_known(Field.ISO_WEEK_YEAR)
        assert refined[0].end.get(Field.ISO_WEEK_YEAR) == 2023
        assert refined[0].start.get(Field.ISO_WEEK_YEAR) == 2023
        assert not refined[0].start.is_known(Field.ISO_WEEK_YEAR)
        assert candidate.end.get(Field.ISO_WEEK_YEAR) == 2024

    def test_date_absorbs_year(self, reference_2023):
        """Test '15 March of 2021' -> a known 2021 date in week 11"""
        results = parse("15 March of 2021", reference_2023)
        assert len(results) == 1
        start = results[0].start
        assert start.is_certain(Field.YEAR)
        assert start.date.year == 2021
        assert (start.iso_week, start.iso_week_year) == (11, 2021)

    def test_known_week_year_untouched(self, make_context):
        """Test a week with a stated year ignores a following year"""
        context = make_context("W15-2022 2021")
        candidate = week_candidate(context, 0, "W15-2022", 15, 2022)
        refined = ExtractYearSuffixRefiner().refine(context, [candidate])
        assert refined[0].text == "W15-2022"
        assert refined[0].start.get(Field.ISO_WEEK_YEAR) == 2022

    def test_invalid_week_for_year_untouched(self, make_context):
        """Test week 53 keeps its year when the suffix year has only 52 weeks"""
        context = make_context("W53 2021", reference=datetime(2020, 6, 1, tzinfo=tz.UTC))
        candidate = week_candidate(context, 0, "W53", 53)
        refined = ExtractYearSuffixRefiner().refine(context, [candidate])
        assert refined[0].text == "W53"
        assert refined[0].start.get(Field.ISO_WEEK_YEAR) == 2020


# ============================================================================
# Filtering and prioritizing
# ============================================================================

class TestUnlikelyFormatFilter:
    """Test dropping bare numbers"""

    @pytest.mark.parametrize("text", ["15", "1.5", "3,14"])
    def test_bare_numbers_dropped(self, make_context, text):
        """Test bare numbers are not dates"""
        context = make_context(text)
        candidate = context.create_candidate(0, text)
        candidate.start.assign(Field.HOUR, 15)
        assert UnlikelyFormatFilter().refine(context, [candidate]) == []

    def test_strict_requires_known_date_or_hour(self, make_context):
        """Test strict mode drops candidates with nothing known"""
        context = make_context("soon")
        candidate = context.create_candidate(0, "soon")
        assert UnlikelyFormatFilter(strict=False).refine(context, [candidate]) == [candidate]
        assert UnlikelyFormatFilter(strict=True).refine(context, [candidate]) == []


class TestPrioritizeTags:
    """Test tagged interpretations winning at one offset"""

    def test_week_wins_over_day(self, make_context):
        """Test 'the 22nd week' beats 'the 22nd' at the same offset"""
        context = make_context("the 22nd week")
        week = week_candidate(context, 0, "the 22nd week", 22)
        day = context.create_candidate(0, "the 22nd")
        day.start.assign(Field.DAY, 22)
        refined = PrioritizeTagRefiner(["ENISOWeekParser"]).refine(context, [day, week])
        assert refined == [week]

    def test_untagged_group_kept(self, make_context):
        """Test a group without the tag is left alone"""
        context = make_context("x")
        a = context.create_candidate(0, "x")
        b = context.create_candidate(0, "x")
        assert PrioritizeTagRefiner(["ENISOWeekParser"]).refine(context, [a, b]) == [a, b]

    def test_single_member_kept(self, make_context):
        """Test candidates at different offsets are not compared"""
        context = make_context("x y")
        a = context.create_candidate(0, "x")
        b = context.create_candidate(2, "y").add_tag("ENISOWeekParser")
        assert PrioritizeTagRefiner(["ENISOWeekParser"]).refine(context, [a, b]) == [a, b]

    def test_end_to_end(self, reference_2023):
        """Test 'the 22nd week' parses as week 22 only"""
        results = parse("the 22nd week", reference_2023)
        assert len(results) == 1
        assert results[0].start.iso_week == 22


class TestPrioritizeSpecific:
    """Test overlap resolution"""

    def test_longest_wins(self, make_context):
        """Test the longer of two overlapping candidates wins"""
        context = make_context("at 15 Jan")
        time = time_candidate(context, 0, "at 15", 15)
        date = date_candidate(context, 3, "15 Jan", 1, 15)
        assert PrioritizeSpecificRefiner().refine(context, [time, date]) == [date]

    def test_more_known_fields_wins_tie(self, make_context):
        """Test equal lengths are decided by known field count"""
        context = make_context("abcdef")
        fewer = context.create_candidate(0, "abc")
        fewer.start.assign(Field.DAY, 1)
        more = context.create_candidate(1, "bcd")
        more.start.assign(Field.DAY, 1).assign(Field.MONTH, 2)
        assert PrioritizeSpecificRefiner().refine(context, [fewer, more]) == [more]

    def test_first_seen_wins_full_tie(self, make_context):
        """Test a full tie keeps the first candidate"""
        context = make_context("abcdef")
        first = context.create_candidate(0, "abc")
        second = context.create_candidate(0, "abc")
        assert PrioritizeSpecificRefiner().refine(context, [first, second]) == [first]

    def test_disjoint_kept(self, make_context):
        """Test non-overlapping candidates are kept in text order"""
        context = make_context("abc def")
        a = context.create_candidate(0, "abc")
        b = context.create_candidate(4, "def")
        assert PrioritizeSpecificRefiner().refine(context, [b, a]) == [a, b]


# ============================================================================
# Forward dating
# ============================================================================

class TestForwardDate:
    """Test moving implied past results forward (reference: 1 June 2023, week 22)"""

    def test_disabled_by_default(self, reference_2023):
        """Test 'W10' stays in 2023 without forward_date"""
        start = parse("W10", reference_2023)[0].start
        assert start.iso_week_year == 2023

    def test_past_week_moves_to_next_week_year(self, reference_2023):
        """Test 'W10' moves to week 10 of 2024"""
        start = parse("W10", reference_2023, ParsingOptions(forward_date=True))[0].start
        assert start.iso_week_year == 2024
        assert not start.is_certain(Field.ISO_WEEK_YEAR)
        assert start.date.date() == datetime(2024, 3, 4).date()

    def test_explicit_week_year_not_moved(self, reference_2023):
        """Test 'W10-2023' keeps its stated week-year"""
        start = parse("W10-2023", reference_2023, ParsingOptions(forward_date=True))[0].start
        assert start.iso_week_year == 2023

    def test_future_week_not_moved(self, reference_2023):
        """Test 'W30' is already ahead and stays"""
        start = parse("W30", reference_2023, ParsingOptions(forward_date=True))[0].start
        assert start.iso_week_year == 2023

    def test_past_date_moves_to_next_year(self, reference_2023):
        """Test 'March 3' moves to 3 March 2024"""
        start = parse("March 3", reference_2023, ParsingOptions(forward_date=True))[0].start
        assert start.date.year == 2024
        assert (start.iso_week, start.iso_week_year) == (9, 2024)

    def test_past_time_moves_to_next_day(self, reference_2023):
        """Test 'at 8:00' after 09:30 moves to the next day"""
        start = parse("at 8:00", reference_2023, ParsingOptions(forward_date=True))[0].start
        assert start.date == datetime(2023, 6, 2, 8, 0, tzinfo=tz.UTC)

    def test_past_weekday_moves_to_next_week(self, reference_2023):
        """Test 'Monday' on Thursday 1 June moves to Monday 5 June"""
        start = parse("Monday", reference_2023, ParsingOptions(forward_date=True))[0].start
        assert start.date.date() == datetime(2023, 6, 5).date()
        assert start.get(Field.WEEKDAY) == 0

    def test_modified_weekday_not_moved(self, reference_2023):
        """Test 'last Tuesday' keeps its known date"""
        start = parse("last Tuesday", reference_2023, ParsingOptions(forward_date=True))[0].start
        assert start.date.date() == datetime(2023, 5, 23).date()

    def test_refiner_noop_without_option(self, make_context):
        """Test the refiner returns its input when forward_date is off"""
        context = make_context("W10")
        candidate = week_candidate(context, 0, "W10", 10)
        refined = ForwardDateRefiner().refine(context, [candidate])
        assert refined == [candidate]
        assert candidate.start.get(Field.ISO_WEEK_YEAR) == 2023

    def test_refiner_returns_new_candidate(self, make_context):
        """Test a forwarded candidate is a new object and its input is unchanged"""
        context = make_context("W10", options=ParsingOptions(forward_date=True))
        candidate = week_candidate(context, 0, "W10", 10)
        refined = ForwardDateRefiner().refine(context, [candidate])
        assert refined[0] is not candidate
        assert refined[0].start.get(Field.ISO_WEEK_YEAR) == 2024
        assert candidate.start.get(Field.ISO_WEEK_YEAR) == 2023
        assert refined[0].has_tag("ENISOWeekParser")

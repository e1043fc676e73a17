"""Unit tests for academic week mapping and week set classification."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from timetable.models import RECESS_WEEK, TEACHING_WEEKS, AcademicWeek, NumericWeeks
from transformer.weeks import (
    classify_weeks,
    date_for_academic_week,
    is_alternate,
    is_split_over_recess,
    largest_gap,
    split_over_recess,
)

from conftest import SEMESTER_START, SGT


class TestAcademicWeek:
    def test_recess_week_sorts_between_week_6_and_7(self):
        weeks = NumericWeeks((AcademicWeek(7), RECESS_WEEK, AcademicWeek(6)))
        assert weeks.weeks == (AcademicWeek(6), RECESS_WEEK, AcademicWeek(7))

    def test_duplicates_are_removed(self):
        assert len(NumericWeeks.of(3, 1, 3, 2)) == 3

    @pytest.mark.parametrize("number", [0, 14, -1])
    def test_out_of_range_week_raises(self, number):
        with pytest.raises(ValueError):
            AcademicWeek(number)

    def test_str(self):
        assert str(RECESS_WEEK) == "Recess"
        assert str(AcademicWeek(4)) == "4"


class TestDateForAcademicWeek:
    @pytest.mark.parametrize("number", range(1, 7))
    def test_weeks_before_recess(self, number):
        expected = SEMESTER_START + timedelta(weeks=number - 1)
        assert date_for_academic_week(SEMESTER_START, AcademicWeek(number)) == expected

    @pytest.mark.parametrize("number", range(7, 14))
    def test_weeks_after_recess_are_bumped(self, number):
        expected = SEMESTER_START + timedelta(weeks=number)
        assert date_for_academic_week(SEMESTER_START, AcademicWeek(number)) == expected

    def test_recess_week(self):
        expected = SEMESTER_START + timedelta(weeks=6)
        assert date_for_academic_week(SEMESTER_START, RECESS_WEEK) == expected

    def test_keeps_time_of_day(self):
        start = datetime(2024, 8, 12, 14, 30, tzinfo=SGT)
        assert date_for_academic_week(start, AcademicWeek(7)) == datetime(
            2024, 9, 30, 14, 30, tzinfo=SGT
        )

    def test_all_weeks_map_to_distinct_dates(self):
        dates = {date_for_academic_week(SEMESTER_START, w) for w in (RECESS_WEEK, *TEACHING_WEEKS)}
        assert len(dates) == 14


class TestClassification:
    @pytest.mark.parametrize(
        "weeks",
        [(1, 3, 5, 7, 9, 11, 13), (2, 4, 6, 8, 10, 12), (3, 9), (4,)],
    )
    def test_odd_or_even_weeks_are_alternate(self, weeks):
        classification = classify_weeks(NumericWeeks.of(*weeks))
        assert classification.is_alternate
        assert classification.interval == 2

    @pytest.mark.parametrize("weeks", [(1, 2, 3), (1, 4), tuple(range(1, 14))])
    def test_mixed_weeks_are_weekly(self, weeks):
        classification = classify_weeks(NumericWeeks.of(*weeks))
        assert not classification.is_alternate
        assert classification.interval == 1

    def test_recess_week_is_never_alternate(self):
        weeks = NumericWeeks((RECESS_WEEK, AcademicWeek(7), AcademicWeek(9)))
        assert not is_alternate(weeks)

    def test_largest_gap(self):
        assert largest_gap(NumericWeeks.of(1, 2, 3)) == 1
        assert largest_gap(NumericWeeks.of(1, 3, 4, 6)) == 2
        assert largest_gap(NumericWeeks.of(5)) == 1

    def test_largest_gap_counts_recess_slot(self):
        assert largest_gap(NumericWeeks.of(6, 7)) == 2
        assert largest_gap(NumericWeeks((AcademicWeek(6), RECESS_WEEK, AcademicWeek(7)))) == 1
        assert largest_gap(NumericWeeks((AcademicWeek(5), RECESS_WEEK))) == 2

    def test_single_week_is_dense(self):
        classification = classify_weeks(NumericWeeks.of(9))
        assert classification.interval == 2
        assert classification.is_dense

    def test_weeks_across_recess_are_never_dense(self):
        assert not classify_weeks(NumericWeeks.of(5, 6, 7, 8)).is_dense

    def test_split_over_recess(self):
        assert is_split_over_recess(NumericWeeks.of(6, 7))
        assert is_split_over_recess(NumericWeeks.of(1, 3, 5, 8, 10))
        assert not is_split_over_recess(NumericWeeks.of(1, 2, 3))
        assert not is_split_over_recess(NumericWeeks.of(7, 8, 13))

    def test_recess_alone_does_not_count_as_split(self):
        weeks = NumericWeeks((AcademicWeek(5), RECESS_WEEK))
        assert not is_split_over_recess(weeks)


class TestSplitOverRecess:
    def test_splits_at_recess(self):
        first, second = split_over_recess(NumericWeeks.of(1, 3, 5, 8, 10))
        assert first == NumericWeeks.of(1, 3, 5)
        assert second == NumericWeeks.of(8, 10)

    def test_recess_goes_to_second_half(self):
        weeks = NumericWeeks((AcademicWeek(2), RECESS_WEEK, AcademicWeek(9)))
        first, second = split_over_recess(weeks)
        assert first == NumericWeeks.of(2)
        assert second == NumericWeeks((RECESS_WEEK, AcademicWeek(9)))

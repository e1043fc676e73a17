"""Shared test fixtures."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

import pytest

from timetable.config import CalendarConfig
from timetable.models import ExamInfo, Lesson, Module, NumericWeeks

SGT = timezone(timedelta(hours=8))

# Monday 12 August 2024
SEMESTER_START = date(2024, 8, 12)


@pytest.fixture()
def config() -> CalendarConfig:
    """Calendar settings with a known start date and two holidays."""
    return CalendarConfig(
        academic_year="2024/2025",
        holidays=(date(2024, 10, 31), date(2024, 12, 25)),
        academic_calendar={"2024/2025": {1: (2024, 8, 12)}},
    )


@pytest.fixture()
def no_holidays() -> CalendarConfig:
    return CalendarConfig(
        academic_year="2024/2025",
        holidays=(),
        academic_calendar={"2024/2025": {1: (2024, 8, 12)}},
    )


@pytest.fixture()
def first_day() -> datetime:
    return datetime(2024, 8, 12, tzinfo=SGT)


@pytest.fixture()
def module() -> Module:
    return Module(
        module_code="CS1010",
        title="Programming Methodology",
        exams={1: ExamInfo(exam_date="2024-11-27T01:00:00.000Z", exam_duration=120)},
    )


def make_lesson(*weeks: int, day: str = "Monday", **kwargs) -> Lesson:
    fields = dict(
        class_no="01",
        lesson_type="Tutorial",
        day=day,
        start_time=time(8, 0),
        end_time=time(9, 0),
        venue="COM1-0208",
        weeks=NumericWeeks.of(*weeks),
    )
    fields.update(kwargs)
    return Lesson(**fields)

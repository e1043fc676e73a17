"""Weekly recurrence rules for lessons.

Strategy is to generate a weekly rule starting at the first lesson,
then exclude every occurrence that doesn't actually happen: weeks the
lesson skips, recess week and public holidays.
"""

from datetime import date, datetime, time, timedelta

from timetable.config import CalendarConfig
from timetable.models import (
    ALL_WEEKS,
    EventTiming,
    Lesson,
    NumericWeeks,
    RecurrenceRule,
    WeekRange,
)
from .weeks import NUM_WEEKS_IN_A_SEM, classify_weeks, date_for_academic_week


def get_time_hour(value: time) -> float:
    """Return a time of day as fractional hours, e.g. 08:30 -> 8.5."""
    return value.hour + value.minute / 60


def holidays_for_year(config: CalendarConfig, hour_offset: float = 0) -> list[datetime]:
    """Return holiday instants lined up with a lesson starting at ``hour_offset``.

    Args:
        config: Settings holding the holiday dates and UTC offset.
        hour_offset: Hours after local midnight, so that each exclusion
            matches the lesson's start on that date.

    Returns:
        Holiday datetimes in the institution's local time.
    """
    return [
        datetime.combine(holiday, time.min, tzinfo=config.tzinfo)
        + timedelta(hours=hour_offset)
        for holiday in config.holidays
    ]


def calculate_start_end(
    day: date, lesson: Lesson, config: CalendarConfig
) -> tuple[datetime, datetime]:
    start = datetime.combine(day, lesson.start_time, tzinfo=config.tzinfo)
    end = datetime.combine(day, lesson.end_time, tzinfo=config.tzinfo)
    return start, end


def by_day(lesson: Lesson) -> tuple[str, ...]:
    return (lesson.day[:2].upper(),)


def unique(instants: list[datetime]) -> tuple[datetime, ...]:
    # Holidays may fall on an already excluded week.
    return tuple(dict.fromkeys(instants))


def calculate_numeric_week(
    lesson: Lesson,
    weeks: NumericWeeks,
    first_day_of_school: date,
    config: CalendarConfig,
) -> EventTiming:
    """Build the timing of a lesson that runs on numbered academic weeks.

    Sets interval to 2 for purely odd or purely even weeks, since some
    calendar apps mishandle weekly rules with many exclusions but show a
    fortnightly rule correctly. The rule starts at the lesson's first
    week; the count only stops it early when the week set has no holes
    for the exclusions to cover.
    """
    lesson_day = first_day_of_school + timedelta(days=lesson.day_index)
    week_one_start, week_one_end = calculate_start_end(lesson_day, lesson, config)

    classification = classify_weeks(weeks)
    interval = classification.interval
    count = len(weeks) if classification.is_dense else NUM_WEEKS_IN_A_SEM
    start = date_for_academic_week(week_one_start, weeks.weeks[0])
    end = date_for_academic_week(week_one_end, weeks.weeks[0])

    excluded_weeks = [week for week in ALL_WEEKS if week not in weeks]
    exclude = [date_for_academic_week(week_one_start, week) for week in excluded_weeks]
    exclude += holidays_for_year(config, get_time_hour(lesson.start_time))

    return EventTiming(
        start=start,
        end=end,
        repeating=RecurrenceRule(
            interval=interval,
            count=count,
            by_day=by_day(lesson),
            exclude=unique(exclude),
        ),
    )


def calculate_week_range(
    lesson: Lesson, week_range: WeekRange, config: CalendarConfig
) -> EventTiming:
    """Build the timing of a lesson given as an explicit date range.

    When ``week_range.weeks`` lists the occurrences that happen, every
    other occurrence inside the range is excluded.
    """
    start, end = calculate_start_end(week_range.start, lesson, config)
    interval = week_range.week_interval or 1
    exclude = []

    if week_range.weeks is not None:
        current = week_range.start
        week_number = 1
        while current <= week_range.end:
            if week_number not in week_range.weeks:
                exclude.append(calculate_start_end(current, lesson, config)[0])
            current += timedelta(weeks=interval)
            week_number += interval

    _, last_end = calculate_start_end(week_range.end, lesson, config)
    exclude += holidays_for_year(config, get_time_hour(lesson.start_time))

    return EventTiming(
        start=start,
        end=end,
        repeating=RecurrenceRule(
            interval=interval,
            until=last_end,
            by_day=by_day(lesson),
            exclude=unique(exclude),
        ),
    )

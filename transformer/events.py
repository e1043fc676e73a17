"""Calendar events for lessons, exams and whole timetables."""

import dataclasses
from datetime import datetime, time, timedelta
from typing import Optional

from timetable.config import CalendarConfig
from timetable.models import CalendarEvent, Lesson, Module, NumericWeeks, WeekRange
from .recurrence import calculate_numeric_week, calculate_week_range
from .weeks import NUM_WEEKS_IN_A_SEM, is_split_over_recess, split_over_recess

Timetable = dict[str, dict[str, list[Lesson]]]


def parse_exam_date(exam_date: str, config: CalendarConfig) -> Optional[datetime]:
    """Parse an ISO-8601 exam timestamp into local time.

    Returns:
        The exam start, or None if the value isn't a valid timestamp.
    """
    try:
        start = datetime.fromisoformat(exam_date.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return None
    if start.tzinfo is None:
        return start.replace(tzinfo=config.tzinfo)
    return start.astimezone(config.tzinfo)


def event_for_exam(
    module: Module, semester: int, config: CalendarConfig
) -> Optional[CalendarEvent]:
    exam = module.exams.get(semester)
    if exam is None or not exam.exam_date:
        return None

    start = parse_exam_date(exam.exam_date, config)
    if start is None:
        return None

    duration = exam.exam_duration or config.default_exam_duration
    return CalendarEvent(
        start=start,
        end=start + timedelta(minutes=duration),
        summary=f"{module.module_code} Exam",
        description=module.title,
    )


def event_for_lesson(
    lesson: Lesson,
    module: Module,
    first_day: datetime,
    config: CalendarConfig,
) -> CalendarEvent:
    """Build the repeating calendar event for one lesson.

    Args:
        lesson: Lesson to schedule.
        module: Module the lesson belongs to.
        first_day: Monday of week 1 at local midnight.
        config: Calendar settings.

    Returns:
        Event whose recurrence rule covers every occurrence of the lesson.
    """
    if isinstance(lesson.weeks, NumericWeeks):
        timing = calculate_numeric_week(
            lesson, lesson.weeks, first_day.date(), config
        )
    elif isinstance(lesson.weeks, WeekRange):
        timing = calculate_week_range(lesson, lesson.weeks, config)
    else:
        raise TypeError(f"Unsupported lesson weeks: {lesson.weeks!r}")

    return CalendarEvent(
        start=timing.start,
        end=timing.end,
        summary=f"{module.module_code} {lesson.lesson_type}",
        description=f"{module.title}\n{lesson.lesson_type} Group {lesson.class_no}",
        location=lesson.venue,
        repeating=timing.repeating,
    )


def needs_recess_split(lesson: Lesson) -> bool:
    """Whether a lesson should be emitted as two events around recess week.

    Mobile Google Calendar ignores exclusion rules on import, so short
    lessons on both sides of recess become one dense rule per half.
    """
    weeks = lesson.weeks
    return (
        isinstance(weeks, NumericWeeks)
        and is_split_over_recess(weeks)
        and len(weeks) <= NUM_WEEKS_IN_A_SEM / 2
    )


def split_lesson(lesson: Lesson) -> tuple[Lesson, Lesson]:
    first_half, second_half = split_over_recess(lesson.weeks)
    return (
        dataclasses.replace(lesson, weeks=first_half),
        dataclasses.replace(lesson, weeks=second_half),
    )


def first_day_of_school(
    semester: int, config: CalendarConfig, academic_year: str = ""
) -> datetime:
    start = config.semester_start(semester, academic_year)
    return datetime.combine(start, time.min, tzinfo=config.tzinfo)


def events_for_timetable(
    semester: int,
    timetable: Timetable,
    module_data: dict[str, Module],
    hidden_modules: list[str],
    config: CalendarConfig,
    academic_year: str = "",
) -> list[CalendarEvent]:
    """Build every calendar event of a semester timetable.

    Args:
        semester: Semester number (1-4).
        timetable: Lessons per lesson type, per module code.
        module_data: Module details keyed by module code.
        hidden_modules: Module codes to leave out entirely.
        config: Calendar settings.
        academic_year: Overrides ``config.academic_year`` when given.

    Returns:
        Lesson events in timetable order, each module followed by its exam.
    """
    first_day = first_day_of_school(semester, config, academic_year)
    events: list[CalendarEvent] = []

    for module_code, lesson_config in timetable.items():
        if module_code in hidden_modules:
            continue
        module = module_data[module_code]

        for lessons in lesson_config.values():
            for lesson in lessons:
                if needs_recess_split(lesson):
                    for half in split_lesson(lesson):
                        events.append(event_for_lesson(half, module, first_day, config))
                else:
                    events.append(event_for_lesson(lesson, module, first_day, config))

        exam_event = event_for_exam(module, semester, config)
        if exam_event:
            events.append(exam_event)

    return events

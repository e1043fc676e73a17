"""Loading of module data, timetable selections and calendar settings.

Module data follows the NUSMods API layout: each module has a
``semesterData`` list whose entries carry the exam details and the
lessons offered that semester.
"""

import json
import re
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any

from .config import CalendarConfig
from .models import (
    RECESS_WEEK,
    AcademicWeek,
    ExamInfo,
    Lesson,
    LessonWeeks,
    Module,
    NumericWeeks,
    WeekRange,
)


@dataclass
class ModuleRecord:
    """A module together with the lessons it offers per semester."""

    module: Module
    lessons: dict[int, list[Lesson]] = field(default_factory=dict)


def parse_lesson_time(value: str) -> time:
    """Parse a time string in the format of hhmm, e.g. '0830'."""
    match = re.fullmatch(r"(\d{2})(\d{2})", value.strip())
    if not match:
        raise ValueError(f"Invalid lesson time: '{value}'. Expected hhmm.")
    hour, minute = map(int, match.groups())
    return time(hour, minute)


def parse_date(value: str) -> date:
    """Parse date string in YYYY-MM-DD format."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(f"Invalid date format: '{value}'. Expected YYYY-MM-DD.")


def parse_academic_week(value: Any) -> AcademicWeek:
    if isinstance(value, str) and value.strip().lower() == "recess":
        return RECESS_WEEK
    return AcademicWeek(int(value))


def parse_weeks(raw: Any) -> LessonWeeks:
    """Parse either a list of academic weeks or a week range object."""
    if isinstance(raw, list):
        return NumericWeeks(tuple(parse_academic_week(week) for week in raw))
    if isinstance(raw, dict):
        weeks = raw.get("weeks")
        return WeekRange(
            start=parse_date(raw["start"]),
            end=parse_date(raw["end"]),
            week_interval=int(raw.get("weekInterval") or 1),
            weeks=tuple(int(w) for w in weeks) if weeks is not None else None,
        )
    raise ValueError(f"Unsupported lesson weeks: {raw!r}")


def parse_lesson(raw: dict[str, Any]) -> Lesson:
    try:
        return Lesson(
            class_no=str(raw["classNo"]),
            lesson_type=raw["lessonType"],
            day=raw["day"],
            start_time=parse_lesson_time(raw["startTime"]),
            end_time=parse_lesson_time(raw["endTime"]),
            venue=raw.get("venue", ""),
            weeks=parse_weeks(raw["weeks"]),
        )
    except KeyError as e:
        raise ValueError(f"Lesson is missing field {e}")


def parse_module(raw: dict[str, Any]) -> ModuleRecord:
    """Parse a module document into its details and per-semester lessons."""
    try:
        module_code = raw["moduleCode"]
    except KeyError:
        raise ValueError("Module is missing field 'moduleCode'")

    exams = {}
    lessons = {}
    for semester_data in raw.get("semesterData", []):
        try:
            semester = int(semester_data["semester"])
        except KeyError:
            raise ValueError(f"Module {module_code} semesterData entry is missing field 'semester'")
        if semester_data.get("examDate"):
            exams[semester] = ExamInfo(
                exam_date=semester_data["examDate"],
                exam_duration=semester_data.get("examDuration"),
            )
        lessons[semester] = [parse_lesson(lesson) for lesson in semester_data.get("timetable", [])]

    module = Module(module_code=module_code, title=raw.get("title", ""), exams=exams)
    return ModuleRecord(module=module, lessons=lessons)


def _read_json(path: str) -> Any:
    with open(path, encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"{path} is not valid JSON: {e}")


def load_modules(path: str) -> dict[str, ModuleRecord]:
    """Load module data from a JSON list of modules or a mapping by code."""
    data = _read_json(path)
    raw_modules = data.values() if isinstance(data, dict) else data
    records = [parse_module(raw) for raw in raw_modules]
    return {record.module.module_code: record for record in records}


def load_selection(path: str) -> dict[str, dict[str, str]]:
    """Load a timetable selection: class number per lesson type per module."""
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ValueError(f"{path} must map module codes to lesson selections")
    return {
        module_code: {lesson_type: str(class_no) for lesson_type, class_no in lessons.items()}
        for module_code, lessons in data.items()
    }


def build_timetable(
    selection: dict[str, dict[str, str]],
    modules: dict[str, ModuleRecord],
    semester: int,
) -> dict[str, dict[str, list[Lesson]]]:
    """Attach the chosen lessons to a timetable selection.

    Args:
        selection: Class number per lesson type, per module code.
        modules: Loaded module records.
        semester: Semester whose lessons are used.

    Returns:
        Lessons per lesson type, per module code, in selection order.

    Raises:
        ValueError: If a selected module has no data.
    """
    timetable = {}
    for module_code, lesson_config in selection.items():
        if module_code not in modules:
            raise ValueError(f"No module data for {module_code}")
        offered = modules[module_code].lessons.get(semester, [])

        timetable[module_code] = {}
        for lesson_type, class_no in lesson_config.items():
            lessons = [
                lesson
                for lesson in offered
                if lesson.lesson_type == lesson_type and lesson.class_no == class_no
            ]
            if not lessons:
                print(
                    f"Warning: Skipping {module_code} {lesson_type} {class_no}: "
                    f"not offered in semester {semester}"
                )
                continue
            timetable[module_code][lesson_type] = lessons
    return timetable


def load_config(path: str) -> CalendarConfig:
    """Load calendar settings from JSON, falling back to the defaults."""
    data = _read_json(path)
    defaults = CalendarConfig()

    academic_calendar = defaults.academic_calendar
    if "academicCalendar" in data:
        academic_calendar = {
            year: {int(semester): tuple(start) for semester, start in semesters.items()}
            for year, semesters in data["academicCalendar"].items()
        }

    # A different offset no longer matches the default zone name.
    timezone_name = None if "utcOffsetHours" in data else defaults.timezone_name

    holidays = defaults.holidays
    if "holidays" in data:
        holidays = tuple(parse_date(d) for d in data["holidays"])

    return CalendarConfig(
        academic_year=data.get("academicYear", defaults.academic_year),
        utc_offset_hours=data.get("utcOffsetHours", defaults.utc_offset_hours),
        holidays=holidays,
        academic_calendar=academic_calendar,
        default_exam_duration=data.get("defaultExamDuration", defaults.default_exam_duration),
        timezone_name=data.get("timezoneName", timezone_name),
    )

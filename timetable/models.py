"""Data models for lessons, modules and calendar events."""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional, Union

WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)
MAX_TEACHING_WEEK = 13


@dataclass(frozen=True)
class AcademicWeek:
    """A week of the semester: a teaching week 1-13 or the recess week.

    The recess week is not numbered with the teaching weeks; it sits in
    the calendar slot between week 6 and week 7.
    """

    number: Optional[int] = None  # None for recess week

    def __post_init__(self) -> None:
        if self.number is not None and not 1 <= self.number <= MAX_TEACHING_WEEK:
            raise ValueError(
                f"Teaching week must be 1-{MAX_TEACHING_WEEK}, got {self.number}"
            )

    @property
    def is_recess(self) -> bool:
        return self.number is None

    @property
    def slot(self) -> int:
        """Calendar weeks between week 1 and this week."""
        if self.number is None:
            return 6
        return self.number - 1 if self.number <= 6 else self.number

    def __lt__(self, other: "AcademicWeek") -> bool:
        return self.slot < other.slot

    def __str__(self) -> str:
        return "Recess" if self.is_recess else str(self.number)


RECESS_WEEK = AcademicWeek()
TEACHING_WEEKS = tuple(AcademicWeek(n) for n in range(1, MAX_TEACHING_WEEK + 1))
ODD_WEEKS = frozenset(w for w in TEACHING_WEEKS if w.number % 2 == 1)
EVEN_WEEKS = frozenset(w for w in TEACHING_WEEKS if w.number % 2 == 0)
ALL_WEEKS = (RECESS_WEEK, *TEACHING_WEEKS)


@dataclass(frozen=True)
class NumericWeeks:
    """Distinct academic weeks a lesson runs on, in calendar order."""

    weeks: tuple[AcademicWeek, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "weeks", tuple(sorted(set(self.weeks))))

    @classmethod
    def of(cls, *numbers: int) -> "NumericWeeks":
        return cls(tuple(AcademicWeek(n) for n in numbers))

    def __iter__(self):
        return iter(self.weeks)

    def __len__(self) -> int:
        return len(self.weeks)

    def __contains__(self, week: object) -> bool:
        return week in self.weeks


@dataclass(frozen=True)
class WeekRange:
    """Explicit date range for lessons that don't follow academic weeks."""

    start: date
    end: date
    week_interval: int = 1
    weeks: Optional[tuple[int, ...]] = None  # 1-based occurrence indices


LessonWeeks = Union[NumericWeeks, WeekRange]


@dataclass(frozen=True)
class Lesson:
    """A class slot of a module, e.g. Tutorial group 03."""

    class_no: str
    lesson_type: str
    day: str
    start_time: time
    end_time: time
    venue: str
    weeks: LessonWeeks

    def __post_init__(self) -> None:
        if self.day.lower() not in WEEKDAYS:
            raise ValueError(f"Unknown weekday: '{self.day}'")
        if self.start_time >= self.end_time:
            raise ValueError("Start time must be before end time")

    @property
    def day_index(self) -> int:
        return WEEKDAYS.index(self.day.lower())


@dataclass(frozen=True)
class ExamInfo:
    exam_date: str
    exam_duration: Optional[int] = None  # minutes


@dataclass(frozen=True)
class Module:
    module_code: str
    title: str
    exams: dict[int, ExamInfo] = field(default_factory=dict)


@dataclass(frozen=True)
class RecurrenceRule:
    """Weekly repeat pattern with explicit excluded occurrences."""

    interval: int
    by_day: tuple[str, ...]
    count: Optional[int] = None
    until: Optional[datetime] = None
    exclude: tuple[datetime, ...] = ()
    freq: str = "WEEKLY"

    def __post_init__(self) -> None:
        if self.interval < 1:
            raise ValueError("Repeat interval must be at least 1")
        if (self.count is None) == (self.until is None):
            raise ValueError("Exactly one of count and until must be set")


@dataclass(frozen=True)
class EventTiming:
    start: datetime
    end: datetime
    repeating: Optional[RecurrenceRule] = None


@dataclass(frozen=True)
class CalendarEvent:
    """A single calendar entry, optionally repeating."""

    start: datetime
    end: datetime
    summary: str
    description: str
    location: Optional[str] = None
    repeating: Optional[RecurrenceRule] = None

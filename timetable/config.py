"""Static academic calendar data and converter settings."""

from dataclasses import dataclass, field
from datetime import date, timedelta, timezone
from typing import Optional

# Semester start dates (Monday of week 1), keyed by academic year and semester.
# Semesters 3 and 4 are the special terms.
DEFAULT_ACADEMIC_CALENDAR: dict[str, dict[int, tuple[int, int, int]]] = {
    "2023/2024": {
        1: (2023, 8, 7),
        2: (2024, 1, 15),
        3: (2024, 5, 13),
        4: (2024, 6, 24),
    },
    "2024/2025": {
        1: (2024, 8, 12),
        2: (2025, 1, 13),
        3: (2025, 5, 12),
        4: (2025, 6, 23),
    },
    "2025/2026": {
        1: (2025, 8, 11),
        2: (2026, 1, 12),
        3: (2026, 5, 11),
        4: (2026, 6, 22),
    },
}

# Singapore public holidays, including observed Mondays.
DEFAULT_HOLIDAYS: tuple[date, ...] = (
    date(2024, 1, 1),
    date(2024, 2, 10),
    date(2024, 2, 12),
    date(2024, 3, 29),
    date(2024, 4, 10),
    date(2024, 5, 1),
    date(2024, 5, 22),
    date(2024, 6, 17),
    date(2024, 8, 9),
    date(2024, 10, 31),
    date(2024, 12, 25),
    date(2025, 1, 1),
    date(2025, 1, 29),
    date(2025, 1, 30),
    date(2025, 3, 31),
    date(2025, 4, 18),
    date(2025, 5, 1),
    date(2025, 5, 12),
    date(2025, 6, 7),
    date(2025, 8, 9),
    date(2025, 10, 20),
    date(2025, 12, 25),
)


@dataclass(frozen=True)
class CalendarConfig:
    """Read-only settings shared by every event calculation.

    Args:
        academic_year: Academic year used when none is given explicitly.
        utc_offset_hours: Fixed UTC offset of the institution.
        holidays: Non-teaching dates excluded from every lesson.
        academic_calendar: Semester start dates per academic year.
        default_exam_duration: Exam length in minutes when unknown.
        timezone_name: IANA zone advertised to calendar apps, or None when
            the offset matches no named zone.
    """

    academic_year: str = "2025/2026"
    utc_offset_hours: int = 8
    holidays: tuple[date, ...] = DEFAULT_HOLIDAYS
    academic_calendar: dict[str, dict[int, tuple[int, int, int]]] = field(
        default_factory=lambda: DEFAULT_ACADEMIC_CALENDAR
    )
    default_exam_duration: int = 120
    timezone_name: Optional[str] = "Asia/Singapore"

    @property
    def tzinfo(self) -> timezone:
        return timezone(timedelta(hours=self.utc_offset_hours))

    def semester_start(self, semester: int, academic_year: str = "") -> date:
        """Return the first day of week 1 of the given semester.

        Raises:
            ValueError: If the calendar has no entry for the semester.
        """
        year = academic_year or self.academic_year
        try:
            y, m, d = self.academic_calendar[year][semester]
        except KeyError:
            raise ValueError(
                f"No academic calendar entry for {year} semester {semester}"
            )
        return date(y, m, d)

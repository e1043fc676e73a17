"""Academic week arithmetic: week-to-date mapping and week set analysis."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import TypeVar

from timetable.models import EVEN_WEEKS, ODD_WEEKS, AcademicWeek, NumericWeeks

NUM_WEEKS_IN_A_SEM = 14  # including recess week

D = TypeVar("D", bound=date)


def date_for_academic_week(start: D, week: AcademicWeek) -> D:
    """Return the date of the given academic week.

    Args:
        start: Date (or datetime) of the lesson in week 1.
        week: Academic week to map.

    Returns:
        ``start`` moved forward by whole weeks. Weeks 7 and later are
        bumped by an extra week because of recess week.
    """
    return start + timedelta(weeks=week.slot)


@dataclass(frozen=True)
class WeekClassification:
    """Facts about a week set that decide the shape of its recurrence rule."""

    is_alternate: bool
    largest_gap: int
    is_split_over_recess: bool
    size: int

    @property
    def interval(self) -> int:
        return 2 if self.is_alternate else 1

    @property
    def is_dense(self) -> bool:
        """Whether every gap between occurrences equals the interval."""
        if self.size <= 1:
            return True
        return self.largest_gap == self.interval and not self.is_split_over_recess


def is_alternate(weeks: NumericWeeks) -> bool:
    return all(w in ODD_WEEKS for w in weeks) or all(w in EVEN_WEEKS for w in weeks)


def largest_gap(weeks: NumericWeeks) -> int:
    """Largest number of calendar weeks between consecutive occurrences."""
    slots = [w.slot for w in weeks]
    gap = 1
    for current, following in zip(slots, slots[1:]):
        gap = max(gap, following - current)
    return gap


def is_split_over_recess(weeks: NumericWeeks) -> bool:
    numbers = [w.number for w in weeks if not w.is_recess]
    return any(n <= 6 for n in numbers) and any(n > 6 for n in numbers)


def classify_weeks(weeks: NumericWeeks) -> WeekClassification:
    return WeekClassification(
        is_alternate=is_alternate(weeks),
        largest_gap=largest_gap(weeks),
        is_split_over_recess=is_split_over_recess(weeks),
        size=len(weeks),
    )


def split_over_recess(weeks: NumericWeeks) -> tuple[NumericWeeks, NumericWeeks]:
    """Split a week set into the weeks before recess and the rest."""
    before = tuple(w for w in weeks if not w.is_recess and w.number <= 6)
    after = tuple(w for w in weeks if w not in before)
    return NumericWeeks(before), NumericWeeks(after)

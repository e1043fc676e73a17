"""iCalendar transformer for calendar events."""

import hashlib
from datetime import datetime, timezone
from typing import Optional

from icalendar import Calendar, Event, vRecur

from timetable.models import CalendarEvent, RecurrenceRule
from .base import BaseTransformer


def _utc(value: datetime) -> datetime:
    # Fixed offsets carry no TZID.
    return value.astimezone(timezone.utc)


class ICalTransformer(BaseTransformer):
    """Transformer that writes calendar events to iCalendar format."""

    PRODID = "-//Timetable to iCal//timetable2ical//EN"

    def __init__(
        self,
        calendar_name: str = "Timetable",
        timestamp: Optional[datetime] = None,
        timezone_name: Optional[str] = None,
    ) -> None:
        """Initialize the iCalendar transformer.

        Args:
            calendar_name: Name shown by calendar apps for the import.
            timestamp: DTSTAMP for every event. Defaults to the time of
                ``transform()``; pass a fixed value for reproducible files.
            timezone_name: Zone name for the X-WR-TIMEZONE header. The
                header is left out when None, since times are written in UTC.
        """
        self._calendar: Optional[Calendar] = None
        self._calendar_name = calendar_name
        self._timestamp = timestamp
        self._timezone_name = timezone_name

    def _generate_uid(self, event: CalendarEvent, index: int) -> str:
        """Generate a stable unique identifier for an event.

        The position is part of the key because a lesson split around
        recess week yields two events with the same summary and time.
        """
        unique_string = f"{event.summary}-{event.start.isoformat()}-{event.location}-{index}"
        return hashlib.md5(unique_string.encode()).hexdigest() + "@timetable2ical"

    def _build_rrule(self, rule: RecurrenceRule) -> vRecur:
        recur = {
            "freq": rule.freq,
            "interval": rule.interval,
            "byday": list(rule.by_day),
        }
        if rule.count is not None:
            recur["count"] = rule.count
        else:
            recur["until"] = _utc(rule.until)
        return vRecur(recur)

    def transform(self, events: list[CalendarEvent]) -> Calendar:
        """Transform calendar events into iCalendar format.

        Args:
            events: Ordered calendar events to serialize.

        Returns:
            iCalendar Calendar object.
        """
        self._calendar = Calendar()
        self._calendar.add("prodid", self.PRODID)
        self._calendar.add("version", "2.0")
        self._calendar.add("calscale", "GREGORIAN")
        self._calendar.add("method", "PUBLISH")
        self._calendar.add("x-wr-calname", self._calendar_name)
        if self._timezone_name:
            self._calendar.add("x-wr-timezone", self._timezone_name)

        timestamp = _utc(self._timestamp or datetime.now(timezone.utc))

        for index, calendar_event in enumerate(events):
            ical_event = Event()
            ical_event.add("uid", self._generate_uid(calendar_event, index))
            ical_event.add("dtstart", _utc(calendar_event.start))
            ical_event.add("dtend", _utc(calendar_event.end))
            ical_event.add("dtstamp", timestamp)
            ical_event.add("summary", calendar_event.summary)

            if calendar_event.description:
                ical_event.add("description", calendar_event.description)

            if calendar_event.location:
                ical_event.add("location", calendar_event.location)

            rule = calendar_event.repeating
            if rule is not None:
                ical_event.add("rrule", self._build_rrule(rule))
                if rule.exclude:
                    ical_event.add("exdate", [_utc(d) for d in rule.exclude])

            self._calendar.add_component(ical_event)

        return self._calendar

    def save(self, output_path: str) -> None:
        """Save the calendar to an .ics file.

        Args:
            output_path: Path to the output file.

        Raises:
            RuntimeError: If transform() hasn't been called yet.
        """
        if self._calendar is None:
            raise RuntimeError("No calendar data. Call transform() first.")

        with open(output_path, "wb") as f:
            f.write(self._calendar.to_ical())

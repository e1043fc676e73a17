"""Transformer module for turning timetables into calendar events and files."""

from .base import BaseTransformer
from .events import events_for_timetable
from .ical_transformer import ICalTransformer

__all__ = ["BaseTransformer", "ICalTransformer", "events_for_timetable"]

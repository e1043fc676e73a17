"""Timetable module for lesson, module and calendar data."""

from .config import CalendarConfig
from .loader import build_timetable, load_config, load_modules, load_selection
from .models import CalendarEvent, Lesson, Module

__all__ = [
    "CalendarConfig",
    "CalendarEvent",
    "Lesson",
    "Module",
    "build_timetable",
    "load_config",
    "load_modules",
    "load_selection",
]

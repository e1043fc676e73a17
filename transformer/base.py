"""Abstract base class for calendar event sinks."""

from abc import ABC, abstractmethod
from typing import Any

from timetable.models import CalendarEvent


class BaseTransformer(ABC):
    """Abstract base class defining the interface for event serializers.

    Extend this class to write calendar events in other formats
    (e.g., Google Calendar API, JSON, etc.).
    """

    @abstractmethod
    def transform(self, events: list[CalendarEvent]) -> Any:
        """Transform calendar events into the target format.

        Args:
            events: Ordered calendar events to serialize.

        Returns:
            Transformed data in the target format.
        """
        pass

    @abstractmethod
    def save(self, output_path: str) -> None:
        """Save the transformed data to a file.

        Args:
            output_path: Path to the output file.
        """
        pass

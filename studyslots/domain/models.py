"""
Domain models for clock-time intervals and weekly timetables.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping

from .clock import to_minutes
from .exceptions import TimetableError

WEEKDAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


def normalize_day(day: str) -> str:
    """
    Return the canonical English weekday name for a case-insensitive input.

    Raises:
        TimetableError: If the name is not an English weekday
    """
    for weekday in WEEKDAYS:
        if weekday.lower() == day.strip().lower():
            return weekday

    raise TimetableError(
        f"Unknown day '{day}'. Use one of: {', '.join(WEEKDAYS)}."
    )


class SlotMode(str, Enum):
    """How the slot calculator treats out-of-contract busy intervals."""

    LENIENT = "lenient"  # clamp, merge, never raise
    STRICT = "strict"  # validate and raise


@dataclass(frozen=True)
class TimeInterval:
    """
    An immutable span of wall-clock time within a single day.

    Times are ``HH:MM`` strings. Ordering of start and end is not enforced
    here; strict slot calculation validates it.
    """
    start: str
    end: str

    @property
    def start_minutes(self) -> int:
        return to_minutes(self.start)

    @property
    def end_minutes(self) -> int:
        return to_minutes(self.end)

    def duration_minutes(self) -> int:
        """Return the duration in minutes (negative for inverted intervals)."""
        return self.end_minutes - self.start_minutes

    def overlaps(self, other: "TimeInterval") -> bool:
        """Check if this interval overlaps with another (touching is not overlapping)."""
        return self.start_minutes < other.end_minutes and self.end_minutes > other.start_minutes

    def to_dict(self) -> Dict[str, str]:
        return {"start": self.start, "end": self.end}

    def __str__(self) -> str:
        return f"{self.start} - {self.end}"


@dataclass(frozen=True)
class ClassEntry(TimeInterval):
    """A fixed class (busy interval) with the subject shown to the student."""
    subject: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"start": self.start, "end": self.end, "subject": self.subject}

    def __str__(self) -> str:
        label = f" {self.subject}" if self.subject else ""
        return f"{self.start} - {self.end}{label}"


@dataclass(frozen=True)
class DayWindow:
    """The start and end bounding a scheduling day."""
    day_start: str = "06:00"
    day_end: str = "23:00"

    @property
    def start_minutes(self) -> int:
        return to_minutes(self.day_start)

    @property
    def end_minutes(self) -> int:
        return to_minutes(self.day_end)

    def as_interval(self) -> TimeInterval:
        return TimeInterval(start=self.day_start, end=self.day_end)


@dataclass
class WeeklyTimetable:
    """
    Classes per English weekday name ("Monday" ... "Sunday").
    """
    days: Dict[str, List[ClassEntry]] = field(default_factory=dict)

    def classes_for(self, day: str) -> List[ClassEntry]:
        """Return the classes for a day, or an empty list if none are stored."""
        return list(self.days.get(day, []))

    def add_class(self, day: str, entry: ClassEntry) -> None:
        """Append a class to a day, keeping the day's classes ordered by start time."""
        entries = self.days.setdefault(day, [])
        entries.append(entry)
        entries.sort(key=lambda e: e.start_minutes)

    def clear_day(self, day: str) -> None:
        self.days.pop(day, None)

    def to_dict(self) -> Dict[str, List[Dict[str, str]]]:
        return {
            day: [entry.to_dict() for entry in entries]
            for day, entries in self.days.items()
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, List[ClassEntry]]) -> "WeeklyTimetable":
        return cls(days={day: list(entries) for day, entries in data.items()})

"""
Domain-specific exception hierarchy for the studyslots application.
"""


class StudySlotsError(Exception):
    """Base class for all application-level errors."""


class InvalidTimeFormat(StudySlotsError, ValueError):
    """Raised when a clock time is not a valid ``HH:MM`` string."""


class InvalidWindow(StudySlotsError, ValueError):
    """Raised when a day window does not open before it closes."""


class InvalidInterval(StudySlotsError, ValueError):
    """Raised when a busy interval does not start before it ends."""


class IntervalOutsideWindow(StudySlotsError, ValueError):
    """Raised when a busy interval extends beyond the day window."""


class OverlappingIntervals(StudySlotsError, ValueError):
    """Raised when two busy intervals overlap in strict mode."""


class StorageError(StudySlotsError):
    """Raised when a local document cannot be read or written."""


class TimetableError(StorageError):
    """Raised when timetable data cannot be loaded, saved or looked up."""


class TaskStoreError(StorageError):
    """Raised when the daily task checklist cannot be loaded or saved."""

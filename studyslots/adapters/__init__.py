"""
Adapters layer - Local timetable and task storage.
"""

from .task_file import TaskFileStore, load_checklist
from .timetable_file import TimetableFileSource, load_timetable

__all__ = ["TaskFileStore", "TimetableFileSource", "load_checklist", "load_timetable"]

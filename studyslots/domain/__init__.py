"""
Domain layer - Pure business logic without external dependencies.
"""

from .clock import parse_clock_time, to_minutes, to_time
from .duration import format_duration, get_total_free_minutes
from .models import ClassEntry, DayWindow, SlotMode, TimeInterval, WeeklyTimetable, normalize_day
from .slot_calculator import MIN_GAP_MINUTES, SlotCalculator, get_free_slots
from .tasks import DailyChecklist, Task, parse_plan_to_tasks

__all__ = [
    "ClassEntry",
    "DailyChecklist",
    "DayWindow",
    "MIN_GAP_MINUTES",
    "SlotCalculator",
    "SlotMode",
    "Task",
    "TimeInterval",
    "WeeklyTimetable",
    "format_duration",
    "get_free_slots",
    "get_total_free_minutes",
    "normalize_day",
    "parse_clock_time",
    "parse_plan_to_tasks",
    "to_minutes",
    "to_time",
]

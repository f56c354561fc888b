"""
Aggregation and display helpers for free time.
"""

from typing import Iterable

from .clock import MINUTES_PER_HOUR
from .models import TimeInterval


def get_total_free_minutes(slots: Iterable[TimeInterval]) -> int:
    """Sum the durations of all slots. Inverted slots count negatively."""
    return sum(slot.duration_minutes() for slot in slots)


def format_duration(minutes: int) -> str:
    """
    Format a minute count compactly.

    Examples: 0 -> "0m", 45 -> "45m", 60 -> "1h", 90 -> "1h 30m".
    Negative values keep their sign in front: -90 -> "-1h 30m".
    """
    if minutes < 0:
        return f"-{format_duration(-minutes)}"

    hours, mins = divmod(minutes, MINUTES_PER_HOUR)

    if hours == 0:
        return f"{mins}m"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}m"

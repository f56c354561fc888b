"""
Conversions between ``HH:MM`` clock times and minutes since midnight.
"""

import re

from .exceptions import InvalidTimeFormat

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR

_CLOCK_TIME_PATTERN = re.compile(r"([01]\d|2[0-3]):[0-5]\d", re.ASCII)
_CLOCK_SHAPE_PATTERN = re.compile(r"(\d+):(\d+)", re.ASCII)


def to_minutes(value: str) -> int:
    """
    Convert a clock time to minutes since midnight.

    Only the shape ``<int>:<int>`` is enforced; ranges are not checked here.
    Use ``parse_clock_time`` for full validation.

    Raises:
        InvalidTimeFormat: If the value is not two colon-separated integers
    """
    if not isinstance(value, str):
        raise InvalidTimeFormat(f"Clock time must be a string, got {value!r}")

    match = _CLOCK_SHAPE_PATTERN.fullmatch(value)
    if match is None:
        raise InvalidTimeFormat(f"Clock time must look like HH:MM, got {value!r}")

    hour, minute = int(match.group(1)), int(match.group(2))

    return hour * MINUTES_PER_HOUR + minute


def to_time(minutes: int) -> str:
    """Render minutes since midnight as a zero-padded ``HH:MM`` string."""
    hour, minute = divmod(minutes, MINUTES_PER_HOUR)
    return f"{hour:02d}:{minute:02d}"


def parse_clock_time(value: str) -> str:
    """
    Validate a strict ``HH:MM`` clock time (00:00 - 23:59) and return it.

    Raises:
        InvalidTimeFormat: If the value does not match the format or range
    """
    if not isinstance(value, str) or not _CLOCK_TIME_PATTERN.fullmatch(value):
        raise InvalidTimeFormat(
            f"Invalid clock time {value!r}: expected HH:MM between 00:00 and 23:59"
        )
    return value

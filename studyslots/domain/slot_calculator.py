"""
Core business logic for calculating free study slots within a day.

This is the heart of the application - pure domain logic without any
external dependencies (no API calls, no storage, no I/O).
"""

import logging
from typing import List, Sequence, Tuple

from .clock import parse_clock_time, to_minutes, to_time
from .exceptions import (
    IntervalOutsideWindow,
    InvalidInterval,
    InvalidWindow,
    OverlappingIntervals,
)
from .models import DayWindow, SlotMode, TimeInterval

logger = logging.getLogger(__name__)

MIN_GAP_MINUTES = 30

# (start, end) in minutes since midnight
MinuteRange = Tuple[int, int]


class SlotCalculator:
    """
    Calculates free slots in a day window around fixed classes.

    Algorithm:
    1. An empty timetable leaves the whole window free
    2. Normalize busy intervals (lenient: clamp and merge, strict: validate)
    3. Walk the busy intervals in start order, collecting the lead gap,
       the gaps between classes and the trail gap
    4. Keep only gaps of at least ``min_gap_minutes``
    """

    def __init__(
        self,
        window: DayWindow | None = None,
        min_gap_minutes: int = MIN_GAP_MINUTES,
        mode: SlotMode = SlotMode.LENIENT,
    ):
        if min_gap_minutes <= 0:
            raise ValueError(f"min_gap_minutes must be greater than zero, got {min_gap_minutes}")
        self.window = window or DayWindow()
        self.min_gap_minutes = min_gap_minutes
        self.mode = SlotMode(mode)

    def find_free_slots(self, classes: Sequence[TimeInterval]) -> List[TimeInterval]:
        """
        Find all free slots between the given classes.

        Args:
            classes: Busy intervals for the day, in any order

        Returns:
            Free slots ordered by start time

        Raises:
            InvalidTimeFormat: On malformed clock times
            InvalidWindow: Strict mode, if the window does not open before it closes
            InvalidInterval: Strict mode, if a class does not start before it ends
            IntervalOutsideWindow: Strict mode, if a class leaves the window
            OverlappingIntervals: Strict mode, if two classes overlap
        """
        if self.mode is SlotMode.STRICT:
            window_start, window_end = self._validate_window()
        else:
            window_start = self.window.start_minutes
            window_end = self.window.end_minutes

        if not classes:
            return [self.window.as_interval()]

        if self.mode is SlotMode.STRICT:
            busy = self._validate_busy(classes, window_start, window_end)
        else:
            busy = self._normalize_busy(classes, window_start, window_end)

        return self._collect_gaps(window_start, window_end, busy)

    def _validate_window(self) -> MinuteRange:
        day_start = to_minutes(parse_clock_time(self.window.day_start))
        day_end = to_minutes(parse_clock_time(self.window.day_end))

        if day_end <= day_start:
            raise InvalidWindow(
                f"Day window {self.window.day_start} - {self.window.day_end} must open before it closes"
            )

        return day_start, day_end

    def _validate_busy(
        self,
        classes: Sequence[TimeInterval],
        window_start: int,
        window_end: int
    ) -> List[MinuteRange]:
        """
        Check every class against the strict contract and return sorted minute ranges.
        """
        ranges: List[MinuteRange] = []

        for entry in classes:
            start = to_minutes(parse_clock_time(entry.start))
            end = to_minutes(parse_clock_time(entry.end))

            if end <= start:
                raise InvalidInterval(f"Class {entry} must start before it ends")
            if start < window_start or end > window_end:
                raise IntervalOutsideWindow(
                    f"Class {entry} lies outside the day window "
                    f"{self.window.day_start} - {self.window.day_end}"
                )

            ranges.append((start, end))

        ranges.sort(key=lambda r: r[0])

        for current, following in zip(ranges, ranges[1:]):
            if current[1] > following[0]:
                raise OverlappingIntervals(
                    f"Classes {to_time(current[0])} - {to_time(current[1])} and "
                    f"{to_time(following[0])} - {to_time(following[1])} overlap"
                )

        return ranges

    def _normalize_busy(
        self,
        classes: Sequence[TimeInterval],
        window_start: int,
        window_end: int
    ) -> List[MinuteRange]:
        """
        Clip classes to the window, drop empty ones and merge overlaps.
        """
        clipped: List[MinuteRange] = []

        for entry in classes:
            busy = (entry.start_minutes, entry.end_minutes)
            bounded = self._clip_range_to_bounds(busy, window_start, window_end)

            if bounded is None:
                logger.warning("Ignoring class %s: empty or outside the day window", entry)
                continue
            if bounded != busy:
                logger.debug("Clipped class %s to %s - %s", entry, to_time(bounded[0]), to_time(bounded[1]))

            clipped.append(bounded)

        return self._merge_adjacent_ranges(clipped)

    @staticmethod
    def _clip_range_to_bounds(
        busy: MinuteRange,
        min_bound: int,
        max_bound: int
    ) -> MinuteRange | None:
        """
        Clip a minute range to fit within bounds.
        Returns None if nothing of the range is left.
        """
        start = max(busy[0], min_bound)
        end = min(busy[1], max_bound)

        if start >= end:
            return None

        return start, end

    @staticmethod
    def _merge_adjacent_ranges(ranges: List[MinuteRange]) -> List[MinuteRange]:
        """
        Merge overlapping or adjacent minute ranges.

        Example: [09:00-10:30, 10:00-11:00] -> [09:00-11:00]
        """
        if not ranges:
            return []

        # Stable sort: equal starts keep insertion order
        sorted_ranges = sorted(ranges, key=lambda r: r[0])
        merged: List[MinuteRange] = [sorted_ranges[0]]

        for current in sorted_ranges[1:]:
            last = merged[-1]

            if current[0] <= last[1]:
                if current[0] < last[1]:
                    logger.debug(
                        "Merging overlapping classes ending %s and starting %s",
                        to_time(last[1]),
                        to_time(current[0]),
                    )
                merged[-1] = (last[0], max(last[1], current[1]))
            else:
                merged.append(current)

        return merged

    def _collect_gaps(
        self,
        window_start: int,
        window_end: int,
        busy: List[MinuteRange]
    ) -> List[TimeInterval]:
        """
        Subtract sorted, non-overlapping busy ranges from the window.

        Example:
        Window: 06:00 - 23:00
        Busy: [09:00-10:00, 11:00-12:00]
        Result: [06:00-09:00, 10:00-11:00, 12:00-23:00]
        """
        free: List[TimeInterval] = []
        cursor = window_start

        for start, end in busy:
            if start - cursor >= self.min_gap_minutes:
                free.append(TimeInterval(start=to_time(cursor), end=to_time(start)))
            cursor = end

        if window_end - cursor >= self.min_gap_minutes:
            free.append(TimeInterval(start=to_time(cursor), end=to_time(window_end)))

        return free


def get_free_slots(
    classes: Sequence[TimeInterval],
    day_start: str = "06:00",
    day_end: str = "23:00",
    min_gap_minutes: int = MIN_GAP_MINUTES,
    mode: SlotMode = SlotMode.LENIENT,
) -> List[TimeInterval]:
    """
    Free slots of at least ``min_gap_minutes`` between ``day_start`` and ``day_end``.

    Shortcut for ``SlotCalculator(...).find_free_slots(classes)``.
    """
    calculator = SlotCalculator(
        window=DayWindow(day_start=day_start, day_end=day_end),
        min_gap_minutes=min_gap_minutes,
        mode=mode,
    )
    return calculator.find_free_slots(classes)

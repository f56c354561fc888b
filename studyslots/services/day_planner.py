"""
Application services for planning a student's day.

The service fetches the weekly timetable through a source adapter, picks the
requested day's classes and delegates the free-time calculation to the
domain-level ``SlotCalculator``. Depending on a simple protocol keeps the CLI
thin and lets tests plug in a stub source.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

import pendulum

from ..domain.duration import format_duration, get_total_free_minutes
from ..domain.models import ClassEntry, TimeInterval, WeeklyTimetable, normalize_day
from ..domain.slot_calculator import SlotCalculator

logger = logging.getLogger(__name__)


class TimetableSourceProtocol(Protocol):
    """Protocol describing the timetable storage behaviour needed by the service."""

    async def get_timetable(self) -> Optional[WeeklyTimetable]:
        """Return the stored weekly timetable, or None if nothing is stored."""


@dataclass(frozen=True)
class DaySummary:
    """Classes and free time for one day."""
    day: str
    classes: List[ClassEntry] = field(default_factory=list)
    free_slots: List[TimeInterval] = field(default_factory=list)
    total_free_minutes: int = 0

    @property
    def total_free_display(self) -> str:
        return format_duration(self.total_free_minutes)


class DayPlannerService:
    """
    Orchestrates timetable retrieval and free-slot calculation for a day.
    """

    def __init__(
        self,
        timetable_source: TimetableSourceProtocol,
        slot_calculator: SlotCalculator,
        timezone: str = "Europe/Berlin",
    ) -> None:
        self._timetable_source = timetable_source
        self._slot_calculator = slot_calculator
        self._timezone = timezone

    def resolve_day(self, day: str | None = None) -> str:
        """
        Return the canonical weekday name, defaulting to today in the configured timezone.

        Raises:
            TimetableError: If the name is not an English weekday
        """
        if day is None:
            return pendulum.now(self._timezone).format("dddd", locale="en")

        return normalize_day(day)

    async def classes_for_day(self, day: str | None = None) -> List[ClassEntry]:
        """Fetch the classes scheduled on a day; empty if nothing is stored."""
        day_name = self.resolve_day(day)
        timetable = await self._timetable_source.get_timetable()

        if timetable is None:
            logger.info("No timetable stored, %s has no classes", day_name)
            return []

        return timetable.classes_for(day_name)

    async def plan_day(self, day: str | None = None) -> DaySummary:
        """
        Fetch the day's classes and compute its free time.

        Without a stored timetable the whole day window is free.
        """
        day_name = self.resolve_day(day)
        classes = await self.classes_for_day(day_name)
        return self.summarize(day_name, classes)

    def summarize(self, day: str, classes: List[ClassEntry]) -> DaySummary:
        """Compute free slots and totals for already-fetched classes."""
        free_slots = self._slot_calculator.find_free_slots(classes)
        total = get_total_free_minutes(free_slots)

        logger.debug(
            "%s: %d class(es), %d free slot(s), %s free",
            day,
            len(classes),
            len(free_slots),
            format_duration(total),
        )

        return DaySummary(
            day=day,
            classes=list(classes),
            free_slots=free_slots,
            total_free_minutes=total,
        )

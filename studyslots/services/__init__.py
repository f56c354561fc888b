"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .day_planner import DayPlannerService, DaySummary, TimetableSourceProtocol

__all__ = ["DayPlannerService", "DaySummary", "TimetableSourceProtocol"]

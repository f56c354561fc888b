"""
File-backed timetable source.

Reads the weekly timetable document the mobile app keeps in device storage:

    {"Monday": [{"start": "09:00", "end": "10:00", "subject": "Maths"}], ...}

JSON files are read and written by suffix, anything else is YAML.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ..domain.clock import to_time
from ..domain.exceptions import TimetableError
from ..domain.models import ClassEntry, WeeklyTimetable
from .documents import read_document, remove_document, write_document

logger = logging.getLogger(__name__)

REQUIRED_ENTRY_KEYS = ("start", "end")


def _clock_value(value: Any) -> str:
    # YAML 1.1 reads unquoted 10:30 as the base-60 integer 630
    if isinstance(value, int) and not isinstance(value, bool):
        return to_time(value)
    return str(value)


def load_timetable(data: Mapping[str, Any]) -> WeeklyTimetable:
    """
    Build a WeeklyTimetable from a parsed mapping of day -> list of entries.

    Raises:
        TimetableError: If the document does not have the expected shape
    """
    if not isinstance(data, Mapping):
        raise TimetableError("Timetable must be a mapping of weekday names to class lists.")

    days: Dict[str, List[ClassEntry]] = {}

    for day, entries in data.items():
        if entries is None:
            days[str(day)] = []
            continue
        if not isinstance(entries, list):
            raise TimetableError(f"Classes for {day} must be a list, got {type(entries).__name__}.")

        classes: List[ClassEntry] = []
        for index, entry in enumerate(entries):
            if not isinstance(entry, Mapping):
                raise TimetableError(f"Class #{index + 1} on {day} must be a mapping.")

            missing = [key for key in REQUIRED_ENTRY_KEYS if key not in entry]
            if missing:
                raise TimetableError(
                    f"Class #{index + 1} on {day} is missing {', '.join(missing)}."
                )

            classes.append(
                ClassEntry(
                    start=_clock_value(entry["start"]),
                    end=_clock_value(entry["end"]),
                    subject=str(entry.get("subject", "")),
                )
            )

        days[str(day)] = classes

    return WeeklyTimetable(days=days)


class TimetableFileSource:
    """
    Timetable source that loads a weekly timetable from a JSON or YAML file.

    A missing file means no timetable has been stored yet.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    async def get_timetable(self) -> Optional[WeeklyTimetable]:
        return self.read()

    def read(self) -> Optional[WeeklyTimetable]:
        """
        Load the timetable synchronously.

        Raises:
            TimetableError: If the file cannot be read or parsed
        """
        if not self.path.exists():
            logger.info("Timetable file %s does not exist", self.path)
            return None

        data = read_document(self.path, TimetableError)

        if data is None:
            return WeeklyTimetable()

        return load_timetable(data)

    def save(self, timetable: WeeklyTimetable) -> None:
        """
        Replace the stored timetable.

        Raises:
            TimetableError: If the file cannot be written
        """
        write_document(self.path, timetable.to_dict(), TimetableError)
        logger.info("Saved timetable with %d day(s) to %s", len(timetable.days), self.path)

    def clear(self) -> bool:
        """Delete the stored timetable. Returns False if nothing was stored."""
        return remove_document(self.path, TimetableError)

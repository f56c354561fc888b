"""
File-backed store for the daily task checklist.

The document is a list of ``{"id", "text", "done"}`` mappings, the shape the
mobile app keeps for its daily tasks.
"""

import logging
from pathlib import Path
from typing import Any, List, Mapping

from ..domain.exceptions import TaskStoreError
from ..domain.tasks import DailyChecklist, Task
from .documents import read_document, remove_document, write_document

logger = logging.getLogger(__name__)


def load_checklist(data: Any) -> DailyChecklist:
    """
    Build a DailyChecklist from a parsed list of task mappings.

    Raises:
        TaskStoreError: If the document does not have the expected shape
    """
    if not isinstance(data, list):
        raise TaskStoreError("Task list must be a list of tasks.")

    tasks: List[Task] = []
    for index, item in enumerate(data):
        if not isinstance(item, Mapping) or "text" not in item:
            raise TaskStoreError(f"Task #{index + 1} must be a mapping with a 'text' key.")

        tasks.append(
            Task(
                id=str(item.get("id", index + 1)),
                text=str(item["text"]),
                done=bool(item.get("done", False)),
            )
        )

    return DailyChecklist(tasks=tasks)


class TaskFileStore:
    """
    Loads and saves the daily checklist from a JSON or YAML file.

    A missing file is an empty checklist.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> DailyChecklist:
        """
        Raises:
            TaskStoreError: If the file cannot be read or parsed
        """
        if not self.path.exists():
            return DailyChecklist()

        data = read_document(self.path, TaskStoreError)
        if data is None:
            return DailyChecklist()

        return load_checklist(data)

    def save(self, checklist: DailyChecklist) -> None:
        write_document(self.path, checklist.to_list(), TaskStoreError)
        logger.info("Saved %d task(s) to %s", checklist.total, self.path)

    def clear(self) -> bool:
        """Delete the stored checklist. Returns False if nothing was stored."""
        return remove_document(self.path, TaskStoreError)

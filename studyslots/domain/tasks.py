"""
Daily task checklist built from a day plan.
"""

import re
from dataclasses import dataclass, field, replace
from typing import Dict, List

# Leading bullets and the emoji markers a generated plan puts in front of each line
_PLAN_LINE_MARKERS = re.compile("^[-•*⏰📚🍽💪🎯✨️]+\\s*")


@dataclass(frozen=True)
class Task:
    """A single checklist item."""
    id: str
    text: str
    done: bool = False

    def to_dict(self) -> Dict[str, object]:
        return {"id": self.id, "text": self.text, "done": self.done}


@dataclass
class DailyChecklist:
    """
    Ordered list of tasks for the current day.

    Task ids are increasing integers rendered as strings, unique within the list.
    """
    tasks: List[Task] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.tasks)

    @property
    def completed(self) -> int:
        return sum(1 for task in self.tasks if task.done)

    def progress_display(self) -> str:
        return f"{self.completed}/{self.total} done"

    def _next_id(self) -> str:
        numeric_ids = [int(task.id) for task in self.tasks if task.id.isdigit()]
        return str(max(numeric_ids, default=0) + 1)

    def add(self, text: str) -> Task:
        """
        Append a task.

        Raises:
            ValueError: If the text is blank
        """
        text = text.strip()
        if not text:
            raise ValueError("Task text must not be empty")

        task = Task(id=self._next_id(), text=text)
        self.tasks.append(task)
        return task

    def toggle(self, task_id: str) -> Task:
        """
        Flip a task between done and open.

        Raises:
            KeyError: If no task has the given id
        """
        for index, task in enumerate(self.tasks):
            if task.id == task_id:
                toggled = replace(task, done=not task.done)
                self.tasks[index] = toggled
                return toggled

        raise KeyError(task_id)

    def to_list(self) -> List[Dict[str, object]]:
        return [task.to_dict() for task in self.tasks]


def parse_plan_to_tasks(plan_text: str) -> DailyChecklist:
    """
    Turn a day plan (one step per line) into an open checklist.

    Blank lines are skipped and leading bullets or emoji markers are stripped.
    """
    checklist = DailyChecklist()

    for line in plan_text.splitlines():
        text = _PLAN_LINE_MARKERS.sub("", line.strip()).strip()
        if text:
            checklist.add(text)

    return checklist

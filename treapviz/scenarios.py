"""Task scheduler scenario.

A treap makes a handy scheduler: keyed by task id it supports lookups by id,
and heap-ordered by urgency the most urgent task is always the root. Processing
a task means deleting the root.
"""
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from .core.treap import Treap


@dataclass(frozen=True)
class Task:
    id: int
    name: str
    priority: int
    deadline: str
    duration: str


SAMPLE_TASKS: List[Task] = [
    Task(45, "Fix Critical Bug", 95, "Today 5 PM", "2h"),
    Task(32, "Code Review", 70, "Tomorrow", "1h"),
    Task(78, "Deploy to Production", 88, "Today EOD", "30m"),
    Task(12, "Team Meeting", 50, "Tomorrow 10 AM", "1h"),
    Task(56, "Write Documentation", 35, "This Week", "3h"),
    Task(89, "Security Patch", 92, "Urgent", "1.5h"),
]


class TaskScheduler:
    """Queue tasks in a treap and hand them out most urgent first."""

    def __init__(self, treap: Optional[Treap] = None):
        self.treap = treap if treap is not None else Treap()
        self.tasks: Dict[int, Task] = {}

    def add(self, task: Task) -> None:
        """Queue `task`. A task with the id of one already queued replaces it,
        taking on the new task's priority."""
        if task.id in self.tasks:
            self.treap.delete(task.id)
        self.tasks[task.id] = task
        self.treap.insert(task.id, task.priority)

    def is_pending(self, task: Task) -> bool:
        return self.treap.search(task.id)

    def peek(self) -> Optional[Task]:
        if self.treap.root is None:
            return None
        return self.tasks.get(self.treap.root.key)

    def process_next(self) -> Optional[Task]:
        """Remove and return the most urgent task, or None when the queue is
        empty."""
        if self.treap.root is None:
            return None
        key = self.treap.root.key
        self.treap.delete(key)
        return self.tasks.pop(key, None)

    def drain(self) -> Iterator[Task]:
        while self.treap.root is not None:
            task = self.process_next()
            if task is not None:
                yield task


def load_sample_tasks(scheduler: TaskScheduler) -> TaskScheduler:
    for task in SAMPLE_TASKS:
        scheduler.add(task)
    return scheduler

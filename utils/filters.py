# utils/filters.py
"""
Task list filtering.

All criteria are optional and combined with AND:
- status / priority equality
- delayed flag (past deadline and not completed)
- search: case-insensitive substring of title or project id
- start date range, inclusive on both ends
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, List, Optional

from models import Priority, Status, Task
from utils.kpis import is_delayed


@dataclass(frozen=True)
class TaskCriteria:
    status: Optional[Status] = None
    priority: Optional[Priority] = None
    delayed: bool = False
    search: str = ""
    date_from: Optional[date] = None
    date_to: Optional[date] = None

    @property
    def is_empty(self) -> bool:
        return self == TaskCriteria()


def matches_search(task: Task, term: str) -> bool:
    if not term:
        return True
    term = term.strip().lower()
    return term in (task.title or "").lower() or term in (task.project_id or "").lower()


def matches_date_range(task: Task, date_from: Optional[date], date_to: Optional[date]) -> bool:
    if date_from is None and date_to is None:
        return True
    if task.start_date is None:
        return False
    if date_from is not None and task.start_date < date_from:
        return False
    if date_to is not None and task.start_date > date_to:
        return False
    return True


def task_matches(task: Task, criteria: TaskCriteria, now: Optional[datetime] = None) -> bool:
    if criteria.status is not None and task.status != criteria.status:
        return False
    if criteria.priority is not None and task.priority != criteria.priority:
        return False
    if criteria.delayed and not is_delayed(task, now):
        return False
    if not matches_search(task, criteria.search):
        return False
    return matches_date_range(task, criteria.date_from, criteria.date_to)


def filter_tasks(tasks: Iterable[Task], criteria: TaskCriteria,
                 now: Optional[datetime] = None) -> List[Task]:
    """Return a new list of the tasks matching every active criterion."""
    now = now or datetime.now()
    return [t for t in tasks if task_matches(t, criteria, now)]

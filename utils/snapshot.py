# utils/snapshot.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

import pandas as pd

from models import Snapshot, Task
from utils.kpis import is_delayed

logger = logging.getLogger(__name__)

UNASSIGNED = "Unassigned"
NO_DEPARTMENT = "No department"

TASK_COLUMNS = [
    "id", "project_id", "title", "assignee", "department", "priority",
    "status", "estimated_hours", "start_date", "end_date", "completed_date",
    "delayed",
]


def load_snapshot(owner_id: int, provider) -> Snapshot:
    """Fetch tasks, members and departments for one owner as a single snapshot."""
    snap = Snapshot.of(
        provider.list_tasks(owner_id),
        provider.list_members(owner_id),
        provider.list_departments(owner_id),
    )
    logger.debug("Snapshot for owner %s: %d tasks, %d members, %d departments",
                 owner_id, len(snap.tasks), len(snap.members), len(snap.departments))
    return snap


def tasks_frame(tasks: Iterable[Task], snapshot: Snapshot,
                now: Optional[datetime] = None) -> pd.DataFrame:
    """Task list rows with member/department names resolved for display."""
    now = now or datetime.now()
    rows = []
    for t in tasks:
        member = snapshot.member(t.assigned_to)
        dept = snapshot.department(t.department_id)
        rows.append({
            "id": t.id,
            "project_id": t.project_id,
            "title": t.title,
            "assignee": member.name if member else UNASSIGNED,
            "department": dept.name if dept else NO_DEPARTMENT,
            "priority": t.priority.value,
            "status": t.status.value,
            "estimated_hours": float(t.estimated_hours or 0),
            "start_date": t.start_date,
            "end_date": t.end_date,
            "completed_date": t.completed_date,
            "delayed": is_delayed(t, now),
        })
    return pd.DataFrame(rows, columns=TASK_COLUMNS)

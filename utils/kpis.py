# utils/kpis.py
"""
Dashboard KPIs computed from a read-only list of tasks.

Every function here is pure: same tasks and same ``now`` give the same
result, and inputs are never modified. Empty inputs give zero counts.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional, Sequence

from models import Department, Snapshot, Status, Task, TeamMember
from models.task import OPEN_STATUSES
from utils.dates import start_of

WORKLOAD_CAPACITY_HOURS = 40
UNPLANNED_ALERT_THRESHOLD = 20


@dataclass(frozen=True)
class StatusCounts:
    completed: int = 0
    in_progress: int = 0
    pending: int = 0
    delayed: int = 0


@dataclass(frozen=True)
class DeliveryStats:
    on_time_count: int = 0
    late_count: int = 0
    on_time_percentage: int = 0


@dataclass(frozen=True)
class PlanningMix:
    planned_count: int = 0
    unplanned_count: int = 0
    unplanned_percentage: int = 0

    @property
    def alert(self) -> bool:
        return self.unplanned_percentage > UNPLANNED_ALERT_THRESHOLD


@dataclass(frozen=True)
class DepartmentShare:
    department: Department
    count: int


@dataclass(frozen=True)
class MemberWorkload:
    member: TeamMember
    hours: float
    capacity: int = WORKLOAD_CAPACITY_HOURS


def percent(part: int, whole: int) -> int:
    """Integer percentage rounded half-up; 0 when ``whole`` is 0."""
    if whole <= 0:
        return 0
    value = Decimal(part) * 100 / Decimal(whole)
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


# ---- predicates ----
def is_delayed(task: Task, now: Optional[datetime] = None) -> bool:
    if task.status == Status.COMPLETED or task.end_date is None:
        return False
    now = now or datetime.now()
    return start_of(task.end_date) < now


def is_on_time(task: Task) -> bool:
    if task.status != Status.COMPLETED or task.completed_date is None:
        return False
    if task.end_date is None:
        return True
    return task.completed_date <= task.end_date


def is_late_closed(task: Task) -> bool:
    if task.status != Status.COMPLETED or task.completed_date is None:
        return False
    if task.end_date is None:
        return False
    return task.completed_date > task.end_date


# ---- aggregations ----
def compute_status_counts(tasks: Iterable[Task], now: Optional[datetime] = None) -> StatusCounts:
    """
    Count tasks per status bucket plus the delayed ones.

    Delayed is counted independently: a Pending task past its deadline
    shows up under both ``pending`` and ``delayed``. Rejected tasks are
    in no bucket.
    """
    now = now or datetime.now()
    completed = in_progress = pending = delayed = 0
    for t in tasks:
        if t.status == Status.COMPLETED:
            completed += 1
        elif t.status == Status.IN_PROGRESS:
            in_progress += 1
        elif t.status == Status.PENDING:
            pending += 1
        if is_delayed(t, now):
            delayed += 1
    return StatusCounts(completed, in_progress, pending, delayed)


def compute_delivery_stats(tasks: Iterable[Task]) -> DeliveryStats:
    on_time = late = 0
    for t in tasks:
        if is_on_time(t):
            on_time += 1
        elif is_late_closed(t):
            late += 1
    return DeliveryStats(on_time, late, percent(on_time, on_time + late))


def compute_planning_mix(tasks: Iterable[Task]) -> PlanningMix:
    tasks = list(tasks)
    unplanned = sum(1 for t in tasks if t.is_unplanned)
    total = len(tasks)
    return PlanningMix(total - unplanned, unplanned, percent(unplanned, total))


def compute_department_distribution(tasks: Iterable[Task],
                                    departments: Sequence[Department]) -> List[DepartmentShare]:
    counts = {}
    for t in tasks:
        if t.department_id:
            counts[t.department_id] = counts.get(t.department_id, 0) + 1
    return [
        DepartmentShare(d, counts[d.id])
        for d in departments
        if counts.get(d.id, 0) > 0
    ]


def compute_workload(tasks: Iterable[Task], members: Sequence[TeamMember]) -> List[MemberWorkload]:
    """Open hours per member; Completed and Rejected tasks do not count."""
    hours = {}
    for t in tasks:
        if t.assigned_to and t.status in OPEN_STATUSES:
            hours[t.assigned_to] = hours.get(t.assigned_to, 0.0) + float(t.estimated_hours or 0)
    return [MemberWorkload(m, hours.get(m.id, 0.0)) for m in members]


@dataclass(frozen=True)
class DashboardSummary:
    total: int
    status: StatusCounts
    delivery: DeliveryStats
    planning: PlanningMix
    departments: List[DepartmentShare]
    workload: List[MemberWorkload]


def summarize(snapshot: Snapshot, now: Optional[datetime] = None) -> DashboardSummary:
    """All dashboard KPIs for one snapshot, recomputed from scratch."""
    now = now or datetime.now()
    tasks = snapshot.tasks
    return DashboardSummary(
        total=len(tasks),
        status=compute_status_counts(tasks, now),
        delivery=compute_delivery_stats(tasks),
        planning=compute_planning_mix(tasks),
        departments=compute_department_distribution(tasks, snapshot.departments),
        workload=compute_workload(tasks, snapshot.members),
    )

# models/task.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping, Optional


def _key(raw) -> str:
    return "".join(ch for ch in str(raw).lower() if ch.isalnum())


class Status(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    REJECTED = "Rejected"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "Status":
        """Lenient lookup: 'in-progress', 'InProgress', 'in progress' all match."""
        if isinstance(raw, cls):
            return raw
        if not raw:
            return cls.PENDING
        mapping = {
            "pending": cls.PENDING, "todo": cls.PENDING,
            "inprogress": cls.IN_PROGRESS,
            "completed": cls.COMPLETED, "done": cls.COMPLETED,
            "rejected": cls.REJECTED,
        }
        return mapping.get(_key(raw), cls.PENDING)


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "Priority":
        if isinstance(raw, cls):
            return raw
        for p in cls:
            if raw and _key(raw) == _key(p.value):
                return p
        return cls.MEDIUM


# Statuses that still count against a member's workload.
OPEN_STATUSES = (Status.PENDING, Status.IN_PROGRESS)


@dataclass(frozen=True)
class Task:
    id: str
    project_id: str
    title: str
    assigned_to: Optional[str]
    created_by: Optional[str]
    priority: Priority = Priority.MEDIUM
    status: Status = Status.PENDING
    estimated_hours: float = 0.0
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    completed_date: Optional[date] = None
    description: Optional[str] = None
    department_id: Optional[str] = None
    image_url: Optional[str] = None
    custom_fields: Mapping[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_completed(self) -> bool:
        return self.status == Status.COMPLETED

    @property
    def is_unplanned(self) -> bool:
        return self.priority == Priority.URGENT

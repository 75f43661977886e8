# models/snapshot.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .department import Department
from .task import Task
from .team_member import TeamMember


@dataclass(frozen=True)
class Snapshot:
    """Read-only tasks/members/departments as of one aggregation run."""

    tasks: Tuple[Task, ...] = ()
    members: Tuple[TeamMember, ...] = ()
    departments: Tuple[Department, ...] = ()

    @classmethod
    def of(cls, tasks: Iterable[Task] = (), members: Iterable[TeamMember] = (),
           departments: Iterable[Department] = ()) -> "Snapshot":
        return cls(tuple(tasks), tuple(members), tuple(departments))

    @property
    def is_empty(self) -> bool:
        return not (self.tasks or self.members or self.departments)

    def member(self, member_id: Optional[str]) -> Optional[TeamMember]:
        if not member_id:
            return None
        return next((m for m in self.members if m.id == member_id), None)

    def department(self, department_id: Optional[str]) -> Optional[Department]:
        if not department_id:
            return None
        return next((d for d in self.departments if d.id == department_id), None)

# models/department.py
from __future__ import annotations

from dataclasses import dataclass

# Palette offered by the department form; color is display-only.
DEPARTMENT_COLORS = {
    "Blue": "#3B82F6",
    "Green": "#10B981",
    "Orange": "#F59E0B",
    "Red": "#EF4444",
    "Purple": "#8B5CF6",
    "Pink": "#EC4899",
    "Slate": "#64748B",
}


@dataclass(frozen=True)
class Department:
    id: str
    name: str
    color: str = DEPARTMENT_COLORS["Blue"]

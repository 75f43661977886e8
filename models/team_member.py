# models/team_member.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote


def default_avatar(name: str) -> str:
    """Initials avatar used when a member is added without a picture."""
    return f"https://ui-avatars.com/api/?name={quote(name or '?')}&background=random"


@dataclass(frozen=True)
class TeamMember:
    id: str
    name: str
    email: str
    role: str
    avatar: Optional[str] = None

    @property
    def first_name(self) -> str:
        return (self.name or "").split(" ")[0]

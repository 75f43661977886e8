# models/__init__.py
from .task import Priority, Status, Task
from .team_member import TeamMember
from .department import Department
from .snapshot import Snapshot

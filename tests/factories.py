# tests/factories.py
from datetime import date, datetime

from models import Priority, Status, Task

NOW = datetime(2024, 6, 15, 12, 0, 0)
TODAY = NOW.date()
YESTERDAY = date(2024, 6, 14)
TOMORROW = date(2024, 6, 16)


def make_task(id="t1", **kw) -> Task:
    defaults = dict(
        project_id="P-100",
        title=f"Task {id}",
        assigned_to=None,
        created_by="1",
        priority=Priority.MEDIUM,
        status=Status.PENDING,
        estimated_hours=0.0,
        start_date=date(2024, 6, 1),
    )
    defaults.update(kw)
    return Task(id=id, **defaults)

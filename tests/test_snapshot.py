# tests/test_snapshot.py
from types import SimpleNamespace

from models import Snapshot, Status
from utils.snapshot import NO_DEPARTMENT, TASK_COLUMNS, UNASSIGNED, load_snapshot, tasks_frame

from .factories import YESTERDAY, make_task


def test_load_snapshot_from_provider(members, departments):
    calls = []

    def _lister(items, name):
        def fn(owner_id):
            calls.append((name, owner_id))
            return list(items)
        return fn

    tasks = [make_task("a"), make_task("b")]
    provider = SimpleNamespace(
        list_tasks=_lister(tasks, "tasks"),
        list_members=_lister(members, "members"),
        list_departments=_lister(departments, "departments"),
    )
    snap = load_snapshot(7, provider)
    assert snap.tasks == tuple(tasks)
    assert snap.members == tuple(members)
    assert snap.departments == tuple(departments)
    assert calls == [("tasks", 7), ("members", 7), ("departments", 7)]


def test_load_snapshot_from_database(database, owner):
    m = database.create_member(owner, "Ada", "ada@example.com", "Engineer")
    database.create_task(owner, "One", assigned_to=m.id)
    snap = load_snapshot(owner, database)
    assert [t.title for t in snap.tasks] == ["One"]
    assert snap.member(snap.tasks[0].assigned_to) == m


def test_snapshot_lookups_tolerate_dangling_keys(members, departments):
    snap = Snapshot.of([], members, departments)
    assert snap.member("m2").name == "Grace Hopper"
    assert snap.member("ghost") is None
    assert snap.member(None) is None
    assert snap.department("d1").name == "Platform"
    assert snap.department("gone") is None
    assert not snap.is_empty
    assert Snapshot().is_empty


def test_tasks_frame_resolves_names(now, members, departments):
    tasks = [
        make_task("a", assigned_to="m1", department_id="d2", end_date=YESTERDAY),
        make_task("b", assigned_to="ghost", department_id="gone", status=Status.COMPLETED,
                  completed_date=YESTERDAY, end_date=YESTERDAY),
    ]
    snap = Snapshot.of(tasks, members, departments)
    df = tasks_frame(tasks, snap, now)
    assert list(df.columns) == TASK_COLUMNS
    assert df["assignee"].tolist() == ["Ada Lovelace", UNASSIGNED]
    assert df["department"].tolist() == ["Mobile", NO_DEPARTMENT]
    assert df["delayed"].tolist() == [True, False]
    assert df["status"].tolist() == ["Pending", "Completed"]


def test_tasks_frame_empty(now):
    df = tasks_frame([], Snapshot(), now)
    assert df.empty
    assert list(df.columns) == TASK_COLUMNS

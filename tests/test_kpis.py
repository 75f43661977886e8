# tests/test_kpis.py
from datetime import date, datetime

from models import Priority, Snapshot, Status
from utils.kpis import (
    WORKLOAD_CAPACITY_HOURS,
    compute_delivery_stats,
    compute_department_distribution,
    compute_planning_mix,
    compute_status_counts,
    compute_workload,
    is_delayed,
    percent,
    summarize,
)

from .factories import TODAY, TOMORROW, YESTERDAY, make_task


def test_percent_rounds_half_up():
    assert percent(1, 8) == 13      # 12.5
    assert percent(1, 3) == 33
    assert percent(2, 3) == 67
    assert percent(5, 200) == 3     # 2.5
    assert percent(0, 0) == 0
    assert percent(3, 3) == 100


def test_delayed_pending_task_counts_twice(now):
    tasks = [make_task("a", status=Status.PENDING, end_date=YESTERDAY)]
    counts = compute_status_counts(tasks, now)
    assert counts.pending == 1
    assert counts.delayed == 1


def test_delayed_predicate(now):
    assert is_delayed(make_task(status=Status.IN_PROGRESS, end_date=YESTERDAY), now)
    assert not is_delayed(make_task(status=Status.IN_PROGRESS, end_date=TOMORROW), now)
    assert not is_delayed(make_task(status=Status.IN_PROGRESS, end_date=None), now)
    assert not is_delayed(make_task(status=Status.COMPLETED, end_date=YESTERDAY,
                                    completed_date=YESTERDAY), now)
    # Rejected tasks past their deadline still count as delayed.
    assert is_delayed(make_task(status=Status.REJECTED, end_date=YESTERDAY), now)


def test_deadline_today_is_delayed_once_the_day_started(now):
    assert is_delayed(make_task(end_date=TODAY), now)
    assert not is_delayed(make_task(end_date=TODAY), datetime.combine(TODAY, datetime.min.time()))


def test_status_buckets_exclude_rejected(now):
    tasks = [
        make_task("a", status=Status.PENDING),
        make_task("b", status=Status.IN_PROGRESS),
        make_task("c", status=Status.COMPLETED, completed_date=YESTERDAY),
        make_task("d", status=Status.REJECTED),
    ]
    counts = compute_status_counts(tasks, now)
    assert (counts.completed, counts.in_progress, counts.pending) == (1, 1, 1)
    assert counts.completed + counts.in_progress + counts.pending < len(tasks)

    without_rejected = tasks[:3]
    counts = compute_status_counts(without_rejected, now)
    assert counts.completed + counts.in_progress + counts.pending == len(without_rejected)


def test_mixed_example(now):
    tasks = [
        make_task("a", status=Status.PENDING, end_date=YESTERDAY),
        make_task("b", status=Status.COMPLETED, end_date=YESTERDAY, completed_date=YESTERDAY),
        make_task("c", status=Status.COMPLETED, end_date=YESTERDAY, completed_date=TODAY),
    ]
    assert compute_status_counts(tasks, now).delayed == 1
    delivery = compute_delivery_stats(tasks)
    assert delivery.on_time_count == 1
    assert delivery.late_count == 1
    assert delivery.on_time_percentage == 50


def test_completed_without_deadline_is_on_time():
    tasks = [make_task(status=Status.COMPLETED, end_date=None, completed_date=YESTERDAY)]
    delivery = compute_delivery_stats(tasks)
    assert (delivery.on_time_count, delivery.late_count, delivery.on_time_percentage) == (1, 0, 100)


def test_completed_without_completed_date_is_neither():
    tasks = [make_task(status=Status.COMPLETED, end_date=YESTERDAY, completed_date=None)]
    delivery = compute_delivery_stats(tasks)
    assert (delivery.on_time_count, delivery.late_count, delivery.on_time_percentage) == (0, 0, 0)


def test_on_time_percentage_zero_when_nothing_completed():
    tasks = [make_task("a"), make_task("b", status=Status.IN_PROGRESS)]
    assert compute_delivery_stats(tasks).on_time_percentage == 0


def test_planning_mix_and_alert():
    tasks = [make_task(str(i)) for i in range(4)] + [make_task("u", priority=Priority.URGENT)]
    mix = compute_planning_mix(tasks)
    assert (mix.planned_count, mix.unplanned_count, mix.unplanned_percentage) == (4, 1, 20)
    assert not mix.alert

    tasks.append(make_task("u2", priority=Priority.URGENT))
    mix = compute_planning_mix(tasks)
    assert mix.unplanned_percentage == 33
    assert mix.alert


def test_planning_mix_accepts_generators():
    mix = compute_planning_mix(make_task(str(i), priority=Priority.URGENT) for i in range(2))
    assert mix.unplanned_count == 2
    assert mix.unplanned_percentage == 100


def test_department_distribution_keeps_input_order_and_skips_empty(departments):
    tasks = [
        make_task("a", department_id="d3"),
        make_task("b", department_id="d1"),
        make_task("c", department_id="d3"),
        make_task("d", department_id="gone"),
        make_task("e", department_id=None),
    ]
    shares = compute_department_distribution(tasks, departments)
    assert [(s.department.id, s.count) for s in shares] == [("d1", 1), ("d3", 2)]
    assert all(s.count > 0 for s in shares)


def test_workload_counts_only_open_tasks(members):
    tasks = [
        make_task("a", assigned_to="m1", estimated_hours=5, status=Status.PENDING),
        make_task("b", assigned_to="m1", estimated_hours=3.5, status=Status.IN_PROGRESS),
        make_task("c", assigned_to="m1", estimated_hours=8, status=Status.REJECTED),
        make_task("d", assigned_to="ghost", estimated_hours=10),
    ]
    before = compute_workload(tasks, members)
    assert [(w.member.id, w.hours) for w in before] == [("m1", 8.5), ("m2", 0.0)]
    assert all(w.capacity == WORKLOAD_CAPACITY_HOURS == 40 for w in before)

    tasks.append(make_task("e", assigned_to="m1", estimated_hours=20,
                           status=Status.COMPLETED, completed_date=date(2024, 6, 2)))
    after = compute_workload(tasks, members)
    assert after[0].hours == before[0].hours


def test_workload_may_exceed_capacity(members):
    tasks = [make_task("a", assigned_to="m2", estimated_hours=55)]
    load = compute_workload(tasks, members)
    assert load[1].hours == 55
    assert load[1].capacity == 40


def test_empty_snapshot(now, members, departments):
    summary = summarize(Snapshot.of([], members, departments), now)
    assert summary.total == 0
    assert summary.status.completed == summary.status.in_progress == 0
    assert summary.status.pending == summary.status.delayed == 0
    assert summary.delivery.on_time_percentage == 0
    assert summary.planning.unplanned_percentage == 0
    assert summary.departments == []
    assert [(w.member.id, w.hours) for w in summary.workload] == [("m1", 0.0), ("m2", 0.0)]


def test_summarize_does_not_touch_input(now, members, departments):
    tasks = (make_task("a", assigned_to="m1", department_id="d1", estimated_hours=2),)
    snap = Snapshot.of(tasks, members, departments)
    first = summarize(snap, now)
    second = summarize(snap, now)
    assert first == second
    assert snap.tasks == tasks

# ui/tasks_panel.py
from datetime import date

import streamlit as st

import db
from models import Priority, Snapshot, Status
from ui.common import force_rerun, notify
from utils.filters import TaskCriteria, filter_tasks
from utils.forms import changed_fields
from utils.quick_filter import QuickFilterSlot, consume
from utils.snapshot import UNASSIGNED, NO_DEPARTMENT, tasks_frame

ALL = "All"
STATUS_OPTIONS = [s.value for s in Status]
PRIORITY_OPTIONS = [p.value for p in Priority]


def _sync_filter_widgets(criteria: TaskCriteria):
    """Write criteria into the filter widgets' state before they are drawn."""
    st.session_state["f_status"] = criteria.status.value if criteria.status else ALL
    st.session_state["f_priority"] = criteria.priority.value if criteria.priority else ALL
    st.session_state["f_delayed"] = criteria.delayed
    st.session_state["f_search"] = criteria.search
    st.session_state["f_from"] = criteria.date_from
    st.session_state["f_to"] = criteria.date_to


def _criteria_from_widgets() -> TaskCriteria:
    status = st.session_state.get("f_status", ALL)
    priority = st.session_state.get("f_priority", ALL)
    return TaskCriteria(
        status=None if status == ALL else Status(status),
        priority=None if priority == ALL else Priority(priority),
        delayed=bool(st.session_state.get("f_delayed", False)),
        search=st.session_state.get("f_search", "") or "",
        date_from=st.session_state.get("f_from"),
        date_to=st.session_state.get("f_to"),
    )


def _filter_bar():
    for key, value in (("f_search", ""), ("f_status", ALL), ("f_priority", ALL),
                       ("f_delayed", False), ("f_from", None), ("f_to", None)):
        st.session_state.setdefault(key, value)
    c1, c2, c3, c4, c5 = st.columns([3, 2, 2, 2, 2])
    c1.text_input("Search", placeholder="Title or project number", key="f_search")
    c2.selectbox("Status", [ALL] + STATUS_OPTIONS, key="f_status")
    c3.selectbox("Priority", [ALL] + PRIORITY_OPTIONS, key="f_priority")
    c4.date_input("Start from", key="f_from")
    c5.date_input("Start to", key="f_to")
    st.checkbox("Only delayed", key="f_delayed")
    st.button("Clear filters", on_click=_sync_filter_widgets, args=(TaskCriteria(),))


def _task_form(snapshot: Snapshot, owner_id: int, task=None):
    members = {m.id: m.name for m in snapshot.members}
    depts = {d.id: d.name for d in snapshot.departments}
    member_ids = [None] + list(members)
    dept_ids = [None] + list(depts)
    form_key = f"task_form_{task.id}" if task else "task_form_new"

    # What the widgets start from; dangling ids and a missing start date show as fallbacks.
    shown = dict(
        project_id=task.project_id if task else "",
        title=task.title if task else "",
        description=(task.description or "") if task else "",
        assigned_to=task.assigned_to if task and task.assigned_to in members else None,
        department_id=task.department_id if task and task.department_id in depts else None,
        priority=task.priority.value if task else Priority.MEDIUM.value,
        estimated_hours=float(task.estimated_hours) if task else 0.0,
        start_date=(task.start_date if task and task.start_date else date.today()),
        end_date=task.end_date if task else None,
        status=task.status.value if task else None,
    )

    with st.form(form_key, clear_on_submit=task is None):
        c1, c2 = st.columns(2)
        project_id = c1.text_input("Project number", value=shown["project_id"])
        title = c2.text_input("Title", value=shown["title"])
        description = st.text_area("Description", value=shown["description"])
        c1, c2, c3 = st.columns(3)
        assigned_to = c1.selectbox(
            "Assigned to", member_ids, index=member_ids.index(shown["assigned_to"]),
            format_func=lambda mid: members.get(mid, UNASSIGNED),
        )
        department_id = c2.selectbox(
            "Department", dept_ids, index=dept_ids.index(shown["department_id"]),
            format_func=lambda did: depts.get(did, NO_DEPARTMENT),
        )
        priority = c3.selectbox("Priority", PRIORITY_OPTIONS,
                                index=PRIORITY_OPTIONS.index(shown["priority"]))
        c1, c2, c3 = st.columns(3)
        hours = c1.number_input("Estimated hours", min_value=0.0, step=0.5,
                                value=shown["estimated_hours"])
        start = c2.date_input("Start", value=shown["start_date"])
        end = c3.date_input("End (optional)", value=shown["end_date"])
        status = None
        if task:
            status = st.selectbox("Status", STATUS_OPTIONS, index=STATUS_OPTIONS.index(shown["status"]))
        image = st.file_uploader("Image (optional)", type=["png", "jpg", "jpeg", "gif", "webp"])
        submitted = st.form_submit_button("Save task" if task else "Create task")

    if not submitted:
        return
    if not title.strip():
        st.warning("Please enter a title.")
        return
    if end and start and end < start:
        st.warning("End date must be after start date.")
        return

    fields = dict(project_id=project_id, description=description, assigned_to=assigned_to,
                  department_id=department_id, priority=priority, estimated_hours=hours,
                  start_date=start, end_date=end)
    try:
        if task:
            changes = changed_fields(shown, dict(fields, title=title, status=status))
            if image is not None:
                changes["image_url"] = db.save_task_image(owner_id, image.name, image.getvalue())
            if not changes:
                st.info("Nothing to save.")
                return
            updated = db.update_task(task.id, **changes)
            st.session_state.pop(f"quick_status_{task.id}", None)
            notify("Task completed!" if updated.is_completed and not task.is_completed
                   else f"Task updated: {updated.title}")
        else:
            if image is not None:
                fields["image_url"] = db.save_task_image(owner_id, image.name, image.getvalue())
            created = db.create_task(owner_id, title, **fields)
            member = snapshot.member(created.assigned_to)
            if member:
                notify(f"New task \"{created.title}\" assigned to {member.name}", icon="📧")
            else:
                notify(f"Task created: {created.title}")
    except db.DataProviderError as e:
        st.error(f"Could not save the task: {e}")
        return
    except ValueError as e:
        st.warning(str(e))
        return
    force_rerun()


def _quick_status(task):
    new = st.session_state[f"quick_status_{task.id}"]
    if new == task.status.value:
        return
    try:
        updated = db.update_task(task.id, status=new)
    except db.DataProviderError as e:
        st.error(f"Could not change the status: {e}")
        return
    notify("Task completed!" if updated.is_completed else f"{updated.title}: {updated.status.value}")


def render_tasks_panel(snapshot: Snapshot, owner_id: int, slot: QuickFilterSlot):
    st.subheader("Tasks")

    # A KPI card may have left a quick filter behind; it applies once.
    current = _criteria_from_widgets()
    applied = consume(slot, current)
    if applied is not current:
        _sync_filter_widgets(applied)

    with st.expander("New task", expanded=not snapshot.tasks):
        _task_form(snapshot, owner_id)

    _filter_bar()
    criteria = _criteria_from_widgets()
    tasks = filter_tasks(snapshot.tasks, criteria)
    st.caption(f"{len(tasks)} of {len(snapshot.tasks)} tasks")

    if not tasks:
        st.info("No tasks yet. Create one above." if criteria.is_empty
                else "No tasks match the current filters.")
        return

    df = tasks_frame(tasks, snapshot)
    st.data_editor(
        df.drop(columns=["id"]).rename(columns={
            "project_id": "Project", "title": "Title", "assignee": "Assignee",
            "department": "Department", "priority": "Priority", "status": "Status",
            "estimated_hours": "Hours", "start_date": "Start", "end_date": "End",
            "completed_date": "Completed", "delayed": "Delayed",
        }),
        use_container_width=True, hide_index=True, disabled=True,
    )

    st.markdown("---")
    by_id = {t.id: t for t in tasks}
    c1, c2 = st.columns([3, 1])
    chosen = c1.selectbox("Manage task", list(by_id),
                          format_func=lambda tid: f"{by_id[tid].project_id} · {by_id[tid].title}")
    task = by_id[chosen]
    c2.selectbox("Status", STATUS_OPTIONS, index=STATUS_OPTIONS.index(task.status.value),
                 key=f"quick_status_{task.id}", on_change=_quick_status, args=(task,))
    if task.image_url:
        st.image(task.image_url, width=240)
    _task_form(snapshot, owner_id, task)
    if st.button("Delete task", key=f"del_{task.id}"):
        try:
            db.delete_task(task.id)
        except db.DataProviderError as e:
            st.error(f"Could not delete the task: {e}")
        else:
            notify("Task deleted", icon="🗑️")
            force_rerun()

# ui/departments_panel.py
import streamlit as st

import db
from models import Snapshot
from models.department import DEPARTMENT_COLORS
from ui.common import force_rerun, notify
from utils.kpis import compute_department_distribution


def render_departments_panel(snapshot: Snapshot, owner_id: int):
    st.subheader("Departments")

    with st.form("new_department", clear_on_submit=True):
        c1, c2 = st.columns([3, 1])
        name = c1.text_input("Department name")
        color_name = c2.selectbox("Color", list(DEPARTMENT_COLORS))
        submitted = st.form_submit_button("Create department")
    if submitted:
        if not name:
            st.warning("Please enter a department name.")
        else:
            try:
                dept = db.create_department(owner_id, name, DEPARTMENT_COLORS[color_name])
            except db.DataProviderError as e:
                st.error(f"Could not create department: {e}")
            else:
                notify(f"Department created: {dept.name}", icon="🏢")
                force_rerun()

    if not snapshot.departments:
        st.info("No departments yet.")
        return

    counts = {s.department.id: s.count
              for s in compute_department_distribution(snapshot.tasks, snapshot.departments)}
    for d in snapshot.departments:
        c1, c2, c3 = st.columns([4, 1, 1])
        c1.markdown(
            f"<span style='display:inline-block;width:12px;height:12px;border-radius:50%;"
            f"background:{d.color};margin-right:8px'></span><b>{d.name}</b>",
            unsafe_allow_html=True,
        )
        c2.caption(f"{counts.get(d.id, 0)} tasks")
        if c3.button("Delete", key=f"del_dept_{d.id}"):
            try:
                db.delete_department(d.id)
            except db.DataProviderError as e:
                st.error(f"Could not delete department: {e}")
            else:
                notify("Department removed", icon="🗑️")
                force_rerun()

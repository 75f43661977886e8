# ui/members_panel.py
import pandas as pd
import streamlit as st

import db
from models import Snapshot
from ui.common import force_rerun, notify
from utils.kpis import compute_workload


def render_members_panel(snapshot: Snapshot, owner_id: int):
    st.subheader("Team")
    st.caption("Manage team members and their roles")

    with st.form("new_member", clear_on_submit=True):
        c1, c2, c3 = st.columns(3)
        name = c1.text_input("Name")
        email = c2.text_input("Email")
        role = c3.text_input("Role", placeholder="e.g. Backend engineer")
        submitted = st.form_submit_button("Add member")
    if submitted:
        if not name or not email or not role:
            st.warning("Name, email and role are required.")
        else:
            try:
                member = db.create_member(owner_id, name, email, role)
            except db.DataProviderError as e:
                st.error(f"Could not add member: {e}")
            else:
                notify(f"Member added: {member.name}", icon="👥")
                force_rerun()

    if not snapshot.members:
        st.info("No members yet.")
        return

    hours = {w.member.id: w.hours for w in compute_workload(snapshot.tasks, snapshot.members)}
    mdf = pd.DataFrame([
        {"Avatar": m.avatar, "Name": m.name, "Email": m.email, "Role": m.role,
         "Open hours": hours.get(m.id, 0.0)}
        for m in snapshot.members
    ])
    st.data_editor(
        mdf, hide_index=True, disabled=True, use_container_width=True,
        column_config={"Avatar": st.column_config.ImageColumn("Avatar")},
    )

    by_id = {m.id: m for m in snapshot.members}
    c1, c2 = st.columns([3, 1])
    chosen = c1.selectbox("Remove member", list(by_id), format_func=lambda mid: by_id[mid].name)
    confirm = c2.checkbox("Confirm", key="confirm_member_delete")
    if st.button("Remove", disabled=not confirm):
        try:
            db.delete_member(chosen)
        except db.DataProviderError as e:
            st.error(f"Could not remove member: {e}")
        else:
            notify("Member removed", icon="🗑️")
            force_rerun()

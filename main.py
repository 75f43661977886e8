# main.py

#============================================================#
#                         Pulseboard                         #
#============================================================#
# Version     : V1.0.0                                       #
#------------------------------------------------------------#
# Purpose     : Team task dashboard: tasks, members,         #
#               departments and KPIs (SQLite/Postgres        #
#               powered, Supabase-compatible)                #
#============================================================#

import logging

import streamlit as st

import db
from config import get_setting
from logging_setup import setup_logging
from models import Snapshot
from ui.common import force_rerun
from ui.dashboard_panel import render_dashboard
from ui.departments_panel import render_departments_panel
from ui.members_panel import render_members_panel
from ui.tasks_panel import render_tasks_panel
from utils.quick_filter import QuickFilterSlot
from utils.snapshot import load_snapshot

setup_logging(get_setting("PULSEBOARD_LOG_LEVEL"))
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="Pulseboard - Team Dashboard",
    page_icon="⚡",
    layout="wide",
    initial_sidebar_state="expanded",
)

VIEWS = ["Dashboard", "Tasks", "Team", "Departments"]


@st.cache_resource
def _init_db_once():
    db.init_db()
    return True


_init_db_once()


# ======================  AUTH  ======================
def full_screen_login():
    st.markdown("""
    <style>
      [data-testid="stSidebar"], [data-testid="baseButton-headerNoPadding"] { display:none!important; }
      .main > div { padding-top: 6vh !important; }
    </style>
    """, unsafe_allow_html=True)
    _, col, _ = st.columns([1, 2.2, 1])
    with col:
        st.markdown("<h2 style='text-align:center;'>⚡ Pulseboard</h2>", unsafe_allow_html=True)
        with st.form("login_form", clear_on_submit=False):
            email = st.text_input("Your email", placeholder="you@example.com")
            name = st.text_input("Your name (optional)")
            submitted = st.form_submit_button("Sign in / Continue", use_container_width=True)
        if submitted:
            if not email:
                st.warning("Please enter your email.")
                return
            try:
                st.session_state["user"] = db.login(email, name)
            except db.DataProviderError as e:
                st.error(f"Could not sign in: {e}")
                return
            logger.info("Signed in: %s", st.session_state["user"]["email"])
            force_rerun()


user = st.session_state.get("user")
if not user:
    full_screen_login()
    st.stop()

with st.sidebar:
    st.markdown("### ⚡ Pulseboard")
    st.caption(f"Signed in as **{user['email']}**")
    st.radio("Go to", VIEWS, key="view")
    st.markdown("---")
    if st.button("Refresh data", use_container_width=True):
        force_rerun()
    if st.button("Sign out", use_container_width=True):
        st.session_state.clear()
        force_rerun()

# Recomputed from a fresh snapshot on every rerun; failures fall back to empty.
try:
    snapshot = load_snapshot(user["id"], db)
except db.DataProviderError as e:
    st.error(f"Error loading data: {e}")
    snapshot = Snapshot()

slot = QuickFilterSlot(st.session_state)
view = st.session_state.get("view", VIEWS[0])

if view == "Dashboard":
    if snapshot.is_empty:
        st.info("Nothing here yet. Add your team and some tasks to see the dashboard fill up.")
    render_dashboard(snapshot, slot)
elif view == "Tasks":
    render_tasks_panel(snapshot, user["id"], slot)
elif view == "Team":
    render_members_panel(snapshot, user["id"])
else:
    render_departments_panel(snapshot, user["id"])

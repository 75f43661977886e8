# ui/common.py
import logging

import streamlit as st

logger = logging.getLogger(__name__)


def force_rerun():
    fn = getattr(st, "rerun", None) or getattr(st, "experimental_rerun", None)
    if fn:
        fn()


def notify(message: str, icon: str = "✅"):
    """Short-lived message for the user; also kept in the log."""
    logger.info(message)
    toast = getattr(st, "toast", None)
    if toast:
        toast(message, icon=icon)
    else:
        st.success(message)


def go_to(view: str):
    st.session_state["view"] = view

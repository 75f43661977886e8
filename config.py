# config.py
"""Settings lookup: Streamlit secrets first, then environment, then defaults."""
from __future__ import annotations

import os
from typing import Optional

DEFAULTS = {
    "DATABASE_URL": "sqlite:///pulseboard.db",
    "PULSEBOARD_LOG_LEVEL": "INFO",
    "PULSEBOARD_UPLOAD_DIR": "uploads",
}


def _secrets() -> dict:
    try:
        import streamlit as st
        return dict(st.secrets)
    except Exception:
        # no secrets.toml outside `streamlit run`
        return {}


def get_setting(name: str, default: Optional[str] = None) -> Optional[str]:
    value = _secrets().get(name) or os.getenv(name)
    if value:
        return str(value)
    return default if default is not None else DEFAULTS.get(name)

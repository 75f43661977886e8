# logging_setup.py
from __future__ import annotations

import logging
import sys

_NOISY = ("sqlalchemy", "urllib3", "watchdog", "PIL")


def setup_logging(level: str | int = "INFO") -> None:
    """
    Configure a single stderr handler for the app.

    Streamlit re-executes the script on every interaction, so existing
    handlers are dropped first to avoid duplicated lines.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    # Third-party chatter only from WARNING up.
    for name in _NOISY:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.captureWarnings(True)

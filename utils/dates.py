# utils/dates.py
from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from dateutil import parser


def parse_date(x) -> Optional[date]:
    """Best-effort date parsing. Missing or unparsable values become None."""
    if not x:
        return None
    if isinstance(x, datetime):
        return x.date()
    if isinstance(x, date):
        return x
    try:
        return parser.parse(str(x)).date()
    except (ValueError, OverflowError):
        return None


def parse_datetime(x) -> Optional[datetime]:
    if not x:
        return None
    if isinstance(x, datetime):
        return x
    if isinstance(x, date):
        return datetime.combine(x, time.min)
    try:
        return parser.parse(str(x))
    except (ValueError, OverflowError):
        return None


def start_of(d: date) -> datetime:
    """A date-only deadline as the instant its day begins."""
    return datetime.combine(d, time.min)

# utils/quick_filter.py
"""
One-shot filter handed from a dashboard KPI card to the task list.

A card click puts a token; the task list takes it exactly once and turns
it into list criteria. Anything rendering later sees an empty slot.
"""
from __future__ import annotations

import logging
from typing import MutableMapping, Optional

from models import Priority, Status
from utils.filters import TaskCriteria

logger = logging.getLogger(__name__)

DELAYED = "Delayed"
URGENT = Priority.URGENT.value
STATUS_TOKENS = tuple(s.value for s in Status)
TOKENS = STATUS_TOKENS + (URGENT, DELAYED)

SLOT_KEY = "quick_filter"


class QuickFilterSlot:
    """Single optional token kept in a mutable mapping (e.g. st.session_state)."""

    def __init__(self, state: MutableMapping, key: str = SLOT_KEY):
        self._state = state
        self._key = key

    @property
    def pending(self) -> Optional[str]:
        return self._state.get(self._key)

    def put(self, token: str) -> None:
        token = getattr(token, "value", token)
        if token not in TOKENS:
            raise ValueError(f"Unknown quick filter: {token!r}")
        logger.debug("Quick filter set: %s", token)
        self._state[self._key] = token

    def take(self) -> Optional[str]:
        """Return the pending token and clear the slot."""
        return self._state.pop(self._key, None)


def apply_quick_filter(token: Optional[str], criteria: TaskCriteria) -> TaskCriteria:
    """
    Turn a taken token into list criteria.

    The quick filter is exclusive: every previous filter is reset first.
    ``None`` (nothing pending) leaves ``criteria`` untouched.
    """
    if token is None:
        return criteria
    if token in STATUS_TOKENS:
        return TaskCriteria(status=Status(token))
    if token == URGENT:
        return TaskCriteria(priority=Priority.URGENT)
    if token == DELAYED:
        return TaskCriteria(delayed=True)
    logger.warning("Ignoring unknown quick filter %r", token)
    return criteria


def consume(slot: QuickFilterSlot, criteria: TaskCriteria) -> TaskCriteria:
    return apply_quick_filter(slot.take(), criteria)

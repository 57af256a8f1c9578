"""Planner assembly: load the snapshot, autosave on change, tick day boundaries."""

from __future__ import annotations

import logging
from datetime import date, datetime
from functools import partial
from pathlib import Path

from weekplan.dates import day_key
from weekplan.persistence import load_state, save_state
from weekplan.tasks import Clock, TaskStore
from weekplan.workspace import now_local, workspace_root

logger = logging.getLogger(__name__)


def autosave(store: TaskStore, root: Path | None = None) -> None:
    """Store listener that writes the snapshot. Failures leave memory untouched."""
    try:
        save_state(store.state, root)
    except Exception:
        logger.exception("Failed to save planner snapshot; continuing in memory.")


def open_planner(root: Path | None = None, clock: Clock | None = None) -> TaskStore:
    """Build a TaskStore from the workspace snapshot with autosave attached."""
    if root is None:
        root = workspace_root()
    if clock is None:
        clock = partial(now_local, root)
    store = TaskStore(load_state(root), clock=clock)
    store.subscribe(partial(autosave, root=root))
    return store


class DayTicker:
    """Runs the daily maintenance pass whenever the calendar day changes.

    Meant to be polled (e.g. once a minute); extra ticks within the same day
    do nothing, and the pass itself is idempotent, so missing the exact
    boundary is harmless.
    """

    def __init__(self, store: TaskStore) -> None:
        self._store = store
        self._last_day: str | None = None

    @property
    def last_day(self) -> str | None:
        return self._last_day

    def tick(self, now: date | datetime | None = None) -> bool:
        today = day_key(now if now is not None else self._store.now())
        if today == self._last_day:
            return False
        self._last_day = today
        run_daily_maintenance(self._store, today)
        return True


def run_daily_maintenance(store: TaskStore, today: date | datetime | str | None = None) -> list[str]:
    """Roll open tasks onto today, then expire a stale streak."""
    rolled = store.roll_incomplete_tasks(today)
    store.check_streak_expiry(today)
    logger.debug("Daily maintenance for %s done; %d rolled", today or "today", len(rolled))
    return rolled

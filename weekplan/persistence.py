"""Versioned snapshot persistence for the planner state.

The snapshot lives in one JSON file named after the storage key::

    {"state": {"tasks": [...], "streak": 3, "lastStreakDate": "2024-06-03"}, "version": 4}

Loading never fails: a missing, corrupt or differently-versioned snapshot
yields the initial empty state.
"""

from __future__ import annotations

import logging
from pathlib import Path

from weekplan.fileio import read_json, write_json_atomic
from weekplan.models import PlannerState
from weekplan.workspace import snapshot_path

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 4


def load_state(root: Path | None = None) -> PlannerState:
    """Load the persisted planner state, or the initial state if unusable."""
    path = snapshot_path(root)
    if not path.exists():
        logger.info("No snapshot at %s; starting empty.", path)
        return PlannerState()

    try:
        data = read_json(path)
    except (OSError, ValueError):
        logger.warning("Unreadable snapshot at %s; starting empty.", path, exc_info=True)
        return PlannerState()

    if not isinstance(data, dict) or not isinstance(data.get("state"), dict):
        logger.warning("Malformed snapshot at %s; starting empty.", path)
        return PlannerState()

    version = data.get("version")
    if version != SNAPSHOT_VERSION:
        logger.warning(
            "Snapshot version %r at %s does not match %s; starting empty.",
            version,
            path,
            SNAPSHOT_VERSION,
        )
        return PlannerState()

    try:
        state = PlannerState.from_dict(data["state"])
    except (TypeError, ValueError):
        logger.warning("Invalid snapshot contents at %s; starting empty.", path, exc_info=True)
        return PlannerState()

    logger.info("Loaded %d task(s), streak=%s from %s", len(state.tasks), state.streak.streak, path)
    return state


def save_state(state: PlannerState, root: Path | None = None) -> None:
    """Write the snapshot atomically. Raises on I/O failure."""
    write_json_atomic(snapshot_path(root), {"state": state.to_dict(), "version": SNAPSHOT_VERSION})

"""Workspace root, profile, timezone and clock helpers for weekplan."""

from __future__ import annotations

import logging
import os
from datetime import date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from weekplan.fileio import read_yaml
from weekplan.models import Profile

logger = logging.getLogger(__name__)

STORAGE_KEY = "tg-weekly-planner-storage"


def workspace_root() -> Path:
    """Get the workspace root directory (holds profile.yaml and the snapshot)."""
    return Path(
        os.environ.get("WEEKPLAN_ROOT", str(Path.home() / "weekplan"))
    ).expanduser().resolve()


def profile_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "profile.yaml"


def snapshot_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / f"{STORAGE_KEY}.json"


def load_profile(root: Path | None = None) -> Profile:
    """Load profile.yaml, falling back to defaults when missing or unreadable."""
    try:
        return Profile.from_dict(read_yaml(profile_path(root)))
    except Exception:
        logger.warning("Unreadable profile at %s; using defaults.", profile_path(root), exc_info=True)
        return Profile()


def get_user_timezone(root: Path | None = None) -> ZoneInfo:
    """Get user's timezone from profile.yaml, defaulting to UTC."""
    name = load_profile(root).timezone
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r in profile; using UTC.", name)
        return ZoneInfo("UTC")


def now_local(root: Path | None = None) -> datetime:
    """Get current datetime in user's timezone."""
    return datetime.now(get_user_timezone(root))


def today_local(root: Path | None = None) -> date:
    """Get today's calendar date in user's timezone."""
    return now_local(root).date()

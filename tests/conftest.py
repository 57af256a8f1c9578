"""Shared test fixtures for weekplan tests."""

from __future__ import annotations

import os
from datetime import datetime, timedelta
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest
import yaml

from weekplan.tasks import TaskStore

UTC = ZoneInfo("UTC")


class FixedClock:
    """Manually advanced clock for the store."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock() -> FixedClock:
    # Monday of the week used throughout the tests
    return FixedClock(datetime(2024, 6, 3, 9, 0, tzinfo=UTC))


@pytest.fixture
def store(clock: FixedClock) -> TaskStore:
    return TaskStore(clock=clock)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace with a profile."""
    root = tmp_path / "workspace"
    root.mkdir(parents=True)

    profile = {
        "timezone": "UTC",
        "log_level": "WARNING",
        "display_name": "Test user",
        "color_scheme": "dark",
    }
    (root / "profile.yaml").write_text(
        yaml.dump(profile, default_flow_style=False), encoding="utf-8"
    )

    os.environ["WEEKPLAN_ROOT"] = str(root)
    yield root
    if "WEEKPLAN_ROOT" in os.environ:
        del os.environ["WEEKPLAN_ROOT"]


def add_task(store: TaskStore, title: str, start: str, end: str | None = None, **extra):
    payload = {"title": title, "priority": "medium", "startDate": start, "endDate": end or start}
    payload.update(extra)
    return store.add(payload)

"""Tests for weekplan/planner.py — autosave and the day-boundary ticker."""

import json
from unittest.mock import patch

from conftest import FixedClock, add_task

from weekplan.planner import DayTicker, open_planner, run_daily_maintenance
from weekplan.workspace import snapshot_path


def test_open_planner_autosaves(workspace, clock):
    store = open_planner(workspace, clock=clock)
    task = add_task(store, "Saved", "2024-06-03")

    data = json.loads(snapshot_path(workspace).read_text(encoding="utf-8"))
    assert [t["id"] for t in data["state"]["tasks"]] == [task.id]

    reopened = open_planner(workspace, clock=clock)
    assert reopened.find_task(task.id).title == "Saved"


def test_autosave_failure_keeps_memory_state(workspace, clock):
    store = open_planner(workspace, clock=clock)
    with patch("weekplan.planner.save_state", side_effect=OSError("disk full")):
        task = add_task(store, "Kept", "2024-06-03")
    assert store.find_task(task.id) is task
    assert not snapshot_path(workspace).exists()


def test_open_planner_uses_profile_clock(workspace):
    store = open_planner(workspace)
    assert store.now().tzinfo is not None


def test_ticker_runs_once_per_day(store, clock):
    ticker = DayTicker(store)
    with patch("weekplan.planner.run_daily_maintenance") as maintenance:
        assert ticker.tick() is True
        clock.advance(minutes=1)
        assert ticker.tick() is False
        clock.advance(days=1)
        assert ticker.tick() is True
    assert maintenance.call_count == 2
    assert ticker.last_day == "2024-06-04"


def test_ticker_rolls_and_expires(store, clock: FixedClock):
    task = add_task(store, "Spans", "2024-06-03", "2024-06-06")
    store.streak_state.streak = 4
    store.streak_state.last_streak_date = "2024-06-02"

    ticker = DayTicker(store)
    ticker.tick()
    assert task.start_date == "2024-06-03"
    assert store.streak == 4

    clock.advance(days=2)
    ticker.tick()
    assert task.start_date == "2024-06-05"
    assert task.progress_start_date == "2024-06-03"
    assert store.streak == 0


def test_daily_maintenance_idempotent(store):
    add_task(store, "A", "2024-06-03", "2024-06-05")
    add_task(store, "B", "2024-06-04", "2024-06-04")
    first = run_daily_maintenance(store, "2024-06-04")
    snapshot = [(t.id, t.start_date, t.order) for t in store.tasks]
    second = run_daily_maintenance(store, "2024-06-04")
    assert len(first) == 1
    assert second == []
    assert [(t.id, t.start_date, t.order) for t in store.tasks] == snapshot

"""Tests for weekplan/progress.py — progress percentage, overdue, bands."""

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from weekplan.models import Task
from weekplan.progress import compute_progress, is_overdue, progress_band

UTC = ZoneInfo("UTC")


def _task(start="2024-06-03", end="2024-06-05", progress_start=None, completed=False) -> Task:
    return Task(
        id="t1",
        title="T1",
        start_date=start,
        end_date=end,
        progress_start_date=progress_start or start,
        completed=completed,
    )


def test_scenario_a_start_and_end():
    task = _task()
    assert compute_progress(task, datetime(2024, 6, 3, 0, 0, tzinfo=UTC)) == 0
    assert compute_progress(task, datetime(2024, 6, 5, 0, 0, tzinfo=UTC)) == 100


def test_progress_midpoint():
    task = _task()
    # 24h of 48h elapsed
    assert compute_progress(task, datetime(2024, 6, 4, 0, 0, tzinfo=UTC)) == 50
    # 12h of 48h
    assert compute_progress(task, datetime(2024, 6, 3, 12, 0, tzinfo=UTC)) == 25


def test_progress_rounds_half_up():
    task = _task()
    # 6h of 48h elapsed = 12.5%
    assert compute_progress(task, datetime(2024, 6, 3, 6, 0, tzinfo=UTC)) == 13


def test_progress_is_100_after_end():
    task = _task()
    assert compute_progress(task, datetime(2024, 6, 5, 23, 0, tzinfo=UTC)) == 100
    assert compute_progress(task, datetime(2024, 7, 1, tzinfo=UTC)) == 100


def test_progress_same_day_window_is_100():
    task = _task(start="2024-06-03", end="2024-06-03")
    assert compute_progress(task, datetime(2024, 6, 3, 0, 0, tzinfo=UTC)) == 100


def test_progress_before_start_clamps_to_zero():
    task = _task()
    assert compute_progress(task, datetime(2024, 6, 1, 12, 0, tzinfo=UTC)) == 0


def test_progress_uses_progress_start_date():
    task = _task(start="2024-06-04", end="2024-06-06", progress_start="2024-06-04")
    assert compute_progress(task, datetime(2024, 6, 4, 0, 0, tzinfo=UTC)) == 0
    rolled = _task(start="2024-06-04", end="2024-06-06", progress_start="2024-06-02")
    assert compute_progress(rolled, datetime(2024, 6, 4, 0, 0, tzinfo=UTC)) == 50


def test_progress_monotonic():
    task = _task(start="2024-06-03", end="2024-06-09")
    now = datetime(2024, 6, 3, 0, 0, tzinfo=UTC)
    values = []
    while now.date() <= date(2024, 6, 9):
        values.append(compute_progress(task, now))
        now += timedelta(hours=5)
    assert values == sorted(values)
    assert values[0] == 0
    assert values[-1] == 100


def test_progress_accepts_plain_date():
    task = _task()
    assert compute_progress(task, date(2024, 6, 4)) == 50


def test_progress_pure():
    task = _task()
    now = datetime(2024, 6, 4, 7, 30, tzinfo=UTC)
    assert compute_progress(task, now) == compute_progress(task, now)


def test_is_overdue():
    task = _task()
    assert is_overdue(task, datetime(2024, 6, 5, 23, 59, tzinfo=UTC)) is False
    assert is_overdue(task, datetime(2024, 6, 6, 0, 0, tzinfo=UTC)) is True


def test_completed_task_never_overdue():
    task = _task(completed=True)
    assert is_overdue(task, datetime(2024, 6, 10, tzinfo=UTC)) is False


def test_progress_band_thresholds():
    assert progress_band(0) == "low"
    assert progress_band(49) == "low"
    assert progress_band(50) == "mid"
    assert progress_band(79) == "mid"
    assert progress_band(80) == "high"
    assert progress_band(100) == "high"


def test_progress_counts_real_hours_across_dst_change():
    ny = ZoneInfo("America/New_York")
    # clocks jump forward on 2024-03-10, so the window is 47 real hours
    task = _task(start="2024-03-09", end="2024-03-11")
    assert compute_progress(task, datetime(2024, 3, 10, 12, 0, tzinfo=ny)) == 74
    assert compute_progress(task, datetime(2024, 3, 9, 0, 0, tzinfo=ny)) == 0

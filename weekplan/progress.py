"""Time-based completion progress for a task window.

Progress runs from 0 at the start of ``progress_start_date`` to 100 at the
start of ``end_date``, measured in fractional hours of ``now``. From the end
day onwards it is always 100.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time, timezone

from weekplan.dates import as_date
from weekplan.models import Task


BAND_LOW = "low"
BAND_MID = "mid"
BAND_HIGH = "high"


def _as_datetime(now: date | datetime) -> datetime:
    if isinstance(now, datetime):
        return now
    return datetime.combine(now, time.min)


def _start_of_day(d: date, like: datetime) -> datetime:
    return datetime.combine(d, time.min, tzinfo=like.tzinfo)


def _hours_between(start: datetime, end: datetime) -> float:
    """Real elapsed hours; aware values go through UTC so DST shifts count."""
    if start.tzinfo is not None:
        start = start.astimezone(timezone.utc)
        end = end.astimezone(timezone.utc)
    return (end - start).total_seconds() / 3600


def compute_progress(task: Task, now: date | datetime) -> int:
    """Return the task's elapsed share of its window as an integer 0-100."""
    now_dt = _as_datetime(now)
    end = as_date(task.end_date)
    if now_dt.date() >= end:
        return 100

    start_dt = _start_of_day(as_date(task.effective_progress_start), now_dt)
    end_dt = _start_of_day(end, now_dt)

    total_hours = max(1.0, _hours_between(start_dt, end_dt))
    hours_left = max(0.0, _hours_between(now_dt, end_dt))
    value = (1 - hours_left / total_hours) * 100
    # half-up rounding, not banker's
    return min(100, max(0, math.floor(value + 0.5)))


def is_overdue(task: Task, now: date | datetime) -> bool:
    """True when the task is still open and its end day is in the past."""
    return not task.completed and _as_datetime(now).date() > as_date(task.end_date)


def progress_band(progress: int) -> str:
    """Classify a progress value into the low / mid / high fill band."""
    if progress < 50:
        return BAND_LOW
    if progress < 80:
        return BAND_MID
    return BAND_HIGH

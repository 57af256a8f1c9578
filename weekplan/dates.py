"""Calendar arithmetic for the weekly grid: ISO weeks, day keys, task spans."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from weekplan.models import Task


# ── Constants ─────────────────────────────────────────────────

DAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


@dataclass(frozen=True)
class WeekDay:
    index: int  # 0 = Monday
    key: str
    date: date
    label: str


# ── Day keys ──────────────────────────────────────────────────


def as_date(value: date | datetime | str) -> date:
    """Normalize a date, datetime or ISO day key to a calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def day_key(value: date | datetime | str) -> str:
    """Canonical YYYY-MM-DD key; the only form used to compare or look up days."""
    return as_date(value).isoformat()


def add_days(value: date | datetime | str, days: int) -> str:
    return day_key(as_date(value) + timedelta(days=days))


def days_between(start: date | datetime | str, end: date | datetime | str) -> int:
    """Whole calendar days from *start* to *end* (negative if end is earlier)."""
    return (as_date(end) - as_date(start)).days


# ── Weeks ─────────────────────────────────────────────────────


def week_start(value: date | datetime | str) -> date:
    """Monday of the ISO week containing *value*."""
    d = as_date(value)
    return d - timedelta(days=d.weekday())


def week_days(value: date | datetime | str) -> list[WeekDay]:
    """The seven days Monday..Sunday of the week containing *value*."""
    start = week_start(value)
    days = []
    for index, label in enumerate(DAY_LABELS):
        d = start + timedelta(days=index)
        days.append(WeekDay(index=index, key=d.isoformat(), date=d, label=label))
    return days


def week_day_keys(value: date | datetime | str) -> list[str]:
    return [d.key for d in week_days(value)]


# ── Task windows ──────────────────────────────────────────────


def task_duration_days(task: Task) -> int:
    """Inclusive number of days in the task window, at least 1."""
    return max(1, days_between(task.start_date, task.end_date) + 1)


def task_span(task: Task, week: date | datetime | str) -> int:
    """How many days of the week containing *week* the task window covers."""
    first = week_start(week)
    last = first + timedelta(days=6)
    start = as_date(task.start_date)
    end = as_date(task.end_date)

    if end < first or start > last:
        return 0

    span_start = max(start, first)
    span_end = min(end, last)
    return max(1, (span_end - span_start).days + 1)

"""Daily rollover: carry open tasks whose window reaches today onto today.

A task rolls when its deadline is today, or when it started before today and
ends after today. Rolled tasks are appended to today's column in their
original list order. ``progress_start_date`` is left alone so progress keeps
counting from the original start; only a user drag restarts it.
"""

from __future__ import annotations

import logging
from datetime import date, datetime

from weekplan.dates import add_days, as_date, day_key
from weekplan.models import Task

logger = logging.getLogger(__name__)


def _next_orders(tasks: list[Task]) -> dict[str, int]:
    """Per day, one past the highest order in use (completed tasks included)."""
    orders: dict[str, int] = {}
    for task in tasks:
        orders[task.start_date] = max(orders.get(task.start_date, 0), task.order + 1)
    return orders


def should_roll(task: Task, today: date) -> bool:
    start = as_date(task.start_date)
    end = as_date(task.end_date)
    return end == today or (start < today and end > today)


def roll_incomplete_tasks(tasks: list[Task], today: date | datetime | str) -> list[str]:
    """Move every eligible open task onto *today*. Returns the ids that moved.

    Idempotent per day: a task already starting today is never moved again.
    """
    today_date = as_date(today)
    next_order = _next_orders(tasks)
    rolled = []

    for task in tasks:
        if task.completed:
            continue
        try:
            if not should_roll(task, today_date):
                continue
            days_left = max(0, (as_date(task.end_date) - today_date).days)
            target = add_days(task.end_date, -days_left)
        except ValueError:
            logger.warning("Skipping task %s with unreadable dates", task.id)
            continue

        if target == task.start_date:
            continue

        order = next_order.get(target, 0)
        next_order[target] = order + 1
        logger.debug("Rolling task %s from %s to %s (order %s)", task.id, task.start_date, target, order)
        task.start_date = target
        task.order = order
        rolled.append(task.id)

    if rolled:
        logger.info("Rolled %d task(s) onto %s", len(rolled), day_key(today_date))
    return rolled

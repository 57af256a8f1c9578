"""Daily completion streak transitions.

The streak is a two-input state machine over (today, yesterday):
credit on the first completion of a day, expire after a missed day.
"""

from __future__ import annotations

import logging
from datetime import date, datetime

from weekplan.dates import add_days, day_key
from weekplan.models import StreakState, Task

logger = logging.getLogger(__name__)


def credit_streak(state: StreakState, today: date | datetime | str) -> bool:
    """Credit *today* to the streak. Returns True if the state changed."""
    today_key = day_key(today)
    if state.last_streak_date == today_key:
        return False

    previous = state.streak
    if state.last_streak_date == add_days(today_key, -1):
        state.streak += 1
    else:
        state.streak = 1
    state.last_streak_date = today_key
    logger.info("Streak credited for %s: %s -> %s", today_key, previous, state.streak)
    return True


def check_streak_expiry(state: StreakState, today: date | datetime | str) -> bool:
    """Reset the streak if the last credited day is older than yesterday."""
    today_key = day_key(today)
    last = state.last_streak_date
    if last and last != today_key and last != add_days(today_key, -1):
        logger.info("Streak of %s expired (last credited %s)", state.streak, last)
        state.reset()
        return True
    return False


def has_completion_on(tasks: list[Task], today: date | datetime | str) -> bool:
    today_key = day_key(today)
    return any(t.completed and t.completed_at == today_key for t in tasks)


def recalculate_streak(state: StreakState, tasks: list[Task], today: date | datetime | str) -> bool:
    """Credit today if any task was completed today. Safe to call repeatedly."""
    if not has_completion_on(tasks, today):
        return False
    return credit_streak(state, today)

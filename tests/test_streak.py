"""Tests for weekplan/streak.py — credit, expiry, recalculation."""

from weekplan.models import StreakState, Task
from weekplan.streak import check_streak_expiry, credit_streak, recalculate_streak


def test_first_credit():
    state = StreakState()
    assert credit_streak(state, "2024-06-03") is True
    assert state.streak == 1
    assert state.last_streak_date == "2024-06-03"


def test_credit_consecutive_day_increments():
    state = StreakState(streak=3, last_streak_date="2024-06-02")
    credit_streak(state, "2024-06-03")
    assert state.streak == 4


def test_credit_same_day_is_noop():
    state = StreakState(streak=3, last_streak_date="2024-06-03")
    assert credit_streak(state, "2024-06-03") is False
    assert state.streak == 3


def test_credit_after_gap_resets_to_one():
    state = StreakState(streak=7, last_streak_date="2024-06-01")
    credit_streak(state, "2024-06-03")
    assert state.streak == 1
    assert state.last_streak_date == "2024-06-03"


def test_credit_across_month_boundary():
    state = StreakState(streak=2, last_streak_date="2024-05-31")
    credit_streak(state, "2024-06-01")
    assert state.streak == 3


def test_expiry_keeps_today_and_yesterday():
    state = StreakState(streak=2, last_streak_date="2024-06-03")
    assert check_streak_expiry(state, "2024-06-03") is False
    assert check_streak_expiry(state, "2024-06-04") is False
    assert state.streak == 2


def test_expiry_resets_after_missed_day():
    state = StreakState(streak=5, last_streak_date="2024-06-03")
    assert check_streak_expiry(state, "2024-06-05") is True
    assert state.streak == 0
    assert state.last_streak_date is None


def test_expiry_without_history_is_noop():
    state = StreakState()
    assert check_streak_expiry(state, "2024-06-05") is False
    assert state == StreakState()


def test_recalculate_needs_completion_today():
    state = StreakState(streak=1, last_streak_date="2024-06-02")
    tasks = [Task(id="a", completed=True, completed_at="2024-06-02")]
    assert recalculate_streak(state, tasks, "2024-06-03") is False
    assert state.streak == 1


def test_recalculate_is_idempotent():
    state = StreakState(streak=1, last_streak_date="2024-06-02")
    tasks = [Task(id="a", completed=True, completed_at="2024-06-03")]
    assert recalculate_streak(state, tasks, "2024-06-03") is True
    assert recalculate_streak(state, tasks, "2024-06-03") is False
    assert state.streak == 2

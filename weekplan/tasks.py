"""Task validation and the TaskStore: the single owner of tasks and streak."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable
from datetime import date, datetime
from typing import Any

from weekplan.dates import add_days, as_date, day_key, days_between
from weekplan.models import PRIORITIES, PlannerState, StreakState, Task
from weekplan.rollover import roll_incomplete_tasks
from weekplan.streak import check_streak_expiry, credit_streak, has_completion_on, recalculate_streak
from weekplan.workspace import now_local

logger = logging.getLogger(__name__)

Listener = Callable[["TaskStore"], None]
Clock = Callable[[], datetime]


class InvalidTaskError(ValueError):
    """Raised when a task payload fails validation; nothing is stored."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = errors


# ── Validation ────────────────────────────────────────────────


def _parse_day(value: Any) -> date | None:
    if isinstance(value, (date, datetime)):
        return as_date(value)
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return as_date(value.strip())
    except ValueError:
        return None


def validate_task_input(task: dict[str, Any]) -> list[str]:
    """Validate a new-task payload and return list of errors (empty if valid)."""
    errors = []
    title = task.get("title")
    if not isinstance(title, str) or not title.strip():
        errors.append("Missing required field: title")

    if "priority" in task and task["priority"] not in PRIORITIES:
        errors.append(f"Invalid priority: {task['priority']}")

    description = task.get("description")
    if description is not None and not isinstance(description, str):
        errors.append("description must be a string")

    start = _parse_day(task.get("startDate"))
    end = _parse_day(task.get("endDate"))
    if start is None:
        errors.append("Missing or invalid startDate")
    if end is None:
        errors.append("Missing or invalid endDate")
    if start is not None and end is not None and end < start:
        errors.append("endDate must not be before startDate")

    return errors


# ── Store ─────────────────────────────────────────────────────


class TaskStore:
    """
    In-memory planner store.

    Holds the task list and the streak, applies the mutations, and derives
    the per-day views. Every mutation that changes state notifies the
    subscribers (autosave is one of them). Single writer, no locking.
    """

    def __init__(self, state: PlannerState | None = None, clock: Clock | None = None) -> None:
        self._state = state if state is not None else PlannerState()
        self._clock = clock or now_local
        self._listeners: list[Listener] = []

    # ---- state access ----

    @property
    def tasks(self) -> list[Task]:
        return self._state.tasks

    @property
    def streak_state(self) -> StreakState:
        return self._state.streak

    @property
    def streak(self) -> int:
        return self._state.streak.streak

    @property
    def last_streak_date(self) -> str | None:
        return self._state.streak.last_streak_date

    @property
    def state(self) -> PlannerState:
        return self._state

    def now(self) -> datetime:
        return self._clock()

    def _today(self, today: date | datetime | str | None) -> str:
        return day_key(today if today is not None else self._clock())

    def find_task(self, task_id: str) -> Task | None:
        for t in self._state.tasks:
            if t.id == task_id:
                return t
        return None

    # ---- subscriptions ----

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener* for change notifications. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Store listener %r failed.", listener)

    # ---- mutations ----

    def add(self, task_data: dict[str, Any]) -> Task:
        """Create a task from a plain payload. Raises InvalidTaskError on bad input."""
        errors = validate_task_input(task_data)
        if errors:
            raise InvalidTaskError(errors)

        start = day_key(task_data["startDate"])
        same_day = [t for t in self._state.tasks if t.start_date == start]
        description = (task_data.get("description") or "").strip()
        task = Task(
            id=str(uuid.uuid4()),
            title=task_data["title"].strip(),
            description=description or None,
            priority=task_data.get("priority", "medium"),
            start_date=start,
            end_date=day_key(task_data["endDate"]),
            progress_start_date=start,
            completed=False,
            order=len(same_day),
        )
        self._state.tasks.append(task)
        logger.debug("Task added id=%s start=%s end=%s order=%s", task.id, task.start_date, task.end_date, task.order)
        self._notify()
        return task

    def toggle_completed(self, task_id: str, today: date | datetime | str | None = None) -> None:
        """Flip completion; the first completion of a day credits the streak."""
        task = self.find_task(task_id)
        if task is None:
            logger.debug("toggle_completed: unknown task %s", task_id)
            return

        today_key = self._today(today)
        task.completed = not task.completed
        task.completed_at = today_key if task.completed else None
        logger.debug("Task %s completed=%s", task.id, task.completed)

        # never revoked when the day's only completion is undone
        if has_completion_on(self._state.tasks, today_key):
            credit_streak(self._state.streak, today_key)
        self._notify()

    def move(self, task_id: str, target_day: date | datetime | str, target_order: int) -> None:
        """Move a task to another day keeping its duration; progress restarts there."""
        task = self.find_task(task_id)
        if task is None:
            logger.debug("move: unknown task %s", task_id)
            return

        target = day_key(target_day)
        duration = days_between(task.start_date, task.end_date)
        task.start_date = target
        task.progress_start_date = target
        task.end_date = add_days(target, duration)
        task.order = int(target_order)
        logger.debug("Task %s moved to %s order=%s", task.id, target, task.order)
        self._notify()

    def reorder(self, day: date | datetime | str, ordered_task_ids: Iterable[str]) -> None:
        """Assign order = list index to the listed tasks that start on *day*."""
        key = day_key(day)
        positions = {task_id: index for index, task_id in enumerate(ordered_task_ids)}
        changed = False
        for task in self._state.tasks:
            if task.start_date != key:
                continue
            order = positions.get(task.id)
            if order is not None and order != task.order:
                task.order = order
                changed = True
        if changed:
            logger.debug("Reordered %s: %s", key, list(positions))
            self._notify()

    def roll_incomplete_tasks(self, today: date | datetime | str | None = None) -> list[str]:
        rolled = roll_incomplete_tasks(self._state.tasks, self._today(today))
        if rolled:
            self._notify()
        return rolled

    def check_streak_expiry(self, today: date | datetime | str | None = None) -> bool:
        expired = check_streak_expiry(self._state.streak, self._today(today))
        if expired:
            self._notify()
        return expired

    def recalculate_streak(self, today: date | datetime | str | None = None) -> bool:
        credited = recalculate_streak(self._state.streak, self._state.tasks, self._today(today))
        if credited:
            self._notify()
        return credited

    # ---- derived views ----

    def tasks_for_day(self, day: date | datetime | str) -> list[Task]:
        """Open tasks starting on *day*, sorted by (order, end date)."""
        key = day_key(day)
        day_tasks = [t for t in self._state.tasks if t.start_date == key and not t.completed]
        return sorted(day_tasks, key=lambda t: (t.order, t.end_date))

    def tasks_by_day(self, day_keys: Iterable[str]) -> dict[str, list[Task]]:
        return {key: self.tasks_for_day(key) for key in day_keys}

    def task_day_map(self, day_keys: Iterable[str]) -> dict[str, str]:
        """Task id -> day for every task displayed in the given days."""
        mapping = {}
        for key, day_tasks in self.tasks_by_day(day_keys).items():
            for task in day_tasks:
                mapping[task.id] = key
        return mapping

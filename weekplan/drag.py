"""Drag-and-drop resolution for the week grid.

A drag ends with the dragged task id and whatever it was dropped on: a day
column or another task. ``plan_drag`` turns that into a DragPlan against the
current per-day id lists (pure), and ``apply_drag`` feeds the plan into the
store's ``move``/``reorder`` so every sibling's order stays dense.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime

from weekplan.dates import day_key, week_day_keys
from weekplan.tasks import TaskStore

logger = logging.getLogger(__name__)

DAY_PREFIX = "day-"


@dataclass(frozen=True)
class DropTarget:
    kind: str  # day, task
    id: str

    @classmethod
    def day(cls, day: date | datetime | str) -> DropTarget:
        return cls(kind="day", id=day_key(day))

    @classmethod
    def task(cls, task_id: str) -> DropTarget:
        return cls(kind="task", id=task_id)

    @classmethod
    def from_id(cls, over_id: str) -> DropTarget:
        """Parse an over-id: ``day-YYYY-MM-DD`` is a column, anything else a task."""
        if over_id.startswith(DAY_PREFIX):
            return cls(kind="day", id=over_id[len(DAY_PREFIX):])
        return cls(kind="task", id=over_id)


@dataclass
class DragPlan:
    task_id: str
    source_day: str
    target_day: str
    target_index: int
    source_ids: list[str] = field(default_factory=list)
    target_ids: list[str] = field(default_factory=list)

    @property
    def same_day(self) -> bool:
        return self.source_day == self.target_day


def array_move(items: list[str], from_index: int, to_index: int) -> list[str]:
    """Remove the item at *from_index* and insert it at *to_index*."""
    result = list(items)
    result.insert(to_index, result.pop(from_index))
    return result


def plan_drag(
    columns: dict[str, list[str]],
    task_id: str,
    target: DropTarget | None,
) -> DragPlan | None:
    """Resolve a drop into the id lists to write back, or None for a no-op.

    *columns* maps each displayed day to its ordered task ids.
    """
    if target is None:
        return None

    task_day = {tid: day for day, ids in columns.items() for tid in ids}
    source_day = task_day.get(task_id)
    if source_day is None:
        return None

    if target.kind == "day":
        target_day = target.id if target.id in columns else None
    else:
        target_day = task_day.get(target.id)
    if target_day is None:
        return None

    source_ids = list(columns[source_day])
    target_ids = list(columns[target_day])
    source_index = source_ids.index(task_id)

    over_index = len(target_ids)
    if target.kind == "task" and target.id in target_ids:
        over_index = target_ids.index(target.id)

    if source_day == target_day:
        if over_index in (source_index, source_index + 1):
            return None
        new_order = array_move(source_ids, source_index, over_index)
        return DragPlan(task_id, source_day, target_day, over_index, new_order, new_order)

    next_source = [tid for tid in source_ids if tid != task_id]
    next_target = list(target_ids)
    next_target.insert(over_index, task_id)
    return DragPlan(task_id, source_day, target_day, over_index, next_source, next_target)


def apply_drag(store: TaskStore, plan: DragPlan) -> None:
    if plan.same_day:
        store.reorder(plan.source_day, plan.target_ids)
        return
    store.move(plan.task_id, plan.target_day, plan.target_index)
    store.reorder(plan.source_day, plan.source_ids)
    store.reorder(plan.target_day, plan.target_ids)


class DragReorderResolver:
    """Resolves drags against the store's current grouping of the given days."""

    def __init__(self, store: TaskStore, day_keys: list[str] | None = None) -> None:
        self._store = store
        self._day_keys = day_keys

    def columns(self) -> dict[str, list[str]]:
        keys = self._day_keys if self._day_keys is not None else week_day_keys(self._store.now())
        return {day: [t.id for t in tasks] for day, tasks in self._store.tasks_by_day(keys).items()}

    def drop(self, task_id: str, target: DropTarget | None) -> DragPlan | None:
        """Apply a finished drag. Returns the applied plan, or None if nothing changed."""
        plan = plan_drag(self.columns(), task_id, target)
        if plan is None:
            logger.debug("Drag of %s onto %s resolved to no-op", task_id, target)
            return None
        apply_drag(self._store, plan)
        return plan

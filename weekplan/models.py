"""Typed dataclasses for the weekplan data model.

All models use from_dict/to_dict for JSON/YAML serialization.
camelCase in JSON is mapped to snake_case in Python.
Unknown keys are ignored; missing keys use defaults.
Calendar dates are stored as ISO day keys (YYYY-MM-DD).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from weekplan.dates import day_key


PRIORITIES = ("low", "medium", "high")


# ── Profile ───────────────────────────────────────────────────


@dataclass
class Profile:
    timezone: str = "UTC"
    log_level: str = "INFO"
    # host-only preferences; loaded for the host, never read by the core
    display_name: str = ""
    locale: str = ""
    color_scheme: str = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Profile:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(
            timezone=str(d.get("timezone", "UTC") or "UTC"),
            log_level=str(d.get("log_level", "INFO") or "INFO").upper(),
            display_name=str(d.get("display_name", "") or ""),
            locale=str(d.get("locale", "") or ""),
            color_scheme=str(d.get("color_scheme", "") or ""),
        )


# ── Tasks ─────────────────────────────────────────────────────


@dataclass
class Task:
    id: str = ""
    title: str = ""
    description: str | None = None
    priority: str = "medium"  # low, medium, high
    start_date: str = ""  # ISO date
    end_date: str = ""  # ISO date
    # effective start for progress; reset by a drag, kept by rollover
    progress_start_date: str = ""
    completed: bool = False
    completed_at: str | None = None
    order: int = 0

    @property
    def effective_progress_start(self) -> str:
        return self.progress_start_date or self.start_date

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Task:
        start = str(d.get("startDate", ""))
        priority = str(d.get("priority", "medium"))
        return cls(
            id=str(d.get("id", "")),
            title=str(d.get("title", "")),
            description=d.get("description"),
            priority=priority if priority in PRIORITIES else "medium",
            start_date=start,
            end_date=str(d.get("endDate", "")),
            progress_start_date=str(d.get("progressStartDate") or start),
            completed=bool(d.get("completed", False)),
            completed_at=d.get("completedAt"),
            order=int(d.get("order", 0) or 0),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "priority": self.priority,
            "startDate": self.start_date,
            "progressStartDate": self.effective_progress_start,
            "endDate": self.end_date,
            "completed": self.completed,
            "order": self.order,
        }
        if self.description:
            d["description"] = self.description
        if self.completed_at:
            d["completedAt"] = self.completed_at
        return d


# ── Streak ────────────────────────────────────────────────────


@dataclass
class StreakState:
    streak: int = 0
    last_streak_date: str | None = None

    def reset(self) -> None:
        self.streak = 0
        self.last_streak_date = None


# ── Planner state ─────────────────────────────────────────────


@dataclass
class PlannerState:
    """The persisted part of the planner: the task list plus the streak."""

    tasks: list[Task] = field(default_factory=list)
    streak: StreakState = field(default_factory=StreakState)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> PlannerState:
        if not d or not isinstance(d, dict):
            return cls()
        tasks = []
        for raw in d.get("tasks") or []:
            if not isinstance(raw, dict):
                continue
            if not raw.get("id") or not raw.get("startDate") or not raw.get("endDate"):
                continue
            record = _normalize_dates(raw)
            if record is not None:
                tasks.append(Task.from_dict(record))
        last = _optional_day_key(d.get("lastStreakDate"))
        return cls(
            tasks=tasks,
            streak=StreakState(
                streak=max(0, int(d.get("streak", 0) or 0)),
                last_streak_date=last,
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "tasks": [t.to_dict() for t in self.tasks],
            "streak": self.streak.streak,
            "lastStreakDate": self.streak.last_streak_date,
        }


def _optional_day_key(value: Any) -> str | None:
    if not value:
        return None
    try:
        return day_key(str(value))
    except ValueError:
        return None


def _normalize_dates(raw: dict[str, Any]) -> dict[str, Any] | None:
    """Canonicalize a stored task's dates to day keys; None if the window is unusable."""
    try:
        start = day_key(str(raw["startDate"]))
        end = day_key(str(raw["endDate"]))
    except ValueError:
        return None
    if end < start:
        return None

    progress_start = _optional_day_key(raw.get("progressStartDate")) or start
    if progress_start > end:
        progress_start = start

    record = dict(raw)
    record.update(
        startDate=start,
        endDate=end,
        progressStartDate=progress_start,
        completedAt=_optional_day_key(raw.get("completedAt")),
    )
    return record

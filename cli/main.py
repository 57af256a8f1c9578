#!/usr/bin/env python3
"""weekplan CLI — headless host for the weekly planner core."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from weekplan import (
    DayTicker,
    DragReorderResolver,
    DropTarget,
    InvalidTaskError,
    PRIORITIES,
    TaskStore,
    compute_progress,
    day_key,
    is_overdue,
    load_profile,
    open_planner,
    progress_band,
    run_daily_maintenance,
    week_day_keys,
    week_days,
    workspace_root,
)
from weekplan.logging_setup import setup_logging

logger = logging.getLogger(__name__)


class UsageError(Exception):
    pass


# ── Helpers ───────────────────────────────────────────────────


def _resolve_id(store: TaskStore, raw: str) -> str:
    """Accept a full task id or any unique prefix of one."""
    if store.find_task(raw) is not None:
        return raw
    matches = [t.id for t in store.tasks if t.id.startswith(raw)]
    if len(matches) == 1:
        return matches[0]
    if not matches:
        raise UsageError(f"No task matches id {raw!r}")
    raise UsageError(f"Ambiguous task id {raw!r} ({len(matches)} matches)")


def _day_arg(raw: str) -> str:
    try:
        return day_key(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a date (YYYY-MM-DD): {raw!r}") from None


# ── Commands ──────────────────────────────────────────────────


def cmd_week(store: TaskStore, args: argparse.Namespace) -> None:
    now = store.now()
    base = args.date or now
    for day in week_days(base):
        marker = "*" if day.key == day_key(now) else " "
        print(f"{marker}{day.label} {day.key}")
        for task in store.tasks_for_day(day.key):
            pct = compute_progress(task, now)
            flags = " OVERDUE" if is_overdue(task, now) else ""
            print(
                f"    {task.id[:8]}  [{task.priority:<6}] {task.title}"
                f"  {pct:3d}% {progress_band(pct)}  until {task.end_date}{flags}"
            )
    print(f"Streak: {store.streak}")


def cmd_add(store: TaskStore, args: argparse.Namespace) -> None:
    payload = {
        "title": args.title,
        "priority": args.priority,
        "startDate": args.start,
        "endDate": args.end or args.start,
    }
    if args.description:
        payload["description"] = args.description
    try:
        task = store.add(payload)
    except InvalidTaskError as e:
        raise UsageError("; ".join(e.errors))
    print(task.id)


def cmd_toggle(store: TaskStore, args: argparse.Namespace) -> None:
    task_id = _resolve_id(store, args.task_id)
    store.toggle_completed(task_id)
    task = store.find_task(task_id)
    print(f"{task.title}: {'done' if task.completed else 'open'} (streak {store.streak})")


def cmd_drag(store: TaskStore, args: argparse.Namespace) -> None:
    task_id = _resolve_id(store, args.task_id)
    if args.before:
        target = DropTarget.task(_resolve_id(store, args.before))
    else:
        target = DropTarget.day(args.day)
    day_keys = week_day_keys(args.date) if args.date else None
    plan = DragReorderResolver(store, day_keys).drop(task_id, target)
    if plan is None:
        print("No change.")
    else:
        print(f"Moved to {plan.target_day} at position {plan.target_index}")


def cmd_reorder(store: TaskStore, args: argparse.Namespace) -> None:
    store.reorder(args.day, [_resolve_id(store, raw) for raw in args.task_ids])


def cmd_tick(store: TaskStore, args: argparse.Namespace) -> None:
    rolled = run_daily_maintenance(store)
    print(f"Rolled {len(rolled)} task(s); streak {store.streak}")


def cmd_streak(store: TaskStore, args: argparse.Namespace) -> None:
    print(f"Streak: {store.streak}")
    print(f"Last credited: {store.last_streak_date or '-'}")


# ── Entry point ───────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="weekplan", description="Plan short tasks across the week.")
    parser.add_argument("--root", type=Path, help="workspace directory (default: $WEEKPLAN_ROOT)")
    parser.add_argument("--log-dir", type=Path, help="also write a debug log file here")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("week", help="show the week grid")
    p.add_argument("--date", type=_day_arg, help="any day of the week to show")
    p.set_defaults(func=cmd_week)

    p = sub.add_parser("add", help="add a task")
    p.add_argument("title")
    p.add_argument("--start", type=_day_arg, required=True)
    p.add_argument("--end", type=_day_arg)
    p.add_argument("--priority", choices=PRIORITIES, default="medium")
    p.add_argument("--description")
    p.set_defaults(func=cmd_add)

    p = sub.add_parser("toggle", help="mark a task done / not done")
    p.add_argument("task_id")
    p.set_defaults(func=cmd_toggle)

    p = sub.add_parser("drag", help="drop a task on a day column or before another task")
    p.add_argument("task_id")
    where = p.add_mutually_exclusive_group(required=True)
    where.add_argument("--day", type=_day_arg)
    where.add_argument("--before", metavar="TASK_ID")
    p.add_argument("--date", type=_day_arg, help="any day of the week the drag happens in (default: this week)")
    p.set_defaults(func=cmd_drag)

    p = sub.add_parser("reorder", help="set the full task order of one day")
    p.add_argument("day", type=_day_arg)
    p.add_argument("task_ids", nargs="+")
    p.set_defaults(func=cmd_reorder)

    p = sub.add_parser("tick", help="run the daily rollover and streak check")
    p.set_defaults(func=cmd_tick)

    p = sub.add_parser("streak", help="show the streak")
    p.set_defaults(func=cmd_streak)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    root = (args.root.expanduser().resolve() if args.root else workspace_root())
    level_name = load_profile(root).log_level
    setup_logging(log_dir=args.log_dir, console_level=getattr(logging, level_name, logging.INFO))

    logger.debug("Running %s in %s", args.command, root)
    store = open_planner(root)
    DayTicker(store).tick()

    try:
        args.func(store, args)
    except UsageError as e:
        print(f"weekplan: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""weekplan core library — task scheduling and streak engine for a weekly planner.

Public API re-exports for convenient imports:
    from weekplan import open_planner, TaskStore, compute_progress, ...
"""

# Workspace & configuration
from weekplan.workspace import (
    STORAGE_KEY,
    workspace_root,
    profile_path,
    snapshot_path,
    load_profile,
    get_user_timezone,
    now_local,
    today_local,
)

# Models
from weekplan.models import (
    PRIORITIES,
    Profile,
    Task,
    StreakState,
    PlannerState,
)

# Calendar
from weekplan.dates import (
    WeekDay,
    as_date,
    day_key,
    add_days,
    days_between,
    week_start,
    week_days,
    week_day_keys,
    task_duration_days,
    task_span,
)

# Progress
from weekplan.progress import (
    BAND_LOW,
    BAND_MID,
    BAND_HIGH,
    compute_progress,
    is_overdue,
    progress_band,
)

# Streak & rollover
from weekplan.streak import credit_streak, check_streak_expiry, recalculate_streak
from weekplan.rollover import roll_incomplete_tasks

# Store
from weekplan.tasks import InvalidTaskError, TaskStore, validate_task_input

# Drag & drop
from weekplan.drag import DragPlan, DragReorderResolver, DropTarget, apply_drag, plan_drag

# Persistence & assembly
from weekplan.persistence import SNAPSHOT_VERSION, load_state, save_state
from weekplan.planner import DayTicker, autosave, open_planner, run_daily_maintenance

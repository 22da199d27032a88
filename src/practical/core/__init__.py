"""Functional core - pure business logic with no I/O."""

from .progress import Milestone, compute_progress, overall_progress, goal_stats
from .priority import Priority, Quadrant, Status, TaskRecord, classify
from .dates import (
    DateFormat,
    TimeFormat,
    format_date,
    format_time,
    local_to_utc,
    parse_display_date,
    utc_to_local,
)
from .preferences import Preferences, DEFAULT_PREFERENCES

__all__ = [
    # Progress
    "Milestone",
    "compute_progress",
    "overall_progress",
    "goal_stats",
    # Priority
    "Priority",
    "Quadrant",
    "Status",
    "TaskRecord",
    "classify",
    # Dates
    "DateFormat",
    "TimeFormat",
    "format_date",
    "format_time",
    "local_to_utc",
    "parse_display_date",
    "utc_to_local",
    # Preferences
    "Preferences",
    "DEFAULT_PREFERENCES",
]

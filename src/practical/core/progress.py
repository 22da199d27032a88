"""Pure goal progress logic - no I/O dependencies."""

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date
from enum import Enum

ON_TRACK_THRESHOLD = 70
AT_RISK_THRESHOLD = 50


def _to_float(value) -> float | None:
    """Coerce a loose numeric value, returning None for anything unusable."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None
    return number


def _round_half_up(value: float) -> int:
    # Trim float noise first so 62.49999999 computed from 62.5 still rounds up
    return math.floor(round(value, 9) + 0.5)


@dataclass
class Milestone:
    """A weighted sub-unit of a goal."""

    weight: float = 1.0
    done: bool = False
    score: float | None = None
    id: str = ""
    title: str = ""
    due_date: date | None = None

    @classmethod
    def from_api(cls, data: Mapping) -> "Milestone":
        """Create Milestone from a backend record.

        Values are carried over as-is; sanitizing happens during aggregation.
        """
        done = data.get("done")
        if done is None:
            done = data.get("completed")
        if done is None:
            done = str(data.get("status") or "").lower() in ("done", "completed")
        elif isinstance(done, str):
            done = done.strip().lower() in ("true", "1", "yes")

        score = data.get("score")
        if score is None and data.get("progress") is not None:
            # progress is a percent (0-100), score a fraction
            progress = _to_float(data.get("progress"))
            score = progress / 100 if progress is not None else None

        due = None
        raw_due = data.get("dueDate") or data.get("due_date")
        if raw_due:
            try:
                due = date.fromisoformat(str(raw_due)[:10])
            except ValueError:
                due = None

        return cls(
            weight=data.get("weight", 1.0),
            done=bool(done),
            score=score,
            id=str(data.get("id", "") or ""),
            title=data.get("title", "") or "",
            due_date=due,
        )


def effective_weight(value) -> float:
    """Weight used for aggregation: positive finite numbers pass, anything else is 1."""
    number = _to_float(value)
    if number is None or math.isinf(number) or number <= 0:
        return 1.0
    return number


def milestone_contribution(milestone: Milestone) -> float:
    """Fractional completion in [0, 1]. A done milestone always counts fully."""
    if milestone.done:
        return 1.0
    score = _to_float(milestone.score)
    if score is None:
        return 0.0
    return min(max(score, 0.0), 1.0)


def _as_milestone(value) -> Milestone:
    if isinstance(value, Milestone):
        return value
    if isinstance(value, Mapping):
        return Milestone.from_api(value)
    # Unrecognized entries still count toward the total, with nothing completed
    return Milestone()


def compute_progress(milestones: Iterable[Milestone | Mapping]) -> int:
    """
    Weighted completion percent (0-100) of a goal's milestones.

    Pure function - no I/O. Raw mappings are accepted and converted via
    Milestone.from_api. Malformed weights count as 1, malformed scores as 0.
    """
    items = [_as_milestone(m) for m in milestones or []]
    if not items:
        return 0

    weights = [effective_weight(m.weight) for m in items]
    total_weight = sum(weights)
    if total_weight <= 0:
        return 0

    weighted = sum(milestone_contribution(m) * w for m, w in zip(items, weights))
    percent = _round_half_up(100 * weighted / total_weight)
    return min(max(percent, 0), 100)


class ProgressBand(Enum):
    """Coarse health of a goal's progress."""

    ON_TRACK = "on_track"
    IN_PROGRESS = "in_progress"
    AT_RISK = "at_risk"


def progress_band(percent: int) -> ProgressBand:
    if percent >= ON_TRACK_THRESHOLD:
        return ProgressBand.ON_TRACK
    if percent < AT_RISK_THRESHOLD:
        return ProgressBand.AT_RISK
    return ProgressBand.IN_PROGRESS


def overall_progress(percents: Iterable[int]) -> int:
    """Mean of several goal percents, rounded half-up. 0 when there are none."""
    values = list(percents)
    if not values:
        return 0
    return _round_half_up(sum(values) / len(values))


@dataclass
class GoalStats:
    """Summary counts for a set of goals."""

    total: int = 0
    active: int = 0
    completed: int = 0
    paused: int = 0
    cancelled: int = 0
    on_track: int = 0
    at_risk: int = 0
    overall: int = 0


def goal_stats(goals: Iterable[tuple[int, str]]) -> GoalStats:
    """
    Summarize (percent, status) pairs.

    Lifecycle counts come from the status alone. Only active goals count
    toward on-track / at-risk.
    Pure function - no I/O.
    """
    pairs = list(goals)
    stats = GoalStats(total=len(pairs), overall=overall_progress(p for p, _ in pairs))
    for percent, status in pairs:
        match str(status).lower():
            case "active":
                stats.active += 1
                band = progress_band(percent)
                if band is ProgressBand.ON_TRACK:
                    stats.on_track += 1
                elif band is ProgressBand.AT_RISK:
                    stats.at_risk += 1
            case "completed":
                stats.completed += 1
            case "paused":
                stats.paused += 1
            case "cancelled":
                stats.cancelled += 1
    return stats

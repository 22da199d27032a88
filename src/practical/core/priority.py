"""Pure task prioritization logic - no I/O dependencies."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum, IntEnum


class Status(Enum):
    """Normalized task status."""

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    CANCELLED = "cancelled"

    @property
    def is_closed(self) -> bool:
        return self in (Status.DONE, Status.CANCELLED)


class Priority(Enum):
    """Normalized task priority."""

    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"


class Quadrant(IntEnum):
    """
    Eisenhower quadrant (1-4).

    Q1: Urgent + Important (Do)
    Q2: Not Urgent + Important (Schedule)
    Q3: Urgent + Not Important (Delegate)
    Q4: Not Urgent + Not Important (Delete)
    """

    DO = 1
    SCHEDULE = 2
    DELEGATE = 3
    DELETE = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()


_STATUS_ALIASES = {
    "": Status.OPEN,
    "open": Status.OPEN,
    "todo": Status.OPEN,
    "to do": Status.OPEN,
    "in_progress": Status.IN_PROGRESS,
    "in progress": Status.IN_PROGRESS,
    "in-progress": Status.IN_PROGRESS,
    "done": Status.DONE,
    "completed": Status.DONE,
    "complete": Status.DONE,
    "cancelled": Status.CANCELLED,
    "canceled": Status.CANCELLED,
    "blocked": Status.CANCELLED,
}

_PRIORITY_ALIASES = {
    "high": Priority.HIGH,
    "3": Priority.HIGH,
    "normal": Priority.NORMAL,
    "medium": Priority.NORMAL,
    "2": Priority.NORMAL,
    "low": Priority.LOW,
    "1": Priority.LOW,
}


def normalize_status(value) -> Status:
    """Map loose status text onto Status. Unknown values are treated as open."""
    if isinstance(value, Status):
        return value
    key = " ".join(str(value or "").strip().lower().split())
    return _STATUS_ALIASES.get(key, Status.OPEN)


def normalize_priority(value) -> Priority:
    """Map loose priority text or level (1-3) onto Priority. Unknown values are normal."""
    if isinstance(value, Priority):
        return value
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    key = str(value if value is not None else "").strip().lower()
    return _PRIORITY_ALIASES.get(key, Priority.NORMAL)


def priority_level(value) -> int:
    """Numeric level: 1 = low, 2 = normal, 3 = high."""
    return {Priority.LOW: 1, Priority.NORMAL: 2, Priority.HIGH: 3}[normalize_priority(value)]


def priority_label(value) -> str:
    return normalize_priority(value).value.capitalize()


def status_to_server(value) -> str:
    """UI status vocabulary -> server vocabulary (todo / in_progress / completed)."""
    match normalize_status(value):
        case Status.IN_PROGRESS:
            return "in_progress"
        case Status.DONE:
            return "completed"
        case Status.CANCELLED:
            return "cancelled"
        case _:
            return "todo"


def status_to_ui(value) -> str:
    """Server status vocabulary -> UI vocabulary (open / in_progress / done)."""
    return normalize_status(value).value


def _parse_date(value) -> date | datetime | None:
    """Parse a date-ish value. Unparseable input is treated as absent."""
    if value is None or value == "":
        return None
    if isinstance(value, (date, datetime)):
        return value
    text = str(value).strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text)
    except ValueError:
        return None


@dataclass
class TaskRecord:
    """The fields of a task (or activity) that drive prioritization."""

    deadline: date | datetime | None = None
    end_date: date | datetime | None = None
    start_date: date | datetime | None = None
    priority: Priority = Priority.NORMAL
    status: Status = Status.OPEN
    key_area_id: str | None = None
    id: str = ""
    title: str = ""

    def __post_init__(self):
        self.deadline = _parse_date(self.deadline)
        self.end_date = _parse_date(self.end_date)
        self.start_date = _parse_date(self.start_date)
        self.priority = normalize_priority(self.priority)
        self.status = normalize_status(self.status)

    @classmethod
    def from_api(cls, data: Mapping) -> "TaskRecord":
        """Create TaskRecord from a backend record, normalizing loose fields."""

        def pick(*keys):
            for key in keys:
                if data.get(key) not in (None, ""):
                    return data[key]
            return None

        key_area = pick("key_area_id", "keyAreaId")
        return cls(
            deadline=_parse_date(pick("deadline", "dueDate", "due_date")),
            end_date=_parse_date(pick("end_date", "endDate", "date_end")),
            start_date=_parse_date(pick("start_date", "startDate", "date_start")),
            priority=normalize_priority(pick("priority", "priority_level")),
            status=normalize_status(pick("status", "state")),
            key_area_id=str(key_area) if key_area is not None else None,
            id=str(pick("id") or ""),
            title=pick("title", "name", "text") or "",
        )


def _calendar_day(value: date | datetime | None, now: date | datetime) -> date | None:
    """Reduce a date or datetime to the calendar day it falls on from now's point of view."""
    if value is None:
        return None
    if isinstance(value, datetime):
        if (
            isinstance(now, datetime)
            and now.tzinfo is not None
            and value.tzinfo is not None
        ):
            value = value.astimezone(now.tzinfo)
        return value.date()
    return value


def _today(now: date | datetime) -> date:
    return now.date() if isinstance(now, datetime) else now


def days_until_due(task: TaskRecord, now: date | datetime) -> int | None:
    """Days until the deadline (or end date), negative if overdue."""
    due = _calendar_day(task.deadline, now) or _calendar_day(task.end_date, now)
    if due is None:
        return None
    return (due - _today(now)).days


def is_urgent(task: TaskRecord, now: date | datetime, urgent_days: int = 0) -> bool:
    """
    Due within urgent_days of now (or overdue) = urgent.

    The deadline wins over the end date when both exist. A planned end that
    falls after the deadline is urgent too. Closed tasks are never urgent.
    """
    if task.status.is_closed:
        return False

    days = days_until_due(task, now)
    if days is None:
        return False
    if days <= urgent_days:
        return True

    due = _calendar_day(task.deadline, now)
    end = _calendar_day(task.end_date, now)
    return bool(due and end and end > due)


def is_important(task: TaskRecord, urgent: bool) -> bool:
    """High = important, low = not. Normal only counts when it is also urgent."""
    match task.priority:
        case Priority.HIGH:
            return True
        case Priority.LOW:
            return False
        case _:
            return urgent


def classify(task: TaskRecord, now: date | datetime, urgent_days: int = 0) -> Quadrant:
    """
    Eisenhower quadrant for a task as of now.

    Pure function - no I/O and no wall-clock reads. Finished or cancelled
    tasks always land in Q4.
    """
    if task.status.is_closed:
        return Quadrant.DELETE

    urgent = is_urgent(task, now, urgent_days)
    important = is_important(task, urgent)

    if urgent and important:
        return Quadrant.DO
    elif not urgent and important:
        return Quadrant.SCHEDULE
    elif urgent and not important:
        return Quadrant.DELEGATE
    else:
        return Quadrant.DELETE


def classify_record(data: Mapping, now: date | datetime, urgent_days: int = 0) -> Quadrant:
    """Classify a raw backend record."""
    return classify(TaskRecord.from_api(data), now, urgent_days)


def group_by_quadrant(
    tasks: Iterable[TaskRecord],
    now: date | datetime,
    urgent_days: int = 0,
) -> dict[Quadrant, list[TaskRecord]]:
    """
    Bucket tasks by quadrant, preserving input order within each bucket.

    Pure function - no I/O.
    """
    groups: dict[Quadrant, list[TaskRecord]] = {q: [] for q in Quadrant}
    for task in tasks:
        groups[classify(task, now, urgent_days)].append(task)
    return groups

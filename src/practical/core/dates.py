"""Pure date/time display logic - no I/O dependencies."""

import logging
import re
from datetime import date, datetime, timezone
from enum import Enum
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

MONTH_ABBREVIATIONS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]
WEEKDAY_ABBREVIATIONS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$", re.ASCII)


class DateFormat(Enum):
    """Display date patterns. Values are persisted in user preferences."""

    US = "MM/dd/yyyy"
    EUROPEAN = "dd/MM/yyyy"
    ISO = "yyyy-MM-dd"
    LONG = "MMM dd, yyyy"


class TimeFormat(Enum):
    """Display time patterns. Values are persisted in user preferences."""

    TWELVE_HOUR = "12h"
    TWENTY_FOUR_HOUR = "24h"


DEFAULT_DATE_FORMAT = DateFormat.US
DEFAULT_TIME_FORMAT = TimeFormat.TWELVE_HOUR

_PARSE_PATTERNS = {
    DateFormat.US: re.compile(r"^(?P<month>\d{1,2})/(?P<day>\d{1,2})/(?P<year>\d{4})$", re.ASCII),
    DateFormat.EUROPEAN: re.compile(r"^(?P<day>\d{1,2})/(?P<month>\d{1,2})/(?P<year>\d{4})$", re.ASCII),
    DateFormat.ISO: re.compile(r"^(?P<year>\d{4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})$", re.ASCII),
    DateFormat.LONG: re.compile(r"^(?P<month>[A-Za-z]{3})\s+(?P<day>\d{1,2}),\s*(?P<year>\d{4})$", re.ASCII),
}


def coerce_date_format(value) -> DateFormat:
    """Resolve a date pattern token, falling back to MM/dd/yyyy."""
    if isinstance(value, DateFormat):
        return value
    try:
        return DateFormat(value)
    except ValueError:
        return DEFAULT_DATE_FORMAT


def coerce_time_format(value) -> TimeFormat:
    """Resolve a time pattern token, falling back to 12h."""
    if isinstance(value, TimeFormat):
        return value
    try:
        return TimeFormat(value)
    except ValueError:
        return DEFAULT_TIME_FORMAT


def to_datetime(value) -> datetime | None:
    """Parse a datetime or ISO-8601 string. Dates become midnight. None if unparseable."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        return None


def to_date(value) -> date | None:
    """Calendar date of a date, datetime or ISO-8601 string. None if unparseable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    parsed = to_datetime(value)
    return parsed.date() if parsed else None


def _format_date(d: date, pattern: DateFormat) -> str:
    match pattern:
        case DateFormat.EUROPEAN:
            return f"{d.day:02d}/{d.month:02d}/{d.year:04d}"
        case DateFormat.ISO:
            return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"
        case DateFormat.LONG:
            return f"{MONTH_ABBREVIATIONS[d.month - 1]} {d.day:02d}, {d.year:04d}"
        case _:
            return f"{d.month:02d}/{d.day:02d}/{d.year:04d}"


def format_date(value, pattern=DEFAULT_DATE_FORMAT) -> str:
    """
    Format a date for display.

    Empty input gives "", unparseable input is returned as str(value) and
    unknown patterns fall back to MM/dd/yyyy. Never raises.
    """
    if value is None or value == "":
        return ""
    d = to_date(value)
    if d is None:
        return str(value)
    return _format_date(d, coerce_date_format(pattern))


def parse_display_date(text, pattern=DEFAULT_DATE_FORMAT) -> date | None:
    """
    Parse display text written in exactly one pattern.

    Returns None for empty, malformed or calendar-impossible input
    (e.g. 31/04/2024) instead of guessing.
    """
    if not isinstance(text, str) or not text.strip():
        return None

    match = _PARSE_PATTERNS[coerce_date_format(pattern)].match(text.strip())
    if not match:
        return None

    month = match.group("month")
    if month.isdigit():
        month_number = int(month)
    else:
        abbreviations = [m.lower() for m in MONTH_ABBREVIATIONS]
        if month.lower() not in abbreviations:
            return None
        month_number = abbreviations.index(month.lower()) + 1

    try:
        return date(int(match.group("year")), month_number, int(match.group("day")))
    except ValueError:
        return None


def format_time(text, pattern=DEFAULT_TIME_FORMAT) -> str:
    """
    Format a 24-hour HH:MM string for display.

    12h: 00:05 -> 12:05 AM, 12:30 -> 12:30 PM, 13:05 -> 1:05 PM.
    24h: zero-padded HH:MM. Malformed input is returned unchanged.
    """
    if not text:
        return ""
    if not isinstance(text, str):
        return str(text)

    match = _TIME_PATTERN.match(text)
    if not match:
        return text
    hours, minutes = int(match.group(1)), match.group(2)
    if hours > 23 or int(minutes) > 59:
        return text

    if coerce_time_format(pattern) is TimeFormat.TWENTY_FOUR_HOUR:
        return f"{hours:02d}:{minutes}"

    period = "PM" if hours >= 12 else "AM"
    display_hour = 12 if hours == 0 else hours - 12 if hours > 12 else hours
    return f"{display_hour}:{minutes} {period}"


def format_datetime(
    value,
    date_format=DEFAULT_DATE_FORMAT,
    time_format=DEFAULT_TIME_FORMAT,
    separator: str = " at ",
) -> str:
    """Format a date-time as '<date><separator><time>'."""
    if value is None or value == "":
        return ""
    dt = to_datetime(value)
    if dt is None:
        return str(value)
    time_str = format_time(f"{dt.hour:02d}:{dt.minute:02d}", time_format)
    return f"{_format_date(dt.date(), coerce_date_format(date_format))}{separator}{time_str}"


def format_relative_date(value, today: date, date_format=DEFAULT_DATE_FORMAT) -> str:
    """
    Today / Tomorrow / Yesterday, a weekday name within the coming week,
    otherwise the formatted date.
    """
    d = to_date(value)
    if d is None:
        return format_date(value, date_format)

    diff = (d - today).days
    if diff == 0:
        return "Today"
    if diff == 1:
        return "Tomorrow"
    if diff == -1:
        return "Yesterday"
    if 0 < diff < 7:
        return WEEKDAY_ABBREVIATIONS[d.weekday()]
    return _format_date(d, coerce_date_format(date_format))


def get_zone(time_zone: str | None) -> ZoneInfo | timezone:
    """Resolve an IANA zone, falling back to UTC when unknown or unavailable."""
    if not time_zone or time_zone.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(time_zone)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        logger.warning(f"Unknown timezone {time_zone!r}, treating as UTC: {e}")
        return timezone.utc


def local_to_utc(local_value, time_zone: str | None) -> datetime | None:
    """
    Interpret a naive wall-clock value in time_zone and return the aware UTC instant.

    Aware input is converted as-is. Wall-clock times skipped by a DST
    transition resolve with fold=0. Returns None for unparseable input or
    an instant outside the representable range.
    """
    dt = to_datetime(local_value)
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=get_zone(time_zone))
    try:
        return dt.astimezone(timezone.utc)
    except OverflowError as e:
        logger.warning(f"Cannot convert {dt.isoformat()} to UTC: {e}")
        return None


def utc_to_local(value, time_zone: str | None) -> datetime | None:
    """
    Naive wall-clock value of an instant in time_zone.

    Naive input is taken to be UTC. Returns None for unparseable input or
    an instant outside the representable range.
    """
    dt = to_datetime(value)
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    try:
        return dt.astimezone(get_zone(time_zone)).replace(tzinfo=None)
    except OverflowError as e:
        logger.warning(f"Cannot convert {dt.isoformat()} to {time_zone}: {e}")
        return None


def to_iso_utc(dt: datetime) -> str:
    """Canonical UTC rendering: YYYY-MM-DDTHH:MM:SSZ."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def format_utc_for_user(
    value,
    time_zone: str | None,
    date_format=DEFAULT_DATE_FORMAT,
    time_format=DEFAULT_TIME_FORMAT,
    separator: str = " at ",
) -> str:
    """Render a canonical UTC value as date and time in the user's zone."""
    if value is None or value == "":
        return ""
    local = utc_to_local(value, time_zone)
    if local is None:
        return str(value)
    return format_datetime(local, date_format, time_format, separator)


def time_to_minutes(text: str) -> int:
    """HH:MM -> minutes since midnight. Malformed input is 0."""
    match = _TIME_PATTERN.match(text or "")
    if not match:
        return 0
    return int(match.group(1)) * 60 + int(match.group(2))


def minutes_to_time(minutes: int) -> str:
    """Minutes since midnight -> HH:MM."""
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


EXAMPLE_DATE = date(2024, 12, 25)
EXAMPLE_TIME = "14:30"

_DATE_FORMAT_LABELS = {
    DateFormat.US: "MM/DD/YYYY (US)",
    DateFormat.EUROPEAN: "DD/MM/YYYY (European)",
    DateFormat.ISO: "YYYY-MM-DD (ISO)",
    DateFormat.LONG: "MMM DD, YYYY (Long)",
}
_TIME_FORMAT_LABELS = {
    TimeFormat.TWELVE_HOUR: "12 Hour",
    TimeFormat.TWENTY_FOUR_HOUR: "24 Hour",
}


def example_date(pattern=DEFAULT_DATE_FORMAT) -> str:
    return format_date(EXAMPLE_DATE, pattern)


def example_time(pattern=DEFAULT_TIME_FORMAT) -> str:
    return format_time(EXAMPLE_TIME, pattern)


def date_format_options() -> list[dict[str, str]]:
    """Selectable date patterns with labels and examples."""
    return [
        {"value": f.value, "label": _DATE_FORMAT_LABELS[f], "example": example_date(f)}
        for f in DateFormat
    ]


def time_format_options() -> list[dict[str, str]]:
    """Selectable time patterns with labels and examples."""
    return [
        {"value": f.value, "label": _TIME_FORMAT_LABELS[f], "example": example_time(f)}
        for f in TimeFormat
    ]

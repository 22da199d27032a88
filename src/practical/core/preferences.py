"""User display preferences model - no I/O dependencies."""

from collections.abc import Mapping
from dataclasses import dataclass

from .dates import (
    DEFAULT_DATE_FORMAT,
    DEFAULT_TIME_FORMAT,
    DateFormat,
    TimeFormat,
    coerce_date_format,
    coerce_time_format,
)


@dataclass(frozen=True)
class Preferences:
    """How the user wants dates and times rendered."""

    date_format: DateFormat = DEFAULT_DATE_FORMAT
    time_format: TimeFormat = DEFAULT_TIME_FORMAT
    time_zone: str = "UTC"

    @classmethod
    def from_api(cls, data: Mapping | None) -> "Preferences":
        """Create Preferences from a backend record. Unknown tokens fall back to defaults."""
        data = data or {}
        return cls(
            date_format=coerce_date_format(data.get("dateFormat") or data.get("date_format")),
            time_format=coerce_time_format(data.get("timeFormat") or data.get("time_format")),
            time_zone=data.get("timezone") or data.get("time_zone") or "UTC",
        )

    def to_api(self) -> dict[str, str]:
        return {
            "dateFormat": self.date_format.value,
            "timeFormat": self.time_format.value,
            "timezone": self.time_zone,
        }


DEFAULT_PREFERENCES = Preferences()

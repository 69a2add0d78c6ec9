"""
Domain models for query windows, provider slots and their conversational views.
"""

from dataclasses import dataclass
from typing import Any, Dict

import pendulum
from pendulum import Date, DateTime

READABLE_DATE_FORMAT = "dddd, MMMM D, YYYY"
SLOT_TIME_FORMAT = "h:mm A"


def format_readable_date(dt: DateTime) -> str:
    """Format a date the way the assistant reads it out, e.g. 'Monday, May 13, 2024'."""
    return dt.format(READABLE_DATE_FORMAT, locale="en")


def to_api_timestamp(dt: DateTime) -> str:
    """Render an instant as UTC ISO-8601 with millisecond precision."""
    return dt.in_timezone("UTC").format("YYYY-MM-DDTHH:mm:ss.SSS[Z]")


@dataclass(frozen=True)
class DateRange:
    """
    An immutable query window sent to the scheduling provider.

    Invariant: start must not be after end.
    """
    start: DateTime
    end: DateTime
    readable_start: str | None = None
    readable_end: str | None = None

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Start time {self.start} must not be after end time {self.end}")

    def readable(self) -> Dict[str, str]:
        """Return the start/end labels used in spoken responses."""
        return {
            "start": self.readable_start or format_readable_date(self.start),
            "end": self.readable_end or format_readable_date(self.end),
        }

    def __str__(self) -> str:
        return f"{self.start.format('YYYY-MM-DD HH:mm')} - {self.end.format('YYYY-MM-DD HH:mm')}"


@dataclass(frozen=True)
class RawSlot:
    """An availability span as reported by the scheduling provider."""
    start_time: DateTime
    scheduling_url: str
    end_time: DateTime | None = None

    def resolve_end(self, duration_minutes: int) -> DateTime:
        """Return the reported end, or start plus one event duration when absent."""
        if self.end_time is not None:
            return self.end_time
        return self.start_time.add(minutes=duration_minutes)


@dataclass(frozen=True)
class DaySummary:
    """Morning/afternoon availability for one weekday."""
    date: Date
    morning: bool = False
    afternoon: bool = False

    def to_dict(self) -> Dict[str, str]:
        return {
            "morning": "YES" if self.morning else "NO",
            "afternoon": "YES" if self.afternoon else "NO",
            "date": self.date.to_date_string(),
        }


@dataclass(frozen=True)
class BookableSlot:
    """A single duration-sized start time the caller can book."""
    time: str
    timestamp: DateTime
    scheduling_url: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "time": self.time,
            "timestamp": to_api_timestamp(self.timestamp),
            "scheduling_url": self.scheduling_url,
        }


@dataclass(frozen=True)
class EventType:
    """
    A bookable meeting template.

    ``id`` is the provider URI and is what callers pass back as the event type.
    """
    id: str
    name: str
    duration_minutes: int
    description: str = ""
    scheduling_url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "duration": self.duration_minutes,
            "description": self.description,
            "url": self.scheduling_url,
        }


def parse_instant(value: str) -> DateTime:
    """
    Parse an ISO-8601 timestamp from the provider into a pendulum DateTime.

    Raises:
        ValueError: If the value is not a full timestamp
    """
    dt = pendulum.parse(value)
    if isinstance(dt, DateTime):
        return dt
    raise ValueError(f"Could not parse datetime: {value}")

"""
Time sources for the window calculations.

Everything that depends on "now" receives a clock instead of calling
``pendulum.now()`` directly, so the calculations stay deterministic in tests.
"""

from dataclasses import dataclass
from typing import Dict, Protocol

import pendulum
from pendulum import DateTime

from .models import to_api_timestamp

CURRENT_TIME_FORMAT = "dddd, MMMM D, YYYY h:mm A"


class Clock(Protocol):
    """Protocol describing what the calculators need from a time source."""

    timezone: str

    def now(self) -> DateTime:
        """Return the current instant in the clock's timezone."""


class SystemClock:
    """Wall-clock time in a fixed IANA timezone."""

    def __init__(self, timezone: str = "UTC"):
        self.timezone = timezone

    def now(self) -> DateTime:
        return pendulum.now(self.timezone)


class FixedClock:
    """A clock frozen at one instant, viewed in ``timezone``."""

    def __init__(self, instant: DateTime, timezone: str = "UTC"):
        self.timezone = timezone
        self._instant = instant.in_timezone(self.timezone)

    def now(self) -> DateTime:
        return self._instant


@dataclass(frozen=True)
class CurrentTime:
    """The current instant as handed to the voice agent."""
    timestamp: str
    readable: str
    timezone: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "timestamp": self.timestamp,
            "readable": self.readable,
            "timezone": self.timezone,
        }


def current_time(clock: Clock) -> CurrentTime:
    """Snapshot the clock, e.g. 'Wednesday, May 15, 2024 10:00 AM'."""
    now = clock.now()
    return CurrentTime(
        timestamp=to_api_timestamp(now),
        readable=now.format(CURRENT_TIME_FORMAT, locale="en"),
        timezone=clock.timezone,
    )

"""
Half-day period bands used to bucket provider slots.

Bands are evaluated on the UTC hour of a slot's start time.
"""

from typing import Dict, Iterable, Tuple

from pendulum import DateTime

MORNING = "morning"
AFTERNOON = "afternoon"

# Hour ranges, start inclusive / end exclusive.
PERIOD_HOURS: Dict[str, Tuple[int, int]] = {
    MORNING: (5, 12),
    AFTERNOON: (12, 17),
}


def utc_hour(dt: DateTime) -> int:
    return dt.in_timezone("UTC").hour


def classify_hour(hour: int) -> str | None:
    """Return the period an hour falls into, or None outside both bands."""
    for period, (first, end) in PERIOD_HOURS.items():
        if first <= hour < end:
            return period
    return None


def hour_in_periods(hour: int, periods: Iterable[str]) -> bool:
    return classify_hour(hour) in set(periods)

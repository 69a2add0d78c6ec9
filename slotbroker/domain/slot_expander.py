"""
Expansion of provider availability into bookable start times.
"""

from typing import List, Sequence

from .exceptions import InvalidInputError
from .models import SLOT_TIME_FORMAT, BookableSlot, RawSlot
from .periods import AFTERNOON, PERIOD_HOURS, hour_in_periods, utc_hour

DEFAULT_PERIOD = AFTERNOON


def resolve_periods(period: str | None) -> List[str]:
    """
    Map a caller's period choice to the bands to keep.

    A missing period falls back to the afternoon band.

    Raises:
        InvalidInputError: If the period is not a known band
    """
    if period is None or period == "":
        return [DEFAULT_PERIOD]

    normalized = period.strip().lower() if isinstance(period, str) else None
    if normalized not in PERIOD_HOURS:
        options = " or ".join(f"'{name}'" for name in PERIOD_HOURS)
        raise InvalidInputError(f"Period must be {options}, got {period!r}.")
    return [normalized]


def expand(
    raw_slots: Sequence[RawSlot],
    period: str | None,
    event_duration_minutes: int,
) -> List[BookableSlot]:
    """
    Split provider slots of the requested period into event-sized start times.

    Algorithm:
    1. Keep slots whose UTC start hour falls in the period band
    2. Take each slot's end, or start + duration when the provider gave none
    3. Step through the span in duration increments; every increment starting
       before the end is emitted, including a final partial one
    4. Sort everything chronologically

    Raises:
        InvalidInputError: If the period is unknown or the duration is not positive
    """
    if isinstance(event_duration_minutes, bool) or not isinstance(event_duration_minutes, int):
        raise InvalidInputError(f"Event duration must be a whole number of minutes, got {event_duration_minutes!r}.")
    if event_duration_minutes <= 0:
        raise InvalidInputError(f"Event duration must be greater than zero, got {event_duration_minutes}.")

    periods = resolve_periods(period)
    bookable: List[BookableSlot] = []

    for slot in raw_slots:
        if not hour_in_periods(utc_hour(slot.start_time), periods):
            continue

        slot_end = slot.resolve_end(event_duration_minutes)
        current = slot.start_time.in_timezone("UTC")

        while current < slot_end:
            bookable.append(
                BookableSlot(
                    time=current.format(SLOT_TIME_FORMAT, locale="en"),
                    timestamp=current,
                    scheduling_url=slot.scheduling_url,
                )
            )
            current = current.add(minutes=event_duration_minutes)

    return sorted(bookable, key=lambda s: s.timestamp)

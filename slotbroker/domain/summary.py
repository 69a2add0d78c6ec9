"""
Weekly overview reduction.

Collapses raw provider slots into one morning/afternoon flag pair per weekday,
which is all the assistant needs to offer days before narrowing down to times.
"""

from dataclasses import replace
from typing import Dict, Sequence

from .models import DaySummary, RawSlot
from .periods import AFTERNOON, MORNING, classify_hour


def summarize(raw_slots: Sequence[RawSlot]) -> Dict[str, DaySummary]:
    """
    Summarize availability per weekday name.

    Weekday, date and hour are all taken in UTC. Slots outside the morning and
    afternoon bands still create the day entry but set neither flag. Two dates
    sharing a weekday name collapse into one entry that keeps the first date seen.
    """
    summary: Dict[str, DaySummary] = {}

    for slot in raw_slots:
        start = slot.start_time.in_timezone("UTC")
        day_name = start.format("dddd", locale="en")

        entry = summary.get(day_name)
        if entry is None:
            entry = DaySummary(date=start.date())

        period = classify_hour(start.hour)
        if period == MORNING:
            entry = replace(entry, morning=True)
        elif period == AFTERNOON:
            entry = replace(entry, afternoon=True)

        summary[day_name] = entry

    return summary

"""
Query window calculation.

Turns a caller's week offset or specific date into the time range that is sent
to the scheduling provider. The range never starts in the past for "today" or
the current week, and a same-day request is limited to working hours.
"""

from datetime import date, datetime
from typing import Any

import pendulum
from pendulum import Date, DateTime

from .clock import Clock
from .exceptions import InvalidInputError
from .models import DateRange, format_readable_date

DATE_FORMAT = "YYYY-MM-DD"


def _end_of_day(dt: DateTime) -> DateTime:
    # Millisecond precision matches what the provider accepts.
    return dt.set(hour=23, minute=59, second=59, microsecond=999000)


class WindowCalculator:
    """
    Computes provider query ranges relative to the clock's "now".

    Rules:
    1. Specific date, today: from max(now + safety buffer, workday start),
       never past workday end, until workday end
    2. Specific date, any other day: the whole calendar day
    3. Week offset 0: from now + scheduling buffer (but not before Monday)
       until Sunday 23:59:59.999 of the current week
    4. Week offset N >= 1: the Monday-Sunday week starting N - 1 weeks after
       the next Monday
    """

    def __init__(
        self,
        clock: Clock,
        workday_start_hour: int = 9,
        workday_end_hour: int = 17,
        safety_buffer_minutes: int = 5,
        scheduling_buffer_hours: int = 3,
    ):
        self.clock = clock
        self.workday_start_hour = workday_start_hour
        self.workday_end_hour = workday_end_hour
        self.safety_buffer_minutes = safety_buffer_minutes
        self.scheduling_buffer_hours = scheduling_buffer_hours

    @property
    def timezone(self) -> str:
        return self.clock.timezone

    def compute_range(
        self,
        week_offset: Any = None,
        specific_date: Any = None,
    ) -> DateRange:
        """
        Compute the query range for a week offset or a specific date.

        A specific date wins when both are given.

        Raises:
            InvalidInputError: If neither value is usable
        """
        if specific_date is not None and specific_date != "":
            return self._day_range(self.parse_date(specific_date))

        if week_offset is None or week_offset == "":
            raise InvalidInputError("Either a week offset or a specific date is required.")

        offset = self.parse_week_offset(week_offset)
        if offset == 0:
            return self._current_week_range()
        return self._future_week_range(offset)

    def parse_date(self, value: Any) -> Date:
        """
        Interpret a caller-supplied date in the clock's timezone.

        Accepts 'YYYY-MM-DD' strings, full ISO timestamps and date/datetime objects.
        """
        if isinstance(value, datetime):
            return pendulum.instance(value).in_timezone(self.timezone).date()

        if isinstance(value, date):
            return pendulum.date(value.year, value.month, value.day)

        if not isinstance(value, str):
            raise InvalidInputError(f"Date must be a string in {DATE_FORMAT} format, got {value!r}.")

        text = value.strip()
        try:
            if len(text) == len("2024-01-01"):
                return pendulum.from_format(text, DATE_FORMAT, tz=self.timezone).date()
            parsed = pendulum.parse(text, tz=self.timezone)
        except (ValueError, TypeError) as exc:
            raise InvalidInputError(f"'{value}' is not a valid date. Use the {DATE_FORMAT} format.") from exc

        if not isinstance(parsed, DateTime):
            raise InvalidInputError(f"'{value}' is not a valid date. Use the {DATE_FORMAT} format.")
        return parsed.in_timezone(self.timezone).date()

    @staticmethod
    def parse_week_offset(value: Any) -> int:
        """Accept non-negative integers, including digit strings sent by the voice platform."""
        if isinstance(value, bool):
            raise InvalidInputError(f"Week offset must be a whole number, got {value!r}.")

        if isinstance(value, str):
            text = value.strip()
            if not text.isdecimal():
                raise InvalidInputError(f"Week offset must be a whole number, got '{value}'.")
            return int(text)

        if not isinstance(value, int):
            raise InvalidInputError(f"Week offset must be a whole number, got {value!r}.")

        if value < 0:
            raise InvalidInputError(f"Week offset cannot be negative, got {value}.")

        return value

    def _day_range(self, day: Date) -> DateRange:
        now = self.clock.now()
        day_start = pendulum.datetime(day.year, day.month, day.day, tz=self.timezone)
        label = format_readable_date(day_start)

        if day != now.date():
            # Past dates are passed through unchanged.
            return DateRange(
                start=day_start,
                end=_end_of_day(day_start),
                readable_start=label,
                readable_end=label,
            )

        workday_start = day_start.set(hour=self.workday_start_hour)
        workday_end = day_start.set(hour=self.workday_end_hour)

        start = max(now.add(minutes=self.safety_buffer_minutes), workday_start)
        start = min(start, workday_end)

        return DateRange(
            start=start,
            end=workday_end,
            readable_start=label,
            readable_end=label,
        )

    def _current_week_range(self) -> DateRange:
        now = self.clock.now()
        week_start = now.start_of("week")
        week_end = _end_of_day(week_start.add(days=6))

        start = max(now, week_start)
        earliest = now.add(hours=self.scheduling_buffer_hours)
        if start < earliest:
            start = earliest
        start = min(start, week_end)
        if start < now:
            # now is inside the final millisecond of Sunday
            start = now

        return DateRange(
            start=start,
            end=max(week_end, now),
            readable_start=format_readable_date(week_start),
            readable_end=format_readable_date(week_end),
        )

    def _future_week_range(self, week_offset: int) -> DateRange:
        now = self.clock.now()
        week_start = now.next(pendulum.MONDAY).start_of("day")
        if week_offset > 1:
            week_start = week_start.add(weeks=week_offset - 1)
        week_end = _end_of_day(week_start.add(days=6))

        return DateRange(
            start=week_start,
            end=week_end,
            readable_start=format_readable_date(week_start),
            readable_end=format_readable_date(week_end),
        )

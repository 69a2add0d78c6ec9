"""
Mock Calendly client for running without an API token.
"""

from typing import Any, Dict, List, Sequence, Tuple

from pendulum import DateTime

from ..domain.models import EventType, RawSlot

DEFAULT_SLOT_TIMES: Tuple[Tuple[int, int], ...] = (
    (9, 0),
    (9, 30),
    (11, 15),
    (14, 0),
    (15, 30),
)

DEFAULT_EVENT_TYPES: Tuple[EventType, ...] = (
    EventType(
        id="https://api.calendly.com/event_types/MOCK-30",
        name="30 Minute Meeting",
        duration_minutes=30,
        description="A short introductory call.",
        scheduling_url="https://calendly.com/mock-user/30min",
    ),
    EventType(
        id="https://api.calendly.com/event_types/MOCK-60",
        name="60 Minute Consultation",
        duration_minutes=60,
        description="A full consultation.",
        scheduling_url="https://calendly.com/mock-user/60min",
    ),
)


class MockCalendlyClient:
    """
    Mock client that simulates Calendly API responses.

    Every weekday inside the requested window gets slots at the configured
    UTC wall-clock times, so the output follows the window instead of a fixed
    calendar.
    """

    def __init__(
        self,
        slot_times: Sequence[Tuple[int, int]] = DEFAULT_SLOT_TIMES,
        event_types: Sequence[EventType] = DEFAULT_EVENT_TYPES,
        exclude_weekdays: Sequence[int] = (5, 6),
    ):
        """
        Initialize the mock client.

        Args:
            slot_times: (hour, minute) pairs in UTC offered on each open day
            event_types: Event types returned by the listing
            exclude_weekdays: Days without slots (0=Monday, 6=Sunday)
        """
        self.slot_times = list(slot_times)
        self.event_types = list(event_types)
        self.exclude_weekdays = list(exclude_weekdays)

    def get_available_times(
        self,
        event_type_id: str,
        start_time: DateTime,
        end_time: DateTime
    ) -> List[RawSlot]:
        """Generate slots between start_time and end_time (inclusive)."""
        slug = event_type_id.rstrip("/").rsplit("/", 1)[-1].lower()
        slots: List[RawSlot] = []

        start_utc = start_time.in_timezone("UTC")
        end_utc = end_time.in_timezone("UTC")
        current = start_utc.start_of("day")

        while current <= end_utc:
            if current.weekday() not in self.exclude_weekdays:
                for hour, minute in self.slot_times:
                    slot_start = current.set(hour=hour, minute=minute)
                    if start_utc <= slot_start <= end_utc:
                        slots.append(
                            RawSlot(
                                start_time=slot_start,
                                scheduling_url=(
                                    f"https://calendly.com/mock-user/{slug}/"
                                    f"{slot_start.format('YYYY-MM-DDTHH:mm:ss[Z]')}"
                                ),
                            )
                        )
            current = current.add(days=1)

        return slots

    def get_event_types(self) -> List[EventType]:
        return list(self.event_types)

    def test_connection(self) -> Dict[str, Any]:
        """
        Mock connection test.

        Returns:
            Mock user resource
        """
        return {
            "name": "Mock User",
            "email": "mock.user@example.com",
            "uri": "https://api.calendly.com/users/MOCK",
            "timezone": "UTC",
        }

"""
Shared fixtures: a stub scheduling client and frozen clocks.
"""

from typing import Dict, List

import pendulum
import pytest

from slotbroker.domain.clock import FixedClock
from slotbroker.domain.exceptions import UpstreamUnavailableError
from slotbroker.domain.models import EventType, RawSlot
from slotbroker.domain.window_calculator import WindowCalculator
from slotbroker.services.booking_service import BookingService


class StubSchedulingClient:
    """Minimal stub matching SchedulingClientProtocol."""

    def __init__(
        self,
        slots: List[RawSlot] | None = None,
        event_types: List[EventType] | None = None,
        fail: bool = False,
    ):
        self._slots = slots or []
        self._event_types = event_types or []
        self._fail = fail
        self.availability_calls: List[Dict[str, object]] = []
        self.event_type_calls = 0

    def get_available_times(self, event_type_id, start_time, end_time):
        self.availability_calls.append(
            {
                "event_type_id": event_type_id,
                "start": start_time,
                "end": end_time,
            }
        )
        if self._fail:
            raise UpstreamUnavailableError("Failed to fetch availability")
        return list(self._slots)

    def get_event_types(self):
        self.event_type_calls += 1
        if self._fail:
            raise UpstreamUnavailableError("Failed to fetch event types")
        return list(self._event_types)

    def test_connection(self):
        return {"name": "Stub"}


@pytest.fixture
def wednesday_clock() -> FixedClock:
    """Wednesday 2024-05-15 10:00 UTC."""
    return FixedClock(pendulum.parse("2024-05-15T10:00:00Z"))


@pytest.fixture
def thirty_minute_event() -> EventType:
    return EventType(
        id="https://api.calendly.com/event_types/AAA",
        name="30 Minute Meeting",
        duration_minutes=30,
        scheduling_url="https://calendly.com/acme/30min",
    )


@pytest.fixture
def make_service(wednesday_clock):
    """Build a BookingService around a StubSchedulingClient."""

    def _make(**client_kwargs):
        client = StubSchedulingClient(**client_kwargs)
        service = BookingService(
            client=client,
            window_calculator=WindowCalculator(clock=wednesday_clock),
        )
        return service, client

    return _make

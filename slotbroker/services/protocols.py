"""
Protocols describing the collaborators the services depend on.
"""

from typing import Any, Dict, List, Protocol

from pendulum import DateTime

from ..domain.models import EventType, RawSlot


class SchedulingClientProtocol(Protocol):
    """Protocol describing the scheduling provider behaviour needed by the services."""

    def get_available_times(
        self,
        event_type_id: str,
        start_time: DateTime,
        end_time: DateTime,
    ) -> List[RawSlot]:
        """Return the provider's open slots inside the window."""

    def get_event_types(self) -> List[EventType]:
        """Return the bookable event types."""

    def test_connection(self) -> Dict[str, Any]:
        """Return the authenticated account's profile."""

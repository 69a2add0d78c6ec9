"""
Event type lookup for a single request.
"""

from typing import List

from ..domain.models import EventType
from .protocols import SchedulingClientProtocol


class EventTypeCatalog:
    """
    Lists the provider's event types, fetching them at most once.

    Create one catalog per request; nothing is shared between requests.
    """

    def __init__(self, client: SchedulingClientProtocol) -> None:
        self._client = client
        self._event_types: List[EventType] | None = None

    def list_event_types(self) -> List[EventType]:
        if self._event_types is None:
            self._event_types = list(self._client.get_event_types())
        return list(self._event_types)

    def find(self, event_type_id: str) -> EventType | None:
        """Return the event type whose id (provider URI) matches, if listed."""
        for event_type in self.list_event_types():
            if event_type.id == event_type_id:
                return event_type
        return None

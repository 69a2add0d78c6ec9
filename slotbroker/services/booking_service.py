"""
Application services answering the voice agent's availability questions.

The service validates caller input, computes the query window via the
domain-level ``WindowCalculator``, fetches raw slots through a scheduling
client adapter and hands them to the pure reducers. The client dependency is
expressed as a protocol so tests can plug in a stub.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from ..domain.exceptions import InvalidInputError
from ..domain.models import BookableSlot, DateRange, DaySummary, EventType
from ..domain.slot_expander import expand, resolve_periods
from ..domain.summary import summarize
from ..domain.window_calculator import WindowCalculator
from .event_types import EventTypeCatalog
from .protocols import SchedulingClientProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AvailabilityOverview:
    """Weekly overview returned by ``check_availability``."""
    summary: Dict[str, DaySummary]
    date_range: DateRange

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": {day: entry.to_dict() for day, entry in self.summary.items()},
            "readable_range": self.date_range.readable(),
        }


class BookingService:
    """
    Orchestrates window calculation, availability retrieval and reduction.

    Provider failures surface as ``UpstreamUnavailableError``; nothing is retried.
    """

    def __init__(
        self,
        client: SchedulingClientProtocol,
        window_calculator: WindowCalculator,
        default_duration_minutes: int = 30,
    ) -> None:
        self._client = client
        self._window_calculator = window_calculator
        self._default_duration_minutes = default_duration_minutes

    def check_availability(
        self,
        event_type_id: Any,
        week_offset: Any = 0,
    ) -> AvailabilityOverview:
        """Summarize which days of a week have morning/afternoon openings."""
        event_type_id = self._require_event_type_id(event_type_id)
        if week_offset is None:
            week_offset = 0

        date_range = self._window_calculator.compute_range(week_offset=week_offset)
        raw_slots = self._client.get_available_times(
            event_type_id=event_type_id,
            start_time=date_range.start,
            end_time=date_range.end,
        )

        return AvailabilityOverview(summary=summarize(raw_slots), date_range=date_range)

    def check_times(
        self,
        date: Any,
        event_type_id: Any,
        period: str | None = None,
    ) -> List[BookableSlot]:
        """List bookable start times on one day, optionally limited to a period."""
        event_type_id = self._require_event_type_id(event_type_id)
        if date is None or date == "":
            raise InvalidInputError("A date is required to look up times.")
        # Validate before any network round trip.
        resolve_periods(period)

        date_range = self._window_calculator.compute_range(specific_date=date)
        duration = self._resolve_duration(EventTypeCatalog(self._client), event_type_id)

        raw_slots = self._client.get_available_times(
            event_type_id=event_type_id,
            start_time=date_range.start,
            end_time=date_range.end,
        )

        return expand(raw_slots, period, duration)

    def list_event_types(self) -> List[EventType]:
        return EventTypeCatalog(self._client).list_event_types()

    def _resolve_duration(self, catalog: EventTypeCatalog, event_type_id: str) -> int:
        event_type = catalog.find(event_type_id)
        if event_type is None or event_type.duration_minutes <= 0:
            logger.warning(
                "Event type %s not found in catalog, using %d minute slots",
                event_type_id,
                self._default_duration_minutes,
            )
            return self._default_duration_minutes
        return event_type.duration_minutes

    @staticmethod
    def _require_event_type_id(event_type_id: Any) -> str:
        if not isinstance(event_type_id, str) or not event_type_id.strip():
            raise InvalidInputError("An event type is required.")
        return event_type_id.strip()

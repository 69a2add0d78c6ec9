"""
Translation of voice-agent function calls into service calls.

Results and failures are rendered as plain dicts that the hosting web layer
can return as JSON unchanged.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping

from ..domain.clock import Clock, current_time
from ..domain.exceptions import InvalidInputError, UpstreamUnavailableError
from .booking_service import BookingService

logger = logging.getLogger(__name__)

UPSTREAM_MESSAGE = (
    "I couldn't reach the calendar just now. Please try again in a moment."
)


class FunctionCallHandler:
    """
    Dispatches function calls by name.

    Supported calls:
        checkAvailability {weekOffset?, eventTypeUrl}
        checkTimes        {date, eventTypeUrl, period?}
        listEventTypes    {}
        getCurrentTime    {}
    """

    def __init__(self, service: BookingService, clock: Clock) -> None:
        self._service = service
        self._clock = clock
        self._handlers: Dict[str, Callable[[Mapping[str, Any]], Dict[str, Any]]] = {
            "checkAvailability": self._check_availability,
            "checkTimes": self._check_times,
            "listEventTypes": self._list_event_types,
            "getCurrentTime": self._get_current_time,
        }

    @property
    def function_names(self) -> list[str]:
        return list(self._handlers)

    def handle(self, name: str, parameters: Mapping[str, Any] | None = None) -> Dict[str, Any]:
        """Run one function call and return its conversational response."""
        handler = self._handlers.get(name)
        params = parameters or {}

        try:
            if handler is None:
                raise InvalidInputError(f"Unknown function '{name}'.")
            if not isinstance(params, Mapping):
                raise InvalidInputError("Function parameters must be an object.")
            return handler(params)

        except InvalidInputError as e:
            logger.info("Rejected %s call: %s", name, e)
            return {"success": False, "error": "invalid_input", "message": str(e)}

        except UpstreamUnavailableError as e:
            logger.error("Scheduling provider failed during %s: %s", name, e.__cause__ or e)
            return {"success": False, "error": "upstream_unavailable", "message": UPSTREAM_MESSAGE}

    def _check_availability(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        overview = self._service.check_availability(
            event_type_id=_event_type_param(params),
            week_offset=params.get("weekOffset", 0),
        )
        response: Dict[str, Any] = {"success": True, "data": overview.to_dict()}
        if not overview.summary:
            response["message"] = "There are no open times in that week."
        return response

    def _check_times(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        slots = self._service.check_times(
            date=params.get("date"),
            event_type_id=_event_type_param(params),
            period=params.get("period"),
        )
        response: Dict[str, Any] = {
            "success": True,
            "data": {"slots": [slot.to_dict() for slot in slots]},
        }
        if not slots:
            response["message"] = "There are no open times for that day and period."
        return response

    def _list_event_types(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        event_types = self._service.list_event_types()
        return {
            "success": True,
            "data": {"event_types": [event_type.to_dict() for event_type in event_types]},
        }

    def _get_current_time(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        return {"success": True, "data": current_time(self._clock).to_dict()}


def _event_type_param(params: Mapping[str, Any]) -> Any:
    return params.get("eventTypeUrl") or params.get("eventType")

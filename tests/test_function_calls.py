"""
Tests for function-call dispatch.
"""

import pendulum

from slotbroker.domain.models import RawSlot
from slotbroker.services.function_calls import UPSTREAM_MESSAGE, FunctionCallHandler

EVENT_URI = "https://api.calendly.com/event_types/AAA"


def _handler(make_service, clock, **client_kwargs):
    service, client = make_service(**client_kwargs)
    return FunctionCallHandler(service, clock), client


def test_check_availability_response(make_service, wednesday_clock):
    handler, _ = _handler(
        make_service,
        wednesday_clock,
        slots=[RawSlot(start_time=pendulum.parse("2024-05-16T09:00:00Z"), scheduling_url="u")],
    )

    result = handler.handle("checkAvailability", {"eventTypeUrl": EVENT_URI, "weekOffset": 0})

    assert result["success"] is True
    assert result["data"]["summary"]["Thursday"]["morning"] == "YES"
    assert result["data"]["readable_range"]["start"] == "Monday, May 13, 2024"
    assert "message" not in result


def test_check_times_response(make_service, wednesday_clock, thirty_minute_event):
    handler, _ = _handler(
        make_service,
        wednesday_clock,
        slots=[RawSlot(start_time=pendulum.parse("2024-05-17T09:15:00Z"), scheduling_url="https://calendly.com/x")],
        event_types=[thirty_minute_event],
    )

    result = handler.handle(
        "checkTimes",
        {"date": "2024-05-17", "eventTypeUrl": thirty_minute_event.id, "period": "morning"},
    )

    assert result == {
        "success": True,
        "data": {
            "slots": [
                {
                    "time": "9:15 AM",
                    "timestamp": "2024-05-17T09:15:00.000Z",
                    "scheduling_url": "https://calendly.com/x",
                }
            ]
        },
    }


def test_empty_results_are_not_errors(make_service, wednesday_clock):
    handler, _ = _handler(make_service, wednesday_clock)

    result = handler.handle("checkTimes", {"date": "2024-05-17", "eventTypeUrl": EVENT_URI})

    assert result["success"] is True
    assert result["data"]["slots"] == []
    assert "no open times" in result["message"]


def test_invalid_input_is_explained(make_service, wednesday_clock):
    handler, client = _handler(make_service, wednesday_clock)

    result = handler.handle("checkTimes", {"date": "tomorrow-ish", "eventTypeUrl": EVENT_URI})

    assert result["success"] is False
    assert result["error"] == "invalid_input"
    assert "tomorrow-ish" in result["message"]
    assert client.availability_calls == []


def test_missing_event_type_is_invalid(make_service, wednesday_clock):
    handler, _ = _handler(make_service, wednesday_clock)

    result = handler.handle("checkAvailability", {"weekOffset": 1})

    assert result["error"] == "invalid_input"


def test_superscript_week_offset_is_invalid(make_service, wednesday_clock):
    handler, client = _handler(make_service, wednesday_clock)

    result = handler.handle("checkAvailability", {"eventTypeUrl": EVENT_URI, "weekOffset": "²"})

    assert result["success"] is False
    assert result["error"] == "invalid_input"
    assert client.availability_calls == []


def test_upstream_failure_hides_detail(make_service, wednesday_clock):
    handler, _ = _handler(make_service, wednesday_clock, fail=True)

    result = handler.handle("checkAvailability", {"eventTypeUrl": EVENT_URI})

    assert result == {
        "success": False,
        "error": "upstream_unavailable",
        "message": UPSTREAM_MESSAGE,
    }


def test_unknown_function(make_service, wednesday_clock):
    handler, _ = _handler(make_service, wednesday_clock)

    result = handler.handle("sendBookingSMS", {})

    assert result["error"] == "invalid_input"
    assert "sendBookingSMS" in result["message"]


def test_non_mapping_parameters(make_service, wednesday_clock):
    handler, _ = _handler(make_service, wednesday_clock)

    result = handler.handle("checkAvailability", ["not", "a", "mapping"])

    assert result["error"] == "invalid_input"


def test_list_event_types(make_service, wednesday_clock, thirty_minute_event):
    handler, _ = _handler(make_service, wednesday_clock, event_types=[thirty_minute_event])

    result = handler.handle("listEventTypes")

    assert result["data"]["event_types"][0]["id"] == thirty_minute_event.id
    assert result["data"]["event_types"][0]["duration"] == 30


def test_get_current_time(make_service, wednesday_clock):
    handler, _ = _handler(make_service, wednesday_clock)

    result = handler.handle("getCurrentTime", {})

    assert result["data"] == {
        "timestamp": "2024-05-15T10:00:00.000Z",
        "readable": "Wednesday, May 15, 2024 10:00 AM",
        "timezone": "UTC",
    }


def test_function_names(make_service, wednesday_clock):
    handler, _ = _handler(make_service, wednesday_clock)

    assert handler.function_names == ["checkAvailability", "checkTimes", "listEventTypes", "getCurrentTime"]

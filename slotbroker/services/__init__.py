"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .booking_service import AvailabilityOverview, BookingService
from .event_types import EventTypeCatalog
from .function_calls import FunctionCallHandler
from .protocols import SchedulingClientProtocol

__all__ = [
    "AvailabilityOverview",
    "BookingService",
    "EventTypeCatalog",
    "FunctionCallHandler",
    "SchedulingClientProtocol",
]

"""
Domain layer - Pure business logic without external dependencies.
"""

from .clock import Clock, CurrentTime, FixedClock, SystemClock, current_time
from .exceptions import (
    ConfigurationError,
    InvalidInputError,
    SlotBrokerError,
    UpstreamUnavailableError,
)
from .models import BookableSlot, DateRange, DaySummary, EventType, RawSlot
from .slot_expander import expand
from .summary import summarize
from .window_calculator import WindowCalculator

__all__ = [
    "BookableSlot",
    "Clock",
    "ConfigurationError",
    "CurrentTime",
    "DateRange",
    "DaySummary",
    "EventType",
    "FixedClock",
    "InvalidInputError",
    "RawSlot",
    "SlotBrokerError",
    "SystemClock",
    "UpstreamUnavailableError",
    "WindowCalculator",
    "current_time",
    "expand",
    "summarize",
]

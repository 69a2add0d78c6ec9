"""
Domain-specific exception hierarchy for the slotbroker application.
"""


class SlotBrokerError(Exception):
    """Base class for all application-level errors."""


class InvalidInputError(SlotBrokerError):
    """Raised when caller-supplied parameters are missing or malformed."""


class UpstreamUnavailableError(SlotBrokerError):
    """Raised when the scheduling provider cannot be reached or answers with an error."""


class ConfigurationError(SlotBrokerError):
    """Raised when the application cannot be wired from its configuration."""

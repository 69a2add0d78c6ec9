"""
Adapters layer - External integrations (Calendly API).
"""

from .calendly_client import CalendlyClient
from .mock_calendly_client import MockCalendlyClient

__all__ = ["CalendlyClient", "MockCalendlyClient"]

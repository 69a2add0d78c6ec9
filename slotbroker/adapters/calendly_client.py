"""
Calendly API client for fetching availability and event types.
"""

import logging
from typing import Any, Dict, List

import requests
from pendulum import DateTime

from ..domain.exceptions import UpstreamUnavailableError
from ..domain.models import EventType, RawSlot, parse_instant, to_api_timestamp

logger = logging.getLogger(__name__)


class CalendlyClient:
    """
    Client for the Calendly v2 REST API.

    Built once at startup from configuration and passed to the services; the
    bearer-token headers are prepared here and reused for every request.
    """

    DEFAULT_BASE_URL = "https://api.calendly.com"

    def __init__(
        self,
        api_token: str,
        base_url: str = DEFAULT_BASE_URL,
        user_uri: str | None = None,
        timeout: float = 30,
    ):
        """
        Initialize the Calendly client.

        Args:
            api_token: Personal access token or OAuth access token
            base_url: API root, without trailing slash
            user_uri: Optional user URI used to scope the event type listing
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.user_uri = user_uri
        self.timeout = timeout
        self.headers = {
            "Authorization": f"Bearer {api_token}",
            "Content-Type": "application/json"
        }

    def get_available_times(
        self,
        event_type_id: str,
        start_time: DateTime,
        end_time: DateTime
    ) -> List[RawSlot]:
        """
        Get the open slots of one event type inside a time window.

        Args:
            event_type_id: Event type URI
            start_time: Start of the time window
            end_time: End of the time window

        Returns:
            List of RawSlot objects as reported by the provider

        Raises:
            UpstreamUnavailableError: If the API call fails
        """
        logger.info("Fetching availability for event type %s", event_type_id)
        logger.debug(
            "Time range: %s to %s",
            to_api_timestamp(start_time),
            to_api_timestamp(end_time)
        )

        data = self._get(
            "/event_type_available_times",
            params={
                "event_type": event_type_id,
                "start_time": to_api_timestamp(start_time),
                "end_time": to_api_timestamp(end_time),
            },
            action="fetch availability"
        )

        slots = self._parse_available_times(data)
        logger.info("Received %d available time slots", len(slots))
        return slots

    def get_event_types(self) -> List[EventType]:
        """
        List the bookable event types.

        Raises:
            UpstreamUnavailableError: If the API call fails
        """
        params = {"user": self.user_uri} if self.user_uri else None
        data = self._get("/event_types", params=params, action="fetch event types")
        return self._parse_event_types(data)

    def test_connection(self) -> Dict[str, Any]:
        """
        Test the connection and authentication by fetching the current user.

        Returns:
            User resource data

        Raises:
            UpstreamUnavailableError: If connection test fails
        """
        data = self._get("/users/me", action="test connection")
        return data.get("resource", data)

    def _get(
        self,
        path: str,
        *,
        action: str,
        params: Dict[str, Any] | None = None
    ) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"

        try:
            response = requests.get(
                url,
                headers=self.headers,
                params=params,
                timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()

        except requests.exceptions.HTTPError as e:
            detail = e.response.text if e.response is not None else ""
            logger.error("Calendly request to %s failed: %s %s", path, e, detail)
            raise UpstreamUnavailableError(f"Failed to {action}") from e

        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error("Calendly request to %s failed: %s", path, e)
            raise UpstreamUnavailableError(f"Failed to {action}") from e

        if not isinstance(data, dict):
            logger.error("Calendly request to %s returned %s instead of an object", path, type(data).__name__)
            raise UpstreamUnavailableError(f"Failed to {action}")

        return data

    def _parse_available_times(self, response_data: Dict[str, Any]) -> List[RawSlot]:
        """
        Parse the available-times response into our domain model.

        Response format:
        {
            "collection": [
                {
                    "status": "available",
                    "invitees_remaining": 1,
                    "start_time": "2024-05-15T09:15:00.000000Z",
                    "scheduling_url": "https://calendly.com/acme/30min/2024-05-15T09:15:00Z"
                }
            ]
        }
        """
        slots: List[RawSlot] = []

        for item in response_data.get("collection") or []:
            try:
                end_raw = item.get("end_time")
                slots.append(
                    RawSlot(
                        start_time=parse_instant(item["start_time"]),
                        end_time=parse_instant(end_raw) if end_raw else None,
                        scheduling_url=item.get("scheduling_url", ""),
                    )
                )

            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.warning("Could not parse availability slot: %s", e)
                continue

        return slots

    def _parse_event_types(self, response_data: Dict[str, Any]) -> List[EventType]:
        """Project the event type listing onto EventType, renaming fields only."""
        event_types: List[EventType] = []

        for item in response_data.get("collection") or []:
            try:
                event_types.append(
                    EventType(
                        id=item["uri"],
                        name=item.get("name", ""),
                        duration_minutes=int(item["duration"]),
                        description=item.get("description_plain") or "",
                        scheduling_url=item.get("scheduling_url", ""),
                    )
                )

            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.warning("Could not parse event type: %s", e)
                continue

        return event_types

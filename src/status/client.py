"""HTTP client for the remote event-management API.

The console owns no event data. Listing and deletion are forwarded to the
events API configured by ``EVENTS_API_BASE_URL``:

- ``GET {base}/api/getevents?{query}`` returns ``{"Data": [...], "TotalRecords": n}``
- ``DELETE {base}/api/deleteevent/{id}`` returns a bare status, with an error text body on failure
"""

import threading
import time
from uuid import UUID

import httpx
import structlog
from django.conf import settings
from pydantic import ValidationError

from status.schema import EventsPage

logger = structlog.get_logger(__name__)

GET_EVENTS_PATH = "/api/getevents"
DELETE_EVENT_PATH = "/api/deleteevent/{event_id}"


class EventsApiError(Exception):
    """Raised when the events API cannot be reached or answers with an error.

    Attributes:
        status_code: HTTP status code from the API, if a response was received.
        body: Response body text, if a response was received.
    """

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None) -> None:
        """Initialize the error.

        Args:
            message: Error message describing what went wrong.
            status_code: HTTP status code from the API, if available.
            body: Response body text, if available.
        """
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class EventsApiClient:
    """Synchronous client for the events API.

    A single ``httpx.Client`` is kept open and reused for every request so
    connections to the API are pooled across requests.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        connect_timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Root URL of the events API. Defaults to ``EVENTS_API_BASE_URL``.
            timeout: Overall timeout in seconds. Defaults to ``EVENTS_API_TIMEOUT``.
            connect_timeout: Connect timeout in seconds. Defaults to ``EVENTS_API_CONNECT_TIMEOUT``.
            transport: Optional httpx transport, used to stub the API in tests.
        """
        base = settings.EVENTS_API_BASE_URL if base_url is None else base_url
        self.base_url = base.rstrip("/")
        self._client = httpx.Client(
            timeout=httpx.Timeout(
                timeout if timeout is not None else settings.EVENTS_API_TIMEOUT,
                connect=connect_timeout if connect_timeout is not None else settings.EVENTS_API_CONNECT_TIMEOUT,
            ),
            transport=transport,
        )

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._client.close()

    def _send(self, method: str, url: str) -> httpx.Response:
        started = time.monotonic()
        try:
            response = self._client.request(method, url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error("events_api_unreachable", method=method, url=url, error=str(e))
            raise EventsApiError(f"Events API request failed: {e}") from e

        logger.info(
            "events_api_request",
            method=method,
            url=url,
            status_code=response.status_code,
            elapsed_ms=round((time.monotonic() - started) * 1000, 1),
        )
        return response

    def get_events(self, query: str) -> EventsPage:
        """Fetch one page of events.

        Args:
            query: Pre-encoded query string, without the leading ``?``.

        Returns:
            The parsed page of events.

        Raises:
            EventsApiError: On transport failure, a non-success status, or an unreadable body.
        """
        response = self._send("GET", f"{self.base_url}{GET_EVENTS_PATH}?{query}")
        if not response.is_success:
            raise EventsApiError(
                f"Events API returned {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise EventsApiError(f"Events API returned invalid JSON: {e}", status_code=response.status_code) from e

        if payload is None:
            return EventsPage()
        try:
            return EventsPage.model_validate(payload)
        except ValidationError as e:
            raise EventsApiError(
                f"Events API returned an unexpected payload: {e}", status_code=response.status_code
            ) from e

    def delete_event(self, event_id: UUID) -> httpx.Response:
        """Ask the API to delete an event.

        The response is returned as-is; callers decide how to report a failure status.

        Raises:
            EventsApiError: If the API could not be reached.
        """
        return self._send("DELETE", f"{self.base_url}{DELETE_EVENT_PATH.format(event_id=event_id)}")


_events_api_client: EventsApiClient | None = None
_events_api_client_lock = threading.Lock()


def get_events_api_client() -> EventsApiClient:
    """Get the events API client singleton.

    Returns:
        The shared EventsApiClient instance.
    """
    global _events_api_client
    api_client = _events_api_client
    if api_client is None:
        with _events_api_client_lock:
            if _events_api_client is None:
                _events_api_client = EventsApiClient()
            api_client = _events_api_client
    return api_client


def reset_events_api_client() -> None:
    """Close and drop the shared client so the next call rebuilds it from settings."""
    global _events_api_client
    with _events_api_client_lock:
        if _events_api_client is not None:
            _events_api_client.close()
        _events_api_client = None

"""
Shared fixtures: a stubbed events API behind the process-wide client.
"""

import typing as t
from collections.abc import Callable, Generator

import httpx
import pytest

import status.client
from status.client import EventsApiClient

EVENTS_API_BASE_URL = "http://events.test"

Handler = Callable[[httpx.Request], httpx.Response]


class EventsApiStub:
    """Records requests sent to the events API and answers with a configurable handler."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler: Handler = lambda request: httpx.Response(200, json={"Data": [], "TotalRecords": 0})

    def respond_with(self, handler: Handler) -> None:
        """Replace the handler used for subsequent requests."""
        self.handler = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture(autouse=True)
def events_api_settings(settings: t.Any) -> Generator[None, None, None]:
    """Point the console at a fake events API and drop any cached client."""
    settings.EVENTS_API_BASE_URL = EVENTS_API_BASE_URL
    status.client.reset_events_api_client()
    yield
    status.client.reset_events_api_client()


@pytest.fixture
def events_api(monkeypatch: pytest.MonkeyPatch) -> EventsApiStub:
    """Install an EventsApiClient backed by an in-memory transport as the shared client."""
    stub = EventsApiStub()
    client = EventsApiClient(base_url=EVENTS_API_BASE_URL, transport=httpx.MockTransport(stub))
    monkeypatch.setattr(status.client, "_events_api_client", client)
    return stub

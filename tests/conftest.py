"""Shared test fixtures for all tests."""

from collections.abc import Callable

import httpx
import pytest
import pytest_asyncio

from config.settings import DouyinSettings
from douyin_module import DouyinContext, HTTPTransport, StaticTokenProvider, VideoClient
from tests.fixtures.factories import ACCESS_TOKEN, BASE_URL, OPEN_ID


class RecordingHandler:
    """httpx.MockTransport handler replaying queued responses and recording requests."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response | Exception | Callable[[httpx.Request], httpx.Response]] = []

    def queue(self, *responses) -> None:
        self.responses.extend(responses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url.path}")

        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(request)
        return response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def douyin_settings():
    """Douyin settings pointing to a test host."""
    return DouyinSettings(base_url=BASE_URL)


@pytest.fixture
def token_provider():
    """Token provider knowing the test open id."""
    return StaticTokenProvider({OPEN_ID: ACCESS_TOKEN})


@pytest.fixture
def http_handler():
    """Recording mock HTTP handler."""
    return RecordingHandler()


@pytest_asyncio.fixture
async def douyin_context(token_provider, http_handler, douyin_settings):
    """Context whose transport is routed to the mock handler."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(http_handler))
    transport = HTTPTransport.from_settings(douyin_settings, client=client)

    async with DouyinContext(token_provider, transport=transport, settings=douyin_settings) as context:
        yield context


@pytest.fixture
def video_client(douyin_context):
    """VideoClient bound to the mocked context."""
    return VideoClient(douyin_context)

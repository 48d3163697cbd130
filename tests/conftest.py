from collections.abc import Callable

import httpx
import pytest

from mediumpy import Medium, set_logging_level

API_KEY = "test-rapidapi-key"


@pytest.fixture
def sent_requests() -> list[httpx.Request]:
    """Requests received by the mock transport, in order."""
    return []


@pytest.fixture
def make_medium(sent_requests) -> Callable[[Callable], Medium]:
    """
    Build a Medium client whose HTTP client is backed by `httpx.MockTransport`.

    The handler receives each `httpx.Request` and returns an `httpx.Response`.
    """

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> Medium:
        def recording_handler(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            return handler(request)

        medium = Medium(api_key=API_KEY)
        medium.client = httpx.AsyncClient(
            transport=httpx.MockTransport(recording_handler)
        )
        return medium

    return factory


@pytest.fixture
def log_messages():
    """Capture all mediumpy log messages down to TRACE."""
    messages: list[str] = []
    set_logging_level("TRACE", sink=messages.append)
    yield messages
    set_logging_level("WARNING")

"""
Pytest configuration and fixtures
"""

import pytest

from oauth_http import ClientConfig, HttpRequestExecutor
from oauth_http.exceptions import TransportFailure
from oauth_http.http.adapter import Transport, TransportRequest

TOKEN_URL = "https://api.example.com/token"


class DummyTransport(Transport):
    """Records requests instead of sending them."""

    def __init__(self, response_body: str = '{"access_token":"abc"}', failure=None):
        self.requests = []
        self.response_body = response_body
        self.failure = failure

    @property
    def last_request(self) -> TransportRequest:
        return self.requests[-1]

    def send(self, request: TransportRequest) -> str:
        self.requests.append(request)
        if self.failure is not None:
            raise self.failure
        return self.response_body


@pytest.fixture
def dummy_transport():
    """Recording transport fixture"""
    return DummyTransport()


@pytest.fixture
def executor(dummy_transport):
    """Executor wired to the recording transport"""
    return HttpRequestExecutor(ClientConfig(), transport=dummy_transport)


@pytest.fixture
def failing_transport():
    """Factory for transports raising a given TransportFailure"""

    def make(message="", error_code=None, status_code=0):
        return DummyTransport(
            failure=TransportFailure(message, error_code=error_code, status_code=status_code)
        )

    return make

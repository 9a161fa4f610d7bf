"""Shared test fixtures and configuration."""

from typing import Callable, Generator
from unittest.mock import MagicMock, patch

import httpx
import pytest

from rushhttp import ClientConfig, Request, Response, RushClient
from rushhttp.transport import HttpxTransport


# ============== Configuration Fixtures ==============

@pytest.fixture
def default_config() -> ClientConfig:
    """Default client configuration."""
    return ClientConfig()


@pytest.fixture
def http3_config() -> ClientConfig:
    """HTTP/3 configuration."""
    return ClientConfig(enable_http3=True, timeout=5.0)


# ============== Request/Response Fixtures ==============

@pytest.fixture
def sample_request() -> Request:
    """Sample GET request."""
    return Request(
        method="GET",
        url="https://example.com/api/test",
        headers={"Accept": "application/json"},
        timeout=30.0,
    )


@pytest.fixture
def sample_response() -> Response:
    """Sample successful response."""
    return Response(
        status_code=200,
        headers={"content-type": "application/json"},
        content=b'{"success": true}',
        url="https://example.com/api/test",
        elapsed=0.5,
        http_version="HTTP/2",
    )


# ============== Mock Fixtures ==============

@pytest.fixture
def mock_transport() -> MagicMock:
    """Mock transport for testing without network."""
    transport = MagicMock(spec=HttpxTransport)
    transport.backend_name = "httpx"
    transport.http_version = "2"
    transport.proxy = None
    transport.is_closed = False

    transport.send.return_value = Response(
        status_code=200,
        headers={"content-type": "text/html"},
        content=b"<html>OK</html>",
        url="https://example.com",
        elapsed=0.1,
    )
    return transport


# ============== Client Fixtures ==============

@pytest.fixture
def client(mock_transport: MagicMock) -> Generator[RushClient, None, None]:
    """RushClient with mocked transport."""
    with patch("rushhttp.client.build_transport", return_value=mock_transport):
        client = RushClient()
    yield client
    client.close()


@pytest.fixture
def mock_http() -> Generator[Callable[..., RushClient], None, None]:
    """Factory for clients whose httpx transport is answered by a handler.

    The handler receives the outgoing httpx.Request and returns an
    httpx.Response, so the real dispatch path runs without a network.
    """
    created: list[RushClient] = []

    def factory(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> RushClient:
        transport = HttpxTransport(http2=False, transport=httpx.MockTransport(handler))
        with patch("rushhttp.client.build_transport", return_value=transport):
            client = RushClient(**kwargs)
        created.append(client)
        return client

    yield factory

    for client in created:
        client.close()

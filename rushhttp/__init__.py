"""Fluent HTTP client wrapper.

This package wraps standard HTTP clients behind a small chainable API:

- HTTP/1.1 and HTTP/2 through httpx, HTTP/3 through curl_cffi
- Default headers, cookies, Basic and Bearer authentication
- Fixed or randomly generated browser User-Agent
- Proxy routing and unlimited redirect following
- WebSocket upgrade via websocket-client
- One-call download of a remote resource to disk

Basic usage:

    from rushhttp import ClientConfig, RushClient

    client = RushClient(ClientConfig(timeout=10))
    client.with_basic_auth("user", "pass").with_cookies({"session": "abc"})
    response = client.get("https://example.com")
    print(response.status_code)

    # HTTP/3
    client = RushClient(ClientConfig(enable_http3=True))

    # WebSocket
    conn, handshake = client.websocket_connect("wss://example.com/socket")
    conn.send("hello")
    conn.close()
"""

import logging

from .client import RushClient
from .config import ClientConfig
from .models import (
    Request,
    Response,
    HTTPClientError,
    RequestError,
    TransportError,
    HTTPError,
    DownloadError,
    WebSocketHandshakeError,
)
from .fingerprint import (
    BrowserProfile,
    PROFILES,
    get_profile,
    random_user_agent,
)
from ._debug import DebugInfo

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Main client
    "RushClient",
    # Configuration
    "ClientConfig",
    # Models
    "Request",
    "Response",
    "DebugInfo",
    # Exceptions
    "HTTPClientError",
    "RequestError",
    "TransportError",
    "HTTPError",
    "DownloadError",
    "WebSocketHandshakeError",
    # User agents
    "BrowserProfile",
    "PROFILES",
    "get_profile",
    "random_user_agent",
    # Version
    "__version__",
]

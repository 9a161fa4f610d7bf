"""Fluent HTTP client with default headers, auth and download helpers.

Basic usage:

    from rushhttp import RushClient

    client = (
        RushClient()
        .with_headers({"Accept": "application/json"})
        .with_bearer_token("s3cr3t")
        .with_user_agent("random")
        .follow_redirects()
    )
    resp = client.get("https://example.com/api/items")
    print(resp.status_code, resp.text)

    client.download_image("https://example.com/logo", "logo.png")
"""

from __future__ import annotations

import base64
import logging
import os
import re
import warnings
from datetime import datetime
from typing import Any, Callable, Mapping

import httpx
import websocket

from ._debug import DebugInfo, DebugOutput
from ._download import resolve_save_path
from .config import DEFAULT_MAX_REDIRECTS, ClientConfig
from .fingerprint import random_user_agent
from .models import DownloadError, HTTPClientError, Request, RequestError, Response
from .transport import BaseTransport, build_transport
from .websocket import dial

logger = logging.getLogger(__name__)

# Value of with_user_agent() that asks for a generated User-Agent.
RANDOM_USER_AGENT = "random"

# RFC 9110 token characters, the only ones allowed in a method name.
_METHOD_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")

_PROXY_SCHEMES = ("http", "https")


def _headers_to_dict(headers: httpx.Headers) -> dict[str, str]:
    """Plain dict of headers, keeping the caller's key casing."""
    return {
        key.decode(headers.encoding): value.decode(headers.encoding)
        for key, value in headers.raw
    }


class RushClient:
    """Chainable wrapper around an HTTP transport.

    Builder methods (``with_*``, ``set_*``, ``follow_redirects``) change the
    client in place and return it, so calls can be chained. The client is
    not thread-safe: configure it first, then share it read-only.

    Args:
        config: Transport configuration. Defaults to ClientConfig()
            (HTTP/2 on, HTTP/3 off, 30 second timeout).
        verbose: Print a trace of every request to stderr.
        debug_callback: Called with a DebugInfo for every traced request.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        verbose: bool = False,
        debug_callback: Callable[[DebugInfo], None] | None = None,
    ) -> None:
        self._config = config or ClientConfig()
        self._timeout = self._config.timeout
        self._max_redirects: int | None = DEFAULT_MAX_REDIRECTS

        # Header state
        self._default_headers = httpx.Headers()
        self._user_agent = ""

        # Transport, picked once here and only swapped by with_proxy()
        self._proxy: str | None = None
        self._transport: BaseTransport = build_transport(
            self._config, max_redirects=self._max_redirects
        )

        self._debug = DebugOutput(enabled=verbose, callback=debug_callback)
        self._closed = False

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def config(self) -> ClientConfig:
        """The construction-time configuration."""
        return self._config

    @property
    def timeout(self) -> float:
        """Current request timeout in seconds."""
        return self._timeout

    @property
    def default_headers(self) -> dict[str, str]:
        """Copy of the headers sent with every request."""
        return _headers_to_dict(self._default_headers)

    @property
    def user_agent(self) -> str:
        """User-Agent sent with every request, empty when unset."""
        return self._user_agent

    @property
    def max_redirects(self) -> int | None:
        """Redirect limit, None once follow_redirects() was called."""
        return self._max_redirects

    @property
    def proxy(self) -> str | None:
        """Proxy URL set by with_proxy()."""
        return self._proxy

    @property
    def transport(self) -> BaseTransport:
        """The transport requests are sent through."""
        return self._transport

    @property
    def verbose(self) -> bool:
        """Whether verbose request tracing is on."""
        return self._debug.enabled

    @verbose.setter
    def verbose(self, value: bool) -> None:
        self._debug.enabled = value

    # -------------------------------------------------------------------------
    # Builders
    # -------------------------------------------------------------------------

    def with_timeout(self, timeout: float) -> "RushClient":
        """Replace the request timeout (seconds)."""
        self._timeout = timeout
        return self

    def with_headers(self, headers: Mapping[str, str]) -> "RushClient":
        """Merge headers into the defaults. Existing names are overwritten."""
        for name, value in headers.items():
            self._default_headers[name] = value
        return self

    def set_headers(self, headers: Mapping[str, str]) -> "RushClient":
        """Merge headers into the defaults. Same behaviour as with_headers()."""
        return self.with_headers(headers)

    def with_cookies(self, cookies: Mapping[str, str]) -> "RushClient":
        """Replace the Cookie header with the given name/value pairs."""
        self._default_headers["Cookie"] = "; ".join(
            f"{name}={value}" for name, value in cookies.items()
        )
        return self

    def set_cookies(self, cookies: Mapping[str, str]) -> "RushClient":
        """Append cookies to the Cookie header, keeping what is there.

        Names are not de-duplicated: setting "a" twice sends it twice.
        """
        for name, value in cookies.items():
            pair = f"{name}={value}"
            if "Cookie" in self._default_headers:
                self._default_headers["Cookie"] = self._default_headers["Cookie"] + "; " + pair
            else:
                self._default_headers["Cookie"] = pair
        return self

    def with_basic_auth(self, username: str, password: str) -> "RushClient":
        """Send HTTP Basic credentials with every request."""
        token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
        self._default_headers["Authorization"] = "Basic " + token
        return self

    def with_bearer_token(self, token: str) -> "RushClient":
        """Send a Bearer token with every request."""
        self._default_headers["Authorization"] = "Bearer " + token
        return self

    def with_user_agent(self, user_agent: str) -> "RushClient":
        """Set the User-Agent. Pass "random" for a generated browser one."""
        if user_agent == RANDOM_USER_AGENT:
            self._user_agent = random_user_agent()
        else:
            self._user_agent = user_agent
        return self

    def follow_redirects(self) -> "RushClient":
        """Follow redirects without any limit."""
        self._max_redirects = None
        self._transport.max_redirects = None
        return self

    def with_proxy(self, proxy_url: str) -> "RushClient":
        """Route all traffic through an HTTP(S) proxy.

        The transport is replaced by a standard one (HTTP/3 is not proxied).
        An unusable URL leaves the transport as it was; the only signal is
        a UserWarning and a log record.
        """
        try:
            parsed = httpx.URL(proxy_url)
        except httpx.InvalidURL:
            parsed = None

        if parsed is None or parsed.scheme not in _PROXY_SCHEMES or not parsed.host:
            logger.warning("Ignoring invalid proxy URL %r", proxy_url)
            warnings.warn(
                f"Invalid proxy URL {proxy_url!r} ignored; transport unchanged.",
                UserWarning,
                stacklevel=2,
            )
            return self

        old_transport = self._transport
        self._transport = build_transport(
            self._config, max_redirects=self._max_redirects, proxy=proxy_url
        )
        self._proxy = proxy_url
        old_transport.close()
        return self

    # -------------------------------------------------------------------------
    # HTTP Methods
    # -------------------------------------------------------------------------

    def get(self, url: str) -> Response:
        """Make a GET request."""
        return self._send_request("GET", url)

    def post(self, url: str, body: bytes | None = None) -> Response:
        """Make a POST request."""
        return self._send_request("POST", url, body)

    def put(self, url: str, body: bytes | None = None) -> Response:
        """Make a PUT request."""
        return self._send_request("PUT", url, body)

    def patch(self, url: str, body: bytes | None = None) -> Response:
        """Make a PATCH request."""
        return self._send_request("PATCH", url, body)

    def delete(self, url: str) -> Response:
        """Make a DELETE request."""
        return self._send_request("DELETE", url)

    def head(self, url: str) -> Response:
        """Make a HEAD request."""
        return self._send_request("HEAD", url)

    def options(self, url: str) -> Response:
        """Make an OPTIONS request."""
        return self._send_request("OPTIONS", url)

    # -------------------------------------------------------------------------
    # WebSocket
    # -------------------------------------------------------------------------

    def websocket_connect(self, url: str) -> tuple[websocket.WebSocket, Response]:
        """Upgrade to a WebSocket connection.

        Only the default headers go with the upgrade request. Keepalive,
        reconnection and closing the connection are up to the caller.

        Returns:
            Tuple of the open connection and the handshake response.

        Raises:
            WebSocketHandshakeError: If the server refuses the upgrade.
            TransportError: On network failures.
        """
        self._check_open()
        return dial(url, headers=self.default_headers, timeout=self._timeout)

    # -------------------------------------------------------------------------
    # Downloads
    # -------------------------------------------------------------------------

    def download_image(
        self,
        url: str,
        save_path: str | os.PathLike[str] | None = None,
    ) -> Response:
        """Download a resource and write it to disk.

        Without save_path the file lands in the current working directory,
        named after the last URL segment plus an extension taken from the
        Content-Type header (".jpg" when there is none).

        Returns:
            The response, with empty content since the body went to disk.

        Raises:
            DownloadError: If the status is not 200. Nothing is written.
            TransportError: On connection/transport errors.
            OSError: If the file cannot be created or written.
        """
        request = self._build_request("GET", url)
        info = self._start_trace(request)
        response: Response | None = None

        try:
            with self._transport.stream(request) as (response, chunks):
                if response.status_code != 200:
                    raise DownloadError(response.status_code, response=response)

                path = resolve_save_path(url, response.get_header("Content-Type"), save_path)
                size = 0
                with open(path, "wb") as fh:
                    for chunk in chunks:
                        fh.write(chunk)
                        size += len(chunk)
        except (HTTPClientError, OSError) as e:
            self._finish_trace(info, response=response, error=e)
            raise

        self._finish_trace(info, response=response, content_length=size)
        logger.debug("Downloaded %s to %s (%d bytes)", url, path, size)
        return response

    # -------------------------------------------------------------------------
    # Context Manager / Cleanup
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Close the client and its transport."""
        if not self._closed:
            self._transport.close()
            self._closed = True

    def __enter__(self) -> "RushClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Internal Methods
    # -------------------------------------------------------------------------

    def _check_open(self) -> None:
        if self._closed:
            raise HTTPClientError("Client is closed")

    def _build_request(self, method: str, url: str, body: bytes | None = None) -> Request:
        """Assemble a request carrying the default headers and User-Agent."""
        self._check_open()
        if not _METHOD_RE.match(method):
            raise RequestError(f"invalid method {method!r}")

        headers = httpx.Headers(self._default_headers)
        if self._user_agent:
            headers["User-Agent"] = self._user_agent

        return Request(
            method=method,
            url=url,
            headers=_headers_to_dict(headers),
            body=body,
            timeout=self._timeout,
        )

    def _send_request(self, method: str, url: str, body: bytes | None = None) -> Response:
        """Build a request and run it synchronously through the transport.

        Transport errors are raised as they come, without retries.
        """
        request = self._build_request(method, url, body)
        info = self._start_trace(request)
        logger.debug("%s %s via %s", request.method, url, self._transport.backend_name)

        try:
            response = self._transport.send(request)
        except HTTPClientError as e:
            self._finish_trace(info, error=e)
            raise

        self._finish_trace(info, response=response)
        return response

    def _start_trace(self, request: Request) -> DebugInfo | None:
        if not self._debug.enabled:
            return None
        return DebugInfo(
            timestamp=datetime.now(),
            method=request.method,
            url=request.url,
            backend=self._transport.backend_name,
            http_version=self._transport.http_version,
            proxy_used=self._transport.proxy,
            request_headers=dict(request.headers),
        )

    def _finish_trace(
        self,
        info: DebugInfo | None,
        response: Response | None = None,
        error: Exception | None = None,
        content_length: int | None = None,
    ) -> None:
        if info is None:
            return
        if response is not None:
            info.final_url = response.url
            info.status_code = response.status_code
            info.response_http_version = response.http_version
            info.response_headers = dict(response.headers)
            info.content_length = (
                len(response.content) if content_length is None else content_length
            )
            info.elapsed = response.elapsed
        if error is not None:
            info.error = str(error)
        self._debug.log_request(info)

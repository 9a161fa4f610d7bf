"""WebSocket dialing on top of websocket-client."""

from __future__ import annotations

import logging
import time

import websocket

from .models import (
    Request,
    RequestError,
    Response,
    TransportError,
    WebSocketHandshakeError,
)

logger = logging.getLogger(__name__)


def dial(
    url: str,
    headers: dict[str, str] | None = None,
    timeout: float | None = None,
) -> tuple[websocket.WebSocket, Response]:
    """Open a WebSocket connection with the default dialer.

    Args:
        url: ws:// or wss:// URL.
        headers: Extra headers sent with the upgrade request.
        timeout: Timeout for connecting and the opening handshake. The
            returned connection has no read deadline.

    Returns:
        Tuple of the open connection and the handshake response.

    Raises:
        RequestError: If the URL is not a WebSocket URL.
        WebSocketHandshakeError: If the server answers with anything but 101.
        TransportError: On network failures.
    """
    headers = dict(headers or {})
    start_time = time.monotonic()

    try:
        conn = websocket.create_connection(
            url,
            timeout=timeout,
            header=[f"{name}: {value}" for name, value in headers.items()],
        )
    except websocket.WebSocketBadStatusException as e:
        raise WebSocketHandshakeError(
            str(e),
            status_code=e.status_code,
            headers=dict(e.resp_headers or {}),
        ) from e
    except ValueError as e:
        raise RequestError(str(e), original_error=e) from e
    except (websocket.WebSocketException, OSError) as e:
        raise TransportError(str(e), original_error=e) from e

    conn.settimeout(None)
    elapsed = time.monotonic() - start_time
    logger.debug("WebSocket connected to %s in %.3fs", url, elapsed)

    handshake = Response(
        status_code=conn.getstatus(),
        headers=dict(conn.getheaders() or {}),
        content=b"",
        url=url,
        elapsed=elapsed,
        request=Request(method="GET", url=url, headers=headers, timeout=timeout),
        http_version="HTTP/1.1",
    )
    return conn, handshake

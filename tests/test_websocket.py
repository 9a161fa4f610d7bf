"""Tests for the WebSocket upgrade."""

from unittest.mock import MagicMock, patch

import pytest
import websocket

from rushhttp import (
    HTTPClientError,
    RequestError,
    TransportError,
    WebSocketHandshakeError,
)
from rushhttp.websocket import dial


@pytest.fixture
def mock_connection() -> MagicMock:
    """Connection returned by a successful handshake."""
    conn = MagicMock(spec=websocket.WebSocket)
    conn.getstatus.return_value = 101
    conn.getheaders.return_value = {"upgrade": "websocket", "connection": "Upgrade"}
    return conn


class TestDial:
    """Tests for the dial primitive."""

    def test_dial_success(self, mock_connection):
        with patch(
            "rushhttp.websocket.websocket.create_connection",
            return_value=mock_connection,
        ) as create:
            conn, handshake = dial(
                "wss://example.com/socket",
                headers={"Authorization": "Bearer t"},
                timeout=3.0,
            )

        create.assert_called_once_with(
            "wss://example.com/socket",
            timeout=3.0,
            header=["Authorization: Bearer t"],
        )
        assert conn is mock_connection
        assert handshake.status_code == 101
        assert handshake.get_header("Upgrade") == "websocket"
        assert handshake.url == "wss://example.com/socket"
        assert handshake.content == b""
        assert handshake.request.headers == {"Authorization": "Bearer t"}

    def test_dial_timeout_does_not_outlive_handshake(self, mock_connection):
        """The dial timeout bounds the handshake only, not later reads."""
        with patch(
            "rushhttp.websocket.websocket.create_connection",
            return_value=mock_connection,
        ) as create:
            conn, _ = dial("ws://example.com/feed", timeout=1.0)

        assert create.call_args.kwargs["timeout"] == 1.0
        conn.settimeout.assert_called_once_with(None)

    def test_bad_status_raises_handshake_error(self):
        error = websocket.WebSocketBadStatusException(
            "Handshake status 403 Forbidden",
            403,
            resp_headers={"server": "test"},
        )
        with patch("rushhttp.websocket.websocket.create_connection", side_effect=error):
            with pytest.raises(WebSocketHandshakeError) as exc_info:
                dial("wss://example.com/socket")

        assert exc_info.value.status_code == 403
        assert exc_info.value.headers == {"server": "test"}
        assert exc_info.value.__cause__ is error

    def test_network_error_raises_transport_error(self):
        with patch(
            "rushhttp.websocket.websocket.create_connection",
            side_effect=ConnectionRefusedError(111, "Connection refused"),
        ):
            with pytest.raises(TransportError, match="Connection refused") as exc_info:
                dial("ws://127.0.0.1:9/")

        assert isinstance(exc_info.value.original_error, ConnectionRefusedError)

    def test_websocket_exception_raises_transport_error(self):
        with patch(
            "rushhttp.websocket.websocket.create_connection",
            side_effect=websocket.WebSocketTimeoutException("timed out"),
        ):
            with pytest.raises(TransportError, match="timed out"):
                dial("ws://example.com/")

    def test_bad_scheme_raises_request_error(self):
        with patch(
            "rushhttp.websocket.websocket.create_connection",
            side_effect=ValueError("scheme http is invalid"),
        ):
            with pytest.raises(RequestError, match="scheme http is invalid"):
                dial("http://example.com/")


class TestWebSocketConnect:
    """Tests for RushClient.websocket_connect()."""

    def test_sends_default_headers_only(self, client, mock_connection):
        client.with_headers({"X-Room": "lobby"}).with_cookies({"sid": "abc"})
        client.with_user_agent("Ignored/1.0").with_timeout(9.0)

        with patch(
            "rushhttp.websocket.websocket.create_connection",
            return_value=mock_connection,
        ) as create:
            conn, handshake = client.websocket_connect("wss://example.com/chat")

        assert conn is mock_connection
        assert handshake.status_code == 101
        kwargs = create.call_args.kwargs
        assert kwargs["timeout"] == 9.0
        assert sorted(kwargs["header"]) == ["Cookie: sid=abc", "X-Room: lobby"]
        mock_connection.settimeout.assert_called_once_with(None)

    def test_handshake_failure(self, client):
        error = websocket.WebSocketBadStatusException("Handshake status 400 Bad Request", 400)

        with patch("rushhttp.websocket.websocket.create_connection", side_effect=error):
            with pytest.raises(WebSocketHandshakeError) as exc_info:
                client.websocket_connect("wss://example.com/chat")

        assert exc_info.value.status_code == 400
        assert exc_info.value.headers == {}

    def test_closed_client_raises(self, client):
        client.close()

        with pytest.raises(HTTPClientError, match="closed"):
            client.websocket_connect("wss://example.com/chat")

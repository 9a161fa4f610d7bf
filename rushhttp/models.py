"""Request and Response dataclasses and the exception hierarchy."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Request:
    """HTTP request representation.

    Attributes:
        method: HTTP method (GET, POST, PUT, DELETE, etc.).
        url: The request URL.
        headers: Request headers.
        body: Raw request body, None for bodiless methods.
        timeout: Total timeout for this request in seconds.
    """

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None
    timeout: float | None = None

    def __post_init__(self) -> None:
        """Normalize method to uppercase."""
        self.method = self.method.upper()


@dataclass
class Response:
    """HTTP response representation.

    Attributes:
        status_code: HTTP status code.
        headers: Response headers.
        content: Raw response content as bytes. Empty when the body was
            streamed elsewhere (see RushClient.download_image).
        url: Final URL after redirects.
        elapsed: Request duration in seconds.
        request: The original request object.
        http_version: Protocol the response arrived over (e.g. "HTTP/2").
    """

    status_code: int
    headers: dict[str, str]
    content: bytes
    url: str
    elapsed: float = 0.0
    request: Request | None = None
    http_version: str | None = None

    @property
    def text(self) -> str:
        """Decode content as UTF-8 text."""
        return self.content.decode("utf-8", errors="replace")

    @property
    def ok(self) -> bool:
        """Check if status code indicates success (2xx)."""
        return 200 <= self.status_code < 300

    def get_header(self, name: str, default: str | None = None) -> str | None:
        """Look up a response header ignoring case."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return default

    def raise_for_status(self) -> None:
        """Raise HTTPError if status code indicates an error."""
        if not self.ok:
            raise HTTPError(
                f"HTTP {self.status_code} for {self.url}",
                response=self
            )


class HTTPClientError(Exception):
    """Base exception for HTTP client errors."""
    pass


class RequestError(HTTPClientError):
    """The request could not be built (malformed URL or method)."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error


class TransportError(HTTPClientError):
    """Error during HTTP transport (connection, timeout, etc.)."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error


class HTTPError(HTTPClientError):
    """HTTP error response (4xx, 5xx status codes)."""

    def __init__(self, message: str, response: Response | None = None):
        super().__init__(message)
        self.response = response


class DownloadError(HTTPError):
    """Download answered with something other than 200 OK."""

    def __init__(self, status_code: int, response: Response | None = None):
        super().__init__(
            f"failed to download image: status code {status_code}",
            response=response,
        )
        self.status_code = status_code


class WebSocketHandshakeError(HTTPClientError):
    """The server refused the WebSocket upgrade."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.headers = headers or {}

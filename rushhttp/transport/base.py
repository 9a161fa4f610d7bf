"""Abstract transport interface for HTTP requests."""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Any, Iterator

from ..config import DEFAULT_MAX_REDIRECTS
from ..models import Request, Response, TransportError


class BaseTransport(ABC):
    """Abstract base class for transport implementations.

    A transport is chosen once per RushClient and owns the underlying
    library session. Redirect policy lives on the transport; timeouts
    travel with each Request.
    """

    #: Name of the underlying HTTP library.
    backend_name: str = ""

    def __init__(
        self,
        max_redirects: int | None = DEFAULT_MAX_REDIRECTS,
        proxy: str | None = None,
    ):
        """Initialize transport.

        Args:
            max_redirects: Redirects followed before giving up. None removes
                the limit.
            proxy: Proxy URL all traffic is routed through.
        """
        self._max_redirects = max_redirects
        self._proxy = proxy
        self._closed = False

    @property
    def is_closed(self) -> bool:
        """Check if transport has been closed."""
        return self._closed

    @property
    def proxy(self) -> str | None:
        """Proxy URL this transport routes through."""
        return self._proxy

    @property
    def max_redirects(self) -> int | None:
        """Redirect limit, None when unlimited."""
        return self._max_redirects

    @max_redirects.setter
    def max_redirects(self, value: int | None) -> None:
        self._max_redirects = value
        self._apply_max_redirects()

    @property
    @abstractmethod
    def http_version(self) -> str:
        """Protocol version this transport asks for."""
        raise NotImplementedError

    def _apply_max_redirects(self) -> None:
        """Push the redirect limit down to the library session."""

    def _check_open(self) -> None:
        if self._closed:
            raise TransportError("Transport is closed")

    @abstractmethod
    def send(self, request: Request) -> Response:
        """Execute a request and read the whole body.

        Raises:
            RequestError: If the request cannot be built.
            TransportError: On connection or transport errors.
        """
        raise NotImplementedError

    @abstractmethod
    def stream(
        self, request: Request
    ) -> AbstractContextManager[tuple[Response, Iterator[bytes]]]:
        """Execute a request without reading the body up front.

        Yields the response (with empty content) and an iterator over the
        body chunks. The underlying response is released on exit.
        """
        raise NotImplementedError

    def close(self) -> None:
        """Release the library session."""
        self._closed = True

    def __enter__(self) -> "BaseTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

"""curl_cffi transport speaking HTTP/3."""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Iterator

from curl_cffi import CurlError, CurlHttpVersion
from curl_cffi.requests import Session

from ..config import DEFAULT_MAX_REDIRECTS
from ..models import Request, RequestError, Response, TransportError
from .base import BaseTransport

# libcurl error codes that mean the request itself was malformed.
_CURLE_UNSUPPORTED_PROTOCOL = 1
_CURLE_URL_MALFORMAT = 3

_VERSION_LABELS = {
    CurlHttpVersion.V1_0: "HTTP/1.0",
    CurlHttpVersion.V1_1: "HTTP/1.1",
    CurlHttpVersion.V2_0: "HTTP/2",
    CurlHttpVersion.V3: "HTTP/3",
}

_HTTP3_VERSIONS = (CurlHttpVersion.V3, CurlHttpVersion.V3ONLY)


class CurlTransport(BaseTransport):
    """HTTP/3 transport using curl_cffi.

    Requests are made with HTTP/3 only. There is no fallback: if the server
    does not speak HTTP/3 the request fails instead of downgrading to
    HTTP/2 or HTTP/1.x.
    """

    backend_name = "curl_cffi"

    def __init__(
        self,
        max_redirects: int | None = DEFAULT_MAX_REDIRECTS,
        http_version: CurlHttpVersion = CurlHttpVersion.V3ONLY,
    ):
        """Initialize curl transport.

        Args:
            max_redirects: Redirect limit, None for unlimited.
            http_version: curl HTTP version to request.
        """
        super().__init__(max_redirects=max_redirects)
        self._curl_http_version = http_version
        self._session: Session | None = None

    @property
    def http_version(self) -> str:
        return "3" if self._curl_http_version in _HTTP3_VERSIONS else "auto"

    def _get_session(self) -> Session:
        """Get or create the curl_cffi session."""
        if self._session is None:
            self._session = Session(http_version=self._curl_http_version)
        return self._session

    def _build_request_kwargs(self, request: Request, stream: bool) -> dict[str, Any]:
        """Build kwargs for Session.request."""
        kwargs: dict[str, Any] = {
            "method": request.method,
            "url": request.url,
            "headers": request.headers or {},
            "allow_redirects": True,
            # -1 is libcurl's "no limit"
            "max_redirects": -1 if self._max_redirects is None else self._max_redirects,
            "stream": stream,
        }
        if request.body is not None:
            kwargs["data"] = request.body
        if request.timeout is not None:
            kwargs["timeout"] = request.timeout
        return kwargs

    def _convert_response(
        self,
        raw_response: Any,
        request: Request,
        elapsed: float,
        content: bytes,
    ) -> Response:
        """Convert curl_cffi response to our Response model."""
        return Response(
            status_code=raw_response.status_code,
            headers=dict(raw_response.headers),
            content=content,
            url=str(raw_response.url),
            elapsed=elapsed,
            request=request,
            http_version=_VERSION_LABELS.get(raw_response.http_version),
        )

    def _execute(self, request: Request, stream: bool) -> Any:
        kwargs = self._build_request_kwargs(request, stream)
        try:
            raw_response = self._get_session().request(**kwargs)
        except CurlError as e:
            if e.code in (_CURLE_UNSUPPORTED_PROTOCOL, _CURLE_URL_MALFORMAT):
                raise RequestError(str(e), original_error=e) from e
            raise TransportError(str(e), original_error=e) from e

        if (
            self._curl_http_version == CurlHttpVersion.V3ONLY
            and raw_response.http_version != CurlHttpVersion.V3
        ):
            raw_response.close()
            label = _VERSION_LABELS.get(raw_response.http_version, "an unknown protocol")
            raise TransportError(f"{request.url} answered over {label}, HTTP/3 required")
        return raw_response

    def send(self, request: Request) -> Response:
        """Execute a request over HTTP/3 and read the whole body.

        Raises:
            RequestError: On malformed URLs or unsupported schemes.
            TransportError: On connection or transport errors.
        """
        self._check_open()
        start_time = time.monotonic()
        raw_response = self._execute(request, stream=False)
        elapsed = time.monotonic() - start_time
        return self._convert_response(raw_response, request, elapsed, raw_response.content)

    @contextmanager
    def stream(self, request: Request) -> Iterator[tuple[Response, Iterator[bytes]]]:
        """Execute a request over HTTP/3 and yield the body as chunks."""
        self._check_open()
        start_time = time.monotonic()
        raw_response = self._execute(request, stream=True)

        try:
            elapsed = time.monotonic() - start_time
            yield (
                self._convert_response(raw_response, request, elapsed, b""),
                self._iter_body(raw_response),
            )
        finally:
            raw_response.close()

    @staticmethod
    def _iter_body(raw_response: Any) -> Iterator[bytes]:
        try:
            yield from raw_response.iter_content()
        except CurlError as e:
            raise TransportError(str(e), original_error=e) from e

    def close(self) -> None:
        """Close the curl_cffi session."""
        if self._session is not None:
            self._session.close()
            self._session = None
        super().close()

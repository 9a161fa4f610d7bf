"""Transport layer implementations."""

from __future__ import annotations

import logging

from ..config import DEFAULT_MAX_REDIRECTS, ClientConfig
from .base import BaseTransport
from .curl_transport import CurlTransport
from .httpx_transport import HttpxTransport

logger = logging.getLogger(__name__)


def build_transport(
    config: ClientConfig,
    max_redirects: int | None = DEFAULT_MAX_REDIRECTS,
    proxy: str | None = None,
) -> BaseTransport:
    """Pick the transport for a client configuration.

    HTTP/3 gets the curl_cffi transport; everything else, including any
    proxied setup, gets the httpx transport with HTTP/2 as configured.
    """
    if config.enable_http3 and proxy is None:
        logger.debug("Using curl_cffi transport (HTTP/3)")
        return CurlTransport(max_redirects=max_redirects)

    logger.debug(
        "Using httpx transport (http2=%s, proxy=%s)",
        config.enable_http2,
        proxy is not None,
    )
    return HttpxTransport(
        http2=config.enable_http2,
        max_redirects=max_redirects,
        proxy=proxy,
    )


__all__ = ["BaseTransport", "CurlTransport", "HttpxTransport", "build_transport"]

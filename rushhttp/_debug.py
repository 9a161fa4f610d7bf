"""Debug/verbose mode for RushClient."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, TextIO
from urllib.parse import urlsplit, urlunsplit


@dataclass
class DebugInfo:
    """Debug information for one request/response cycle."""

    # Request info
    timestamp: datetime
    method: str
    url: str

    # Transport info
    backend: str  # "httpx" or "curl_cffi"
    http_version: str = "auto"
    proxy_used: str | None = None
    request_headers: dict[str, str] = field(default_factory=dict)

    # Response details (populated after request)
    final_url: str | None = None
    status_code: int | None = None
    response_http_version: str | None = None
    response_headers: dict[str, str] = field(default_factory=dict)
    content_length: int = 0
    elapsed: float = 0.0

    # Error info
    error: str | None = None


def mask_proxy_password(proxy_url: str) -> str:
    """Replace the password of a proxy URL with asterisks."""
    parts = urlsplit(proxy_url)
    if parts.password is None:
        return proxy_url

    host = parts.hostname or ""
    if parts.port is not None:
        host = f"{host}:{parts.port}"
    netloc = f"{parts.username}:****@{host}"
    return urlunsplit(parts._replace(netloc=netloc))


class DebugOutput:
    """Handles verbose output formatting and dispatch."""

    def __init__(
        self,
        enabled: bool = False,
        output: TextIO | None = None,
        callback: Callable[[DebugInfo], None] | None = None,
    ):
        """Initialize debug output handler.

        Args:
            enabled: Whether verbose output is enabled.
            output: Output stream (defaults to stderr).
            callback: Optional callback for programmatic capture.
        """
        self.enabled = enabled
        self.output = output or sys.stderr
        self.callback = callback

    def log_request(self, info: DebugInfo) -> None:
        """Emit debug info for a request/response cycle."""
        if not self.enabled:
            return

        if self.callback:
            self.callback(info)

        self._print_formatted(info)

    def _print_formatted(self, info: DebugInfo) -> None:
        out = self.output
        sep = "=" * 80

        out.write(f"\n{sep}\n")
        out.write(f"[{info.timestamp.strftime('%Y-%m-%d %H:%M:%S')}] ")
        out.write(f"{info.method} {info.url}\n")
        out.write(f"{sep}\n")
        out.write(f"Backend: {info.backend} | HTTP: {info.http_version}\n")

        if info.request_headers:
            out.write("\n> Request Headers:\n")
            for header, value in info.request_headers.items():
                if len(value) > 80:
                    value = value[:77] + "..."
                out.write(f"  {header}: {value}\n")

        if info.proxy_used:
            out.write(f"> Proxy: {mask_proxy_password(info.proxy_used)}\n")

        out.write("\n" + "-" * 80 + "\n")

        if info.error:
            out.write(f"< ERROR: {info.error}\n")
        elif info.status_code is not None:
            out.write(f"< {info.response_http_version or 'HTTP'} {info.status_code}")
            if info.elapsed:
                out.write(f"  [{info.elapsed:.3f}s]")
            out.write("\n")

            if info.final_url and info.final_url != info.url:
                out.write(f"< Redirected to: {info.final_url}\n")

            if info.response_headers:
                out.write("\n< Response Headers:\n")
                for header, value in info.response_headers.items():
                    if len(value) > 80:
                        value = value[:77] + "..."
                    out.write(f"  {header}: {value}\n")

            if info.content_length:
                out.write(f"\n< Content Length: {info.content_length:,} bytes\n")

        out.write(f"{sep}\n")
        out.flush()

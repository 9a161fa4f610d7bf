"""Configuration dataclass for RushClient."""

from dataclasses import dataclass

# Redirect limit applied until RushClient.follow_redirects() lifts it.
DEFAULT_MAX_REDIRECTS = 10


@dataclass(frozen=True)
class ClientConfig:
    """Construction-time configuration for RushClient.

    The transport is chosen from these values once, when the client is built.

    Attributes:
        enable_http2: Negotiate HTTP/2 on the standard transport.
        enable_http3: Use the HTTP/3 transport instead of the standard one.
        timeout: Total request timeout in seconds.
    """

    enable_http2: bool = True
    enable_http3: bool = False
    timeout: float = 30.0

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.timeout <= 0:
            raise ValueError("timeout must be > 0")

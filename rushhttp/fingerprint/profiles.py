"""Built-in browser profiles used to generate realistic User-Agent strings."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class BrowserProfile:
    """A browser identity the client can present.

    Attributes:
        name: Profile identifier (e.g., "chrome_120").
        browser: Browser family.
        platform: Operating system the User-Agent claims.
        user_agent: User-Agent header value.
    """

    name: str
    browser: Literal["chrome", "firefox", "safari", "edge"]
    platform: Literal["windows", "macos", "linux", "android", "ios"]
    user_agent: str


# Chrome profiles
CHROME_120 = BrowserProfile(
    name="chrome_120",
    browser="chrome",
    platform="windows",
    user_agent="Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
)

CHROME_119_MAC = BrowserProfile(
    name="chrome_119_mac",
    browser="chrome",
    platform="macos",
    user_agent="Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/119.0.0.0 Safari/537.36",
)

CHROME_120_LINUX = BrowserProfile(
    name="chrome_120_linux",
    browser="chrome",
    platform="linux",
    user_agent="Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
)

CHROME_120_ANDROID = BrowserProfile(
    name="chrome_120_android",
    browser="chrome",
    platform="android",
    user_agent="Mozilla/5.0 (Linux; Android 10; K) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Mobile Safari/537.36",
)

# Firefox profiles
FIREFOX_121 = BrowserProfile(
    name="firefox_121",
    browser="firefox",
    platform="windows",
    user_agent="Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0",
)

FIREFOX_120_LINUX = BrowserProfile(
    name="firefox_120_linux",
    browser="firefox",
    platform="linux",
    user_agent="Mozilla/5.0 (X11; Linux x86_64; rv:120.0) Gecko/20100101 Firefox/120.0",
)

# Safari profiles
SAFARI_17 = BrowserProfile(
    name="safari_17",
    browser="safari",
    platform="macos",
    user_agent="Mozilla/5.0 (Macintosh; Intel Mac OS X 14_1) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.0 Safari/605.1.15",
)

SAFARI_17_IOS = BrowserProfile(
    name="safari_17_ios",
    browser="safari",
    platform="ios",
    user_agent="Mozilla/5.0 (iPhone; CPU iPhone OS 17_1 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.1 Mobile/15E148 Safari/604.1",
)

# Edge profiles
EDGE_120 = BrowserProfile(
    name="edge_120",
    browser="edge",
    platform="windows",
    user_agent="Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36 Edg/120.0.0.0",
)


# Profile registry
PROFILES: dict[str, BrowserProfile] = {
    profile.name: profile
    for profile in (
        CHROME_120,
        CHROME_119_MAC,
        CHROME_120_LINUX,
        CHROME_120_ANDROID,
        FIREFOX_121,
        FIREFOX_120_LINUX,
        SAFARI_17,
        SAFARI_17_IOS,
        EDGE_120,
    )
}

# Default profile
DEFAULT_PROFILE = "chrome_120"


def get_profile(name: str | None = None) -> BrowserProfile:
    """Get a browser profile by name.

    Args:
        name: Profile name. If None, returns default profile.

    Returns:
        BrowserProfile instance.

    Raises:
        ValueError: If profile name not found.
    """
    if name is None:
        name = DEFAULT_PROFILE

    name = name.lower()
    if name not in PROFILES:
        available = ", ".join(sorted(PROFILES.keys()))
        raise ValueError(f"Unknown profile '{name}'. Available: {available}")

    return PROFILES[name]


def list_profiles() -> list[str]:
    """Get list of available profile names."""
    return sorted(PROFILES.keys())


def random_profile(rng: random.Random | None = None) -> BrowserProfile:
    """Pick a profile at random."""
    chooser = rng or random
    return chooser.choice(list(PROFILES.values()))


def random_user_agent(rng: random.Random | None = None) -> str:
    """Generate a random realistic User-Agent string.

    Args:
        rng: Random source, for reproducible picks.
    """
    return random_profile(rng).user_agent

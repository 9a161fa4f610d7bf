"""Browser profiles and User-Agent generation."""

from .profiles import (
    BrowserProfile,
    PROFILES,
    get_profile,
    list_profiles,
    random_profile,
    random_user_agent,
)

__all__ = [
    "BrowserProfile",
    "PROFILES",
    "get_profile",
    "list_profiles",
    "random_profile",
    "random_user_agent",
]

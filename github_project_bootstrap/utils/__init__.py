"""Utility modules for shared functionality."""

from .constants import (
    DEFAULT_GITHUB_API_URL,
    DEFAULT_REQUEST_DELAY,
    DEFAULT_REQUEST_TIMEOUT,
    GITHUB_API_VERSION,
)
from .rate_limit import warn_on_rate_limit

__all__ = [
    "DEFAULT_GITHUB_API_URL",
    "DEFAULT_REQUEST_DELAY",
    "DEFAULT_REQUEST_TIMEOUT",
    "GITHUB_API_VERSION",
    "warn_on_rate_limit",
]

"""Rate limit detection for GitHub API calls.

Requests are throttled with a fixed delay and are never retried. This module
provides a decorator that recognises GitHub rate limit failures and logs a
warning with the information GitHub returned, so that an operator can re-run
the tool with a larger request delay.
"""

import asyncio
import functools
from typing import Any, Callable, TypeVar

import structlog
from githubkit.exception import PrimaryRateLimitExceeded, RequestFailed, SecondaryRateLimitExceeded

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def is_rate_limit_failure(exc: RequestFailed) -> bool:
    """Return True if a failed request was rejected because of a GitHub rate limit."""
    if isinstance(exc, (PrimaryRateLimitExceeded, SecondaryRateLimitExceeded)):
        return True
    if exc.response.status_code == 429:
        return True
    return exc.response.status_code == 403 and "rate limit" in exc.response.text.lower()


def warn_on_rate_limit() -> Callable[[F], F]:
    """Decorator for async GitHub calls that logs a warning when a rate limit is hit.

    The original exception is always re-raised.

    Example:
        @warn_on_rate_limit()
        async def list_labels(self):
            return await self.client.rest.issues.async_list_labels_for_repo(...)
    """

    def decorator(func: F) -> F:
        if not asyncio.iscoroutinefunction(func):
            raise RuntimeError(f"Function {func.__name__} decorated with @warn_on_rate_limit must be async.")

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except RequestFailed as e:
                if is_rate_limit_failure(e):
                    retry_after = getattr(e, "retry_after", None)
                    logger.warning(
                        "GitHub rate limit exceeded, consider increasing the request delay",
                        function=func.__name__,
                        status_code=e.response.status_code,
                        rate_limit_type="secondary" if isinstance(e, SecondaryRateLimitExceeded) else "primary",
                        retry_after=str(retry_after) if retry_after else None,
                        rate_limit_remaining=e.response.headers.get("x-ratelimit-remaining"),
                        rate_limit_reset=e.response.headers.get("x-ratelimit-reset"),
                    )
                raise

        return async_wrapper  # type: ignore

    return decorator

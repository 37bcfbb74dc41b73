"""Resilience patterns for the API client (rate-limit handling, attempt budgets)."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from pylifxcloud.const import DEFAULT_ATTEMPTS, DEFAULT_RATE_LIMIT_WAIT
from pylifxcloud.exceptions import (
    ColorParseError,
    InvalidParameterError,
    LifxError,
    RateLimitError,
    SelectorParseError,
    is_client_error,
)


if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

_LOGGER = logging.getLogger(__name__)

_T = TypeVar("_T")

# Caller mistakes; retrying cannot fix them.
_LOCAL_ERRORS = (InvalidParameterError, SelectorParseError, ColorParseError)


@dataclass
class RateLimitConfig:
    """Configuration for rate limit handling.

    Attributes:
        default_retry_delay: Delay when no usable x-ratelimit-reset header (default 60.0).
        max_retry_delay: Optional cap on any single wait; None waits the full
            time until the server's reset deadline.
    """

    default_retry_delay: float = DEFAULT_RATE_LIMIT_WAIT
    max_retry_delay: float | None = None


def compute_reset_deadline(
    reset_header: str | None,
    *,
    wall_now: float | None = None,
    monotonic_now: float | None = None,
) -> float | None:
    """Convert an ``x-ratelimit-reset`` Unix timestamp into a monotonic deadline.

    The deadline is ``monotonic_now + (reset - wall_now)``. Correlating the two
    clocks is a best-effort heuristic: clock drift or a wall-clock step between
    the two reads shifts the result.

    Args:
        reset_header: Header value (Unix timestamp in seconds), if present.
        wall_now: Current ``time.time()``; read now if omitted.
        monotonic_now: Current ``time.monotonic()``; read now if omitted.

    Returns:
        Deadline on the ``time.monotonic()`` clock, or None if the header is
        missing or unparseable.
    """
    if not reset_header:
        return None
    try:
        reset = float(reset_header)
    except ValueError:
        _LOGGER.debug("Could not parse x-ratelimit-reset header %r", reset_header)
        return None

    if wall_now is None:
        wall_now = time.time()
    if monotonic_now is None:
        monotonic_now = time.monotonic()
    return monotonic_now + (reset - wall_now)


class RateLimiter:
    """Rate limit handler with x-ratelimit-reset support.

    Handles HTTP 429 (Too Many Requests) by sleeping until the deadline carried
    by a :class:`RateLimitError`, or for a fixed fallback delay when the server
    gave none.

    Example:
        limiter = RateLimiter(default_retry_delay=30.0)

        try:
            await api.send(request)
        except RateLimitError as err:
            await limiter.wait(err.reset_at)
    """

    def __init__(
        self,
        default_retry_delay: float = DEFAULT_RATE_LIMIT_WAIT,
        max_retry_delay: float | None = None,
    ) -> None:
        """Initialize rate limiter.

        Args:
            default_retry_delay: Delay when the server gave no reset time.
            max_retry_delay: Optional cap on any single wait. Leave as None to
                block until the reset deadline; a cap retries early and may hit
                another 429.
        """
        self.config = RateLimitConfig(
            default_retry_delay=default_retry_delay,
            max_retry_delay=max_retry_delay,
        )

    def get_retry_delay(self, reset_at: float | None, *, monotonic_now: float | None = None) -> float:
        """Calculate how long to wait before retrying.

        Args:
            reset_at: Monotonic deadline from a :class:`RateLimitError`, if any.
            monotonic_now: Current ``time.monotonic()``; read now if omitted.

        Returns:
            Delay in seconds, never negative.
        """
        if reset_at is None:
            delay = self.config.default_retry_delay
        else:
            if monotonic_now is None:
                monotonic_now = time.monotonic()
            delay = reset_at - monotonic_now

        if self.config.max_retry_delay is not None:
            delay = min(delay, self.config.max_retry_delay)
        return max(0.0, delay)

    async def wait(self, reset_at: float | None) -> None:
        """Sleep until the rate limit is expected to clear.

        Cancellation of the calling task interrupts the sleep.
        """
        delay = self.get_retry_delay(reset_at)
        _LOGGER.warning("Rate limited (429), waiting %.1f seconds before retry", delay)
        await asyncio.sleep(delay)


async def retry_with_attempts(
    func: Callable[[], Awaitable[_T]],
    *,
    attempts: int = DEFAULT_ATTEMPTS,
    rate_limiter: RateLimiter | None = None,
) -> _T:
    """Run ``func`` until it succeeds, a client error occurs or attempts run out.

    Policy after a failed attempt, when attempts remain:
        - local errors (bad parameters, unparseable selectors or colors):
          raise immediately.
        - :class:`RateLimitError`: wait until its deadline (or the fallback
          delay), then retry.
        - any other client error (:func:`is_client_error`): raise immediately.
        - anything else (server, connection, serialization...): retry at once.

    Errors from earlier attempts are discarded if a later attempt succeeds.

    Args:
        func: Async function performing one attempt.
        attempts: Total attempt budget (at least 1).
        rate_limiter: Rate limiter for 429 waits; a default one is used if omitted.

    Returns:
        Result of the first successful attempt.

    Raises:
        LifxError: The last error once attempts are exhausted, or the first
            non-retryable one.
    """
    if rate_limiter is None:
        rate_limiter = RateLimiter()

    attempt = 1
    while True:
        try:
            return await func()
        except LifxError as err:
            if isinstance(err, _LOCAL_ERRORS):
                raise
            if attempt >= attempts:
                if attempts > 1:
                    _LOGGER.warning("All %d attempts exhausted: %s", attempts, err)
                raise

            if isinstance(err, RateLimitError):
                await rate_limiter.wait(err.reset_at)
            elif is_client_error(err):
                _LOGGER.debug("Attempt %d/%d failed with client error, not retrying: %s", attempt, attempts, err)
                raise
            else:
                _LOGGER.warning("Attempt %d/%d failed: %s. Retrying", attempt, attempts, err)

        attempt += 1

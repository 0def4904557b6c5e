"""Retry policy for Notion API requests.

:class:`RetryPolicy` answers two questions for the transport after a
failed attempt: retry or give up, and how long to wait first.  A
server-provided ``Retry-After`` always wins over the exponential
schedule.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

import httpx

from notion_jarkup.config import JarkupConfig

RETRYABLE_STATUSES: frozenset[int] = frozenset({429, 500, 502, 503, 504})

_RETRYABLE_EXCEPTIONS: tuple[type[Exception], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
)


def retry_reason(status_code: int | None) -> str:
    """Tag value for ``retries_total``: why the attempt is being repeated."""
    if status_code is None:
        return "network_error"
    if status_code == 429:
        return "rate_limited"
    return "server_error"


@dataclass(frozen=True)
class RetryPolicy:
    """Attempt budget and backoff schedule.

    Parameters
    ----------
    max_attempts:
        Total attempts per request, including the first.
    base_delay:
        Delay (seconds) before the first retry; doubles per attempt.
    max_delay:
        Cap (seconds) on the exponential delay.  ``Retry-After`` is not
        capped.
    jitter:
        Scale every delay to a random 50-100 % of its value.
    """

    max_attempts: int = 5
    base_delay: float = 1.0
    max_delay: float = 60.0
    jitter: bool = True

    @classmethod
    def from_config(cls, config: JarkupConfig) -> RetryPolicy:
        return cls(
            max_attempts=config.retry_max_attempts,
            base_delay=config.retry_base_delay,
            max_delay=config.retry_max_delay,
            jitter=config.retry_jitter,
        )

    def is_retryable(
        self,
        attempt: int,
        status_code: int | None = None,
        exception: Exception | None = None,
    ) -> bool:
        """Whether attempt number *attempt* (0-indexed) may be followed by another.

        An exception, when given, decides on its own; otherwise the
        status code does.
        """
        if attempt + 1 >= self.max_attempts:
            return False
        if exception is not None:
            return isinstance(exception, _RETRYABLE_EXCEPTIONS)
        return status_code in RETRYABLE_STATUSES

    def delay(self, attempt: int, retry_after: float | None = None) -> float:
        """Seconds to wait before the attempt after *attempt*."""
        if retry_after is not None:
            delay = retry_after
        else:
            delay = min(self.base_delay * (2 ** attempt), self.max_delay)

        if self.jitter:
            delay *= 0.5 + random.random() * 0.5
        return delay

"""Client-side pacing for Notion API requests.

Notion allows an average of three requests per second per integration.
:class:`RequestPacer` spaces requests ``1 / rate`` seconds apart while
letting up to ``burst`` requests through back to back after an idle
period.  It tracks a single "next slot" timestamp instead of a token
count: each caller reserves the next slot and sleeps until it opens.
"""

from __future__ import annotations

import asyncio
import time


class RequestPacer:
    """Async request pacer.

    Parameters
    ----------
    rate_rps:
        Sustained requests per second.
    burst:
        Requests allowed back to back after the pacer has been idle.
    """

    __slots__ = ("_interval", "_lock", "_next_slot", "_tolerance")

    def __init__(self, rate_rps: float, burst: int = 10) -> None:
        if rate_rps <= 0:
            raise ValueError(f"rate_rps must be > 0, got {rate_rps}")
        if burst < 1:
            raise ValueError(f"burst must be >= 1, got {burst}")

        self._interval = 1.0 / rate_rps
        # How far ahead of "now" reservations may run before callers wait.
        self._tolerance = (burst - 1) * self._interval
        self._next_slot = time.monotonic()
        self._lock = asyncio.Lock()

    async def wait(self) -> float:
        """Reserve the next request slot, sleeping until it opens.

        Returns the number of seconds slept (``0.0`` when the slot was
        already open).
        """
        async with self._lock:
            now = time.monotonic()
            slot = max(self._next_slot, now)
            delay = max(0.0, slot - now - self._tolerance)
            self._next_slot = slot + self._interval

        if delay > 0:
            await asyncio.sleep(delay)
        return delay

"""Pluggable metrics for notion-jarkup.

Pass any object with ``increment``, ``timing`` and ``gauge`` methods as
``JarkupConfig.metrics``; otherwise data points go to a
:class:`NoopMetricsHook`.

Names emitted:

* ``notion_jarkup.requests_total``             -- counter, tagged by ``status``
* ``notion_jarkup.retries_total``              -- counter, tagged by ``reason``
* ``notion_jarkup.rate_limited_total``         -- counter
* ``notion_jarkup.request_duration_ms``        -- timing
* ``notion_jarkup.rate_limit_wait_ms``         -- timing
* ``notion_jarkup.blocks_converted_total``     -- counter, tagged by ``block_type``
* ``notion_jarkup.unsupported_blocks_total``   -- counter, tagged by ``block_type``
* ``notion_jarkup.enrichment_fetch_total``     -- counter
* ``notion_jarkup.enrichment_failures_total``  -- counter
* ``notion_jarkup.convert_duration_ms``        -- timing
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Metrics backend; *tags* are string pairs, ``ms`` is milliseconds."""

    def increment(self, name: str, value: int = 1, tags: dict[str, str] | None = None) -> None: ...

    def timing(self, name: str, ms: float, tags: dict[str, str] | None = None) -> None: ...

    def gauge(self, name: str, value: float, tags: dict[str, str] | None = None) -> None: ...


class NoopMetricsHook:
    __slots__ = ()

    def increment(self, name: str, value: int = 1, tags: dict[str, str] | None = None) -> None:
        pass

    def timing(self, name: str, ms: float, tags: dict[str, str] | None = None) -> None:
        pass

    def gauge(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        pass


def resolve_metrics(metrics: MetricsHook | None) -> MetricsHook:
    """Return *metrics*, or a :class:`NoopMetricsHook` when it is ``None``."""
    return metrics if metrics is not None else NoopMetricsHook()

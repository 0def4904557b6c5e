"""notion_jarkup.notion_api -- Notion API transport and the block source.

* :mod:`.rate_limit` -- request pacing.
* :mod:`.retries` -- retry policy and backoff schedule.
* :mod:`.transport` -- HTTP transport with auth, retries, and pacing.
* :mod:`.blocks` -- block children listing.
"""

from __future__ import annotations

from .blocks import AsyncBlockAPI
from .rate_limit import RequestPacer
from .retries import RetryPolicy
from .transport import AsyncNotionTransport

__all__ = [
    "AsyncBlockAPI",
    "AsyncNotionTransport",
    "RequestPacer",
    "RetryPolicy",
]

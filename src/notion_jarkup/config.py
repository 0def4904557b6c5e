"""Configuration for notion-jarkup.

:class:`JarkupConfig` captures every tuneable knob: the Notion API
connection, retry and pacing behaviour, the enrichment HTTP client and
the single conversion toggle, ``enable_unsupported_block``.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

from notion_jarkup._version import __version__

DEFAULT_USER_AGENT: str = f"notion-jarkup/{__version__}"
"""``User-Agent`` sent when fetching pages for metadata enrichment."""


@dataclass
class JarkupConfig:
    """Complete configuration for a notion-jarkup client.

    Every parameter has a sensible default so that the only value a real
    conversion needs is ``token``.

    Parameters
    ----------
    token:
        Notion integration token.  Never logged.
    notion_version:
        Value of the ``Notion-Version`` header sent with every request.
    base_url:
        API root URL.  Override for proxy or testing environments.
    enable_unsupported_block:
        How to render Notion block kinds that have no jarkup equivalent
        (audio, embed, to-do, child pages, ...).

        * ``True`` -- emit an ``Unsupported`` placeholder naming the kind.
        * ``False`` -- silently omit the block.

        PDF blocks are always omitted regardless of this flag.
    retry_max_attempts:
        Maximum number of attempts per request for retryable HTTP errors.
    retry_base_delay:
        Base delay (seconds) for exponential backoff.
    retry_max_delay:
        Upper cap (seconds) on computed backoff delay.
    retry_jitter:
        Scale backoff intervals randomly to 50-100 % of their value.
    rate_limit_rps:
        Sustained requests per second for Notion API pacing; requests are
        spaced one slot apart by :class:`RequestPacer`, with a burst of 10.
    timeout_seconds:
        Notion API request timeout in seconds.
    http_proxy:
        Optional HTTP/HTTPS proxy URL, used by both HTTP clients.
    enrichment_timeout_seconds:
        Timeout for each bookmark / favicon page fetch.
    enrichment_user_agent:
        ``User-Agent`` header for enrichment fetches.
    metrics:
        Optional :class:`~notion_jarkup.observability.MetricsHook`.
    """

    # ── Core ────────────────────────────────────────────────────────────
    token: str = ""

    notion_version: str = "2025-09-03"

    base_url: str = "https://api.notion.com/v1"

    # ── Conversion ──────────────────────────────────────────────────────
    enable_unsupported_block: bool = True

    # ── Retry & rate ────────────────────────────────────────────────────
    retry_max_attempts: int = 5

    retry_base_delay: float = 1.0

    retry_max_delay: float = 60.0

    retry_jitter: bool = True

    rate_limit_rps: float = 3.0

    # ── HTTP ────────────────────────────────────────────────────────────
    timeout_seconds: float = 30.0

    http_proxy: str | None = None

    # ── Enrichment ──────────────────────────────────────────────────────
    enrichment_timeout_seconds: float = 10.0

    enrichment_user_agent: str = DEFAULT_USER_AGENT

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        from urllib.parse import urlparse

        parsed = urlparse(self.base_url)
        if parsed.scheme == "http" and parsed.hostname not in (
            "localhost",
            "127.0.0.1",
            "::1",
        ):
            raise ValueError(
                f"base_url uses insecure HTTP for non-local host '{parsed.hostname}'. "
                "Use HTTPS to protect your API token, or target localhost for testing."
            )

        if self.retry_max_attempts < 1:
            raise ValueError(f"retry_max_attempts must be >= 1, got {self.retry_max_attempts}")
        if self.retry_base_delay < 0:
            raise ValueError(f"retry_base_delay must be >= 0, got {self.retry_base_delay}")
        if self.retry_max_delay < 0:
            raise ValueError(f"retry_max_delay must be >= 0, got {self.retry_max_delay}")
        if self.rate_limit_rps <= 0:
            raise ValueError(f"rate_limit_rps must be > 0, got {self.rate_limit_rps}")
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {self.timeout_seconds}")
        if self.enrichment_timeout_seconds <= 0:
            raise ValueError(
                "enrichment_timeout_seconds must be > 0, "
                f"got {self.enrichment_timeout_seconds}"
            )

    def __repr__(self) -> str:
        """Mask the token to prevent accidental credential leakage."""
        parts: list[str] = []
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if f.name == "token":
                masked = f"...{val[-4:]}" if len(val) >= 4 else "****"
                parts.append(f"token='{masked}'")
            else:
                parts.append(f"{f.name}={val!r}")
        return f"JarkupConfig({', '.join(parts)})"

"""URL fetcher used for bookmark and favicon enrichment.

Every failure -- malformed URL, DNS, TLS, timeout, non-2xx status, an
undecodable body -- is collapsed into :class:`JarkupFetchError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import httpx

from notion_jarkup.config import JarkupConfig
from notion_jarkup.errors import JarkupFetchError


@dataclass(frozen=True)
class FetchedPage:
    """A fetched document.

    ``url`` is the final URL after redirects; relative references in
    ``text`` resolve against its origin.
    """

    url: str
    text: str


@runtime_checkable
class UrlFetcher(Protocol):
    """Anything that can fetch a URL for enrichment."""

    async def fetch(self, url: str) -> FetchedPage:
        """Fetch *url*, raising :class:`JarkupFetchError` on any failure."""
        ...


class HttpUrlFetcher:
    """:class:`UrlFetcher` backed by :class:`httpx.AsyncClient`.

    Parameters
    ----------
    config:
        Supplies the enrichment timeout, user agent and proxy.
    client:
        Optional pre-built client.  When omitted one is created and closed
        by :meth:`close`.
    """

    def __init__(
        self,
        config: JarkupConfig,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if client is None:
            client = httpx.AsyncClient(
                headers={"User-Agent": config.enrichment_user_agent},
                timeout=httpx.Timeout(config.enrichment_timeout_seconds),
                follow_redirects=True,
                proxy=config.http_proxy,
            )
        self._client = client

    async def fetch(self, url: str) -> FetchedPage:
        try:
            response = await self._client.get(url)
            response.raise_for_status()
            text = response.text
        except httpx.HTTPStatusError as exc:
            raise JarkupFetchError(
                message=f"GET {url} returned {exc.response.status_code}",
                context={"url": url, "status_code": exc.response.status_code},
                cause=exc,
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeDecodeError, LookupError) as exc:
            raise JarkupFetchError(
                message=f"GET {url} failed: {exc}",
                context={"url": url},
                cause=exc,
            ) from exc
        return FetchedPage(url=str(response.url), text=text)

    async def close(self) -> None:
        await self._client.aclose()

"""Best-effort metadata enrichment for bookmarks and links.

Nothing in this module raises to its caller.  A failed fetch, a
malformed URL or a page without the wanted tags all yield ``None`` for
the affected field.  Results are not cached: every call fetches again.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from urllib.parse import urljoin, urlsplit

from notion_jarkup.errors import JarkupFetchError
from notion_jarkup.observability import MetricsHook, get_logger, resolve_metrics

from .fetcher import UrlFetcher
from .meta import PageMetadata, extract_metadata

log = get_logger("notion_jarkup.enrich")


@dataclass(frozen=True)
class BookmarkPreview:
    """Preview fields of a bookmark card."""

    title: str | None = None
    description: str | None = None
    image: str | None = None


def resolve_favicon(ref: str | None, page_url: str) -> str | None:
    """Turn a favicon reference into an absolute URL.

    Absolute references are returned unchanged.  Anything else resolves
    against the *origin* of *page_url* (scheme and host), not its path::

        >>> resolve_favicon("/fav.ico", "https://example.com/articles/x")
        'https://example.com/fav.ico'
    """
    if not ref:
        return None
    try:
        parsed = urlsplit(ref)
        if parsed.scheme and parsed.netloc:
            return ref

        page = urlsplit(page_url)
        if not page.scheme or not page.netloc:
            return None
        return urljoin(f"{page.scheme}://{page.netloc}/", ref)
    except ValueError:
        # e.g. an unbalanced IPv6 bracket in a third-party href
        return None


class MetadataEnricher:
    """Fetch favicon and bookmark-preview metadata for URLs.

    Parameters
    ----------
    fetcher:
        The :class:`UrlFetcher` used for page fetches.
    metrics:
        Optional metrics backend.
    """

    def __init__(self, fetcher: UrlFetcher, metrics: MetricsHook | None = None) -> None:
        self._fetcher = fetcher
        self._metrics = resolve_metrics(metrics)

    async def fetch_metadata(self, url: str) -> PageMetadata:
        """Fetch *url* and return its metadata with an absolute favicon.

        Returns an empty :class:`PageMetadata` when the page cannot be
        fetched.
        """
        if not url:
            return PageMetadata()

        self._metrics.increment("notion_jarkup.enrichment_fetch_total")
        try:
            page = await self._fetcher.fetch(url)
        except JarkupFetchError as exc:
            self._metrics.increment("notion_jarkup.enrichment_failures_total")
            log.debug(
                "enrichment fetch failed",
                extra={"extra_fields": {"op": "fetch_metadata", "url": url, "error": exc.message}},
            )
            return PageMetadata()

        try:
            meta = extract_metadata(page.text)
            return dataclasses.replace(meta, favicon=resolve_favicon(meta.favicon, page.url))
        except Exception as exc:
            self._metrics.increment("notion_jarkup.enrichment_failures_total")
            log.debug(
                "enrichment parse failed",
                extra={"extra_fields": {"op": "fetch_metadata", "url": url, "error": str(exc)}},
            )
            return PageMetadata()

    async def fetch_favicon(self, url: str) -> str | None:
        """Return the absolute favicon URL of the page at *url*, if any."""
        return (await self.fetch_metadata(url)).favicon

    async def fetch_bookmark_preview(self, url: str) -> BookmarkPreview:
        """Return the title, description and image of the page at *url*."""
        meta = await self.fetch_metadata(url)
        return BookmarkPreview(
            title=meta.title,
            description=meta.description,
            image=meta.image,
        )

"""notion_jarkup.enrich -- best-effort page metadata for bookmarks and links."""

from __future__ import annotations

from .enricher import BookmarkPreview, MetadataEnricher, resolve_favicon
from .fetcher import FetchedPage, HttpUrlFetcher, UrlFetcher
from .meta import PageMetadata, extract_metadata

__all__ = [
    "BookmarkPreview",
    "FetchedPage",
    "HttpUrlFetcher",
    "MetadataEnricher",
    "PageMetadata",
    "UrlFetcher",
    "extract_metadata",
    "resolve_favicon",
]

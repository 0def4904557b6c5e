"""Shared test fixtures for the notion-jarkup test suite."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

import pytest

from notion_jarkup.config import JarkupConfig
from notion_jarkup.converter.block_converter import BlockConverter
from notion_jarkup.converter.rich_text import RichTextConverter
from notion_jarkup.enrich import FetchedPage, MetadataEnricher
from notion_jarkup.errors import JarkupFetchError


class FakeBlockSource:
    """In-memory block source keyed by parent id.

    ``failures`` maps a parent id to the exception raised when its
    children are listed (after ``fail_after`` items have been yielded).
    """

    def __init__(
        self,
        tree: dict[str, list[dict[str, Any]]] | None = None,
        failures: dict[str, Exception] | None = None,
        fail_after: int = 0,
    ) -> None:
        self.tree = tree or {}
        self.failures = failures or {}
        self.fail_after = fail_after
        self.calls: list[str] = []

    async def iter_children(self, block_id: str) -> AsyncIterator[dict[str, Any]]:
        self.calls.append(block_id)
        for i, block in enumerate(self.tree.get(block_id, [])):
            if block_id in self.failures and i >= self.fail_after:
                raise self.failures[block_id]
            yield block
        if block_id in self.failures:
            raise self.failures[block_id]


class FakeFetcher:
    """URL fetcher serving canned HTML; unknown URLs fail."""

    def __init__(
        self,
        pages: dict[str, str] | None = None,
        redirects: dict[str, str] | None = None,
    ) -> None:
        self.pages = pages or {}
        self.redirects = redirects or {}
        self.calls: list[str] = []

    async def fetch(self, url: str) -> FetchedPage:
        self.calls.append(url)
        final_url = self.redirects.get(url, url)
        if final_url not in self.pages:
            raise JarkupFetchError(message=f"GET {url} failed", context={"url": url})
        return FetchedPage(url=final_url, text=self.pages[final_url])


class RecordingMetrics:
    """MetricsHook that records every call."""

    def __init__(self) -> None:
        self.counters: list[tuple[str, int, dict[str, str] | None]] = []
        self.timings: list[tuple[str, float, dict[str, str] | None]] = []
        self.gauges: list[tuple[str, float, dict[str, str] | None]] = []

    def increment(self, name: str, value: int = 1, tags: dict[str, str] | None = None) -> None:
        self.counters.append((name, value, tags))

    def timing(self, name: str, ms: float, tags: dict[str, str] | None = None) -> None:
        self.timings.append((name, ms, tags))

    def gauge(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        self.gauges.append((name, value, tags))

    def count(self, name: str) -> int:
        return sum(value for n, value, _ in self.counters if n == name)


@pytest.fixture
def config() -> JarkupConfig:
    """Default test configuration with a dummy token."""
    return JarkupConfig(token="test_token_1234")


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def enricher(fetcher: FakeFetcher) -> MetadataEnricher:
    return MetadataEnricher(fetcher)


@pytest.fixture
def rich_text(enricher: MetadataEnricher) -> RichTextConverter:
    return RichTextConverter(enricher)


@pytest.fixture
def make_converter(fetcher: FakeFetcher):
    """Factory building a BlockConverter over an in-memory block tree."""

    def _make(
        tree: dict[str, list[dict[str, Any]]],
        *,
        enable_unsupported_block: bool = True,
        metrics: Any = None,
        source: FakeBlockSource | None = None,
    ) -> BlockConverter:
        enricher = MetadataEnricher(fetcher)
        return BlockConverter(
            source if source is not None else FakeBlockSource(tree),
            RichTextConverter(enricher),
            enricher,
            enable_unsupported_block=enable_unsupported_block,
            metrics=metrics,
        )

    return _make

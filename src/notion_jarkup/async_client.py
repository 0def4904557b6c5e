"""Asynchronous notion-jarkup client.

:class:`AsyncJarkupClient` owns the Notion transport and the enrichment
HTTP client, and exposes the single conversion entry point
:meth:`~AsyncJarkupClient.convert_block`.

Usage::

    import asyncio
    from notion_jarkup import AsyncJarkupClient

    async def main():
        async with AsyncJarkupClient(token="secret_xxx") as client:
            components = await client.convert_block("<page_id>")
            print([c.to_dict() for c in components])

    asyncio.run(main())

A caller-imposed timeout wraps the whole call::

    await asyncio.wait_for(client.convert_block(page_id), timeout=120)
"""

from __future__ import annotations

from typing import Any

import httpx

from notion_jarkup.components import Component
from notion_jarkup.config import JarkupConfig
from notion_jarkup.converter.block_converter import BlockConverter
from notion_jarkup.converter.rich_text import RichTextConverter
from notion_jarkup.enrich import HttpUrlFetcher, MetadataEnricher
from notion_jarkup.notion_api.blocks import AsyncBlockAPI
from notion_jarkup.notion_api.transport import AsyncNotionTransport
from notion_jarkup.observability import get_logger

log = get_logger("notion_jarkup.client")


class AsyncJarkupClient:
    """Asynchronous Notion-to-jarkup client.

    Parameters
    ----------
    token:
        Notion integration token.
    notion_client:
        Optional :class:`httpx.AsyncClient` for the Notion API (tests,
        custom transports).  Must already carry the auth headers.
    enrichment_client:
        Optional :class:`httpx.AsyncClient` for bookmark/favicon fetches.
    **kwargs:
        Forwarded to :class:`JarkupConfig`.
    """

    def __init__(
        self,
        token: str,
        *,
        notion_client: httpx.AsyncClient | None = None,
        enrichment_client: httpx.AsyncClient | None = None,
        **kwargs: Any,
    ) -> None:
        self._config = JarkupConfig(token=token, **kwargs)
        self._transport = AsyncNotionTransport(self._config, client=notion_client)
        self._blocks = AsyncBlockAPI(self._transport)
        self._fetcher = HttpUrlFetcher(self._config, client=enrichment_client)
        self._enricher = MetadataEnricher(self._fetcher, metrics=self._config.metrics)
        self._converter = BlockConverter(
            self._blocks,
            RichTextConverter(self._enricher),
            self._enricher,
            enable_unsupported_block=self._config.enable_unsupported_block,
            metrics=self._config.metrics,
        )

    @property
    def config(self) -> JarkupConfig:
        return self._config

    async def convert_block(self, block_id: str) -> list[Component]:
        """Convert the children of *block_id* (a page or block) to jarkup.

        Parameters
        ----------
        block_id:
            ID of the page or block whose children are converted.

        Returns
        -------
        list[Component]
            Top-level components in document order.

        Raises
        ------
        JarkupTransportError
            If the Notion API cannot be read.
        JarkupParseError
            If the block tree is malformed or nested too deeply.
        """
        log.debug(
            "convert_block start",
            extra={"extra_fields": {"op": "convert_block", "block_id": block_id}},
        )
        components = await self._converter.convert(block_id)
        log.info(
            "convert_block complete",
            extra={
                "extra_fields": {
                    "op": "convert_block",
                    "block_id": block_id,
                    "components": len(components),
                }
            },
        )
        return components

    async def close(self) -> None:
        """Close both HTTP clients."""
        await self._transport.close()
        await self._fetcher.close()

    async def __aenter__(self) -> AsyncJarkupClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

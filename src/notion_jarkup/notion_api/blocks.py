"""Block API wrapper: the paged block source the converter reads from."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

from .transport import AsyncNotionTransport


class AsyncBlockAPI:
    """Asynchronous wrapper for the Notion ``/blocks`` endpoints.

    Parameters
    ----------
    transport:
        A configured :class:`AsyncNotionTransport`.
    """

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def retrieve(self, block_id: str) -> dict[str, Any]:
        """Retrieve a single block object by its ID."""
        return await self._transport.request("GET", f"/blocks/{block_id}")

    def iter_children(self, block_id: str) -> AsyncIterator[dict[str, Any]]:
        """Lazily iterate the children of a block (or page), in order.

        Each call starts a fresh walk from the first page, so the sequence
        can be restarted by calling again.
        """
        return self._transport.paginate(f"/blocks/{block_id}/children")

    async def get_children(self, block_id: str) -> list[dict[str, Any]]:
        """Retrieve all children of a block, auto-paginating."""
        return [item async for item in self.iter_children(block_id)]

"""Notion block tree to jarkup component tree.

:class:`BlockConverter` walks the children of a block in document order,
recursing into nested blocks, and returns one ordered component list per
parent.  Two rules carry state across siblings:

* consecutive list items of the same style collapse into one
  :class:`List`;
* a table's first row moves to the header slot when the table declares
  a column header.

Usage::

    converter = BlockConverter(block_api, rich_text, enricher)
    components = await converter.convert("<page_or_block_id>")
"""

from __future__ import annotations

import time
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any, Protocol

from notion_jarkup.components import (
    BlockQuote,
    Bookmark,
    Callout,
    CalloutType,
    CodeBlock,
    Component,
    Divider,
    File,
    Heading,
    Image,
    Katex,
    List,
    ListItem,
    ListStyle,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    Toggle,
    Unsupported,
)
from notion_jarkup.enrich import MetadataEnricher
from notion_jarkup.errors import JarkupNestingDepthError
from notion_jarkup.models import Block, BlockType, plain_text_of
from notion_jarkup.observability import MetricsHook, get_logger, resolve_metrics

from .rich_text import RichTextConverter

log = get_logger("notion_jarkup.converter")

MAX_NESTING_DEPTH = 64

# Layout / navigation blocks: nothing is emitted and their children are
# not visited.
_GROUP_TYPES: frozenset[BlockType] = frozenset({
    BlockType.COLUMN,
    BlockType.COLUMN_LIST,
    BlockType.TABLE_OF_CONTENTS,
})

# Always dropped, whatever ``enable_unsupported_block`` says.
_DROPPED_TYPES: frozenset[BlockType] = frozenset({BlockType.PDF})

# Kinds with no jarkup equivalent, and the name shown in the placeholder.
_UNSUPPORTED_TYPES: dict[BlockType, str] = {
    BlockType.AUDIO: "Audio",
    BlockType.BREADCRUMB: "Breadcrumb",
    BlockType.CHILD_DATABASE: "ChildDatabase",
    BlockType.CHILD_PAGE: "ChildPage",
    BlockType.EMBED: "Embed",
    BlockType.LINK_PREVIEW: "LinkPreview",
    BlockType.LINK_TO_PAGE: "LinkToPage",
    BlockType.SYNCED_BLOCK: "SyncedBlock",
    BlockType.TEMPLATE: "Template",
    BlockType.TO_DO: "ToDo",
    BlockType.VIDEO: "Video",
    BlockType.UNSUPPORTED: "Unsupported",
}

_LIST_STYLES: dict[BlockType, ListStyle] = {
    BlockType.BULLETED_LIST_ITEM: ListStyle.UNORDERED,
    BlockType.NUMBERED_LIST_ITEM: ListStyle.ORDERED,
}

_CALLOUT_TYPES: dict[str, CalloutType] = {
    "default": CalloutType.NOTE,
    "gray": CalloutType.NOTE,
    "blue": CalloutType.NOTE,
    "green": CalloutType.TIP,
    "purple": CalloutType.IMPORTANT,
    "yellow": CalloutType.WARNING,
    "orange": CalloutType.WARNING,
    "brown": CalloutType.WARNING,
    "red": CalloutType.CAUTION,
    "pink": CalloutType.CAUTION,
}


class BlockSource(Protocol):
    """Lists the children of a block, lazily and in document order."""

    def iter_children(self, block_id: str) -> AsyncIterator[dict[str, Any]]:
        ...


def unsupported_details(label: str) -> str:
    return f"Notion: `{label} Block` is not supported."


def callout_type(color: str | None) -> CalloutType:
    """Map a Notion callout colour (foreground or ``_background``) to a type."""
    name = (color or "default").removesuffix("_background")
    return _CALLOUT_TYPES.get(name, CalloutType.NOTE)


def _file_url(data: dict[str, Any]) -> str:
    """URL of a Notion file object (external, hosted or uploaded)."""
    source = data.get(data.get("type", ""), {})
    if isinstance(source, dict):
        return source.get("url", "")
    return ""


class BlockConverter:
    """Recursive converter from Notion blocks to jarkup components.

    The converter itself holds no per-call state, so one instance can
    serve any number of sequential :meth:`convert` calls.

    Parameters
    ----------
    source:
        Where child blocks come from, usually an
        :class:`~notion_jarkup.notion_api.AsyncBlockAPI`.
    rich_text:
        Converter for inline spans.
    enricher:
        Used for bookmark previews.
    enable_unsupported_block:
        Emit :class:`Unsupported` placeholders (``True``) or omit
        unsupported kinds (``False``).
    metrics:
        Optional metrics backend.
    """

    def __init__(
        self,
        source: BlockSource,
        rich_text: RichTextConverter,
        enricher: MetadataEnricher,
        enable_unsupported_block: bool = True,
        metrics: MetricsHook | None = None,
    ) -> None:
        self._source = source
        self._rich_text = rich_text
        self._enricher = enricher
        self._enable_unsupported_block = enable_unsupported_block
        self._metrics = resolve_metrics(metrics)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def convert(self, parent_id: str) -> list[Component]:
        """Convert every child of *parent_id* (recursively) into components.

        Raises
        ------
        JarkupTransportError
            If listing children fails at any depth.
        JarkupParseError
            If a block or rich-text record is malformed, or the tree is
            nested deeper than :data:`MAX_NESTING_DEPTH`.
        """
        t0 = time.monotonic()
        components = await self._convert_children(parent_id, depth=0)
        self._metrics.timing(
            "notion_jarkup.convert_duration_ms",
            (time.monotonic() - t0) * 1000,
        )
        return components

    # ------------------------------------------------------------------
    # Sibling loop
    # ------------------------------------------------------------------

    async def _convert_children(self, parent_id: str, depth: int) -> list[Component]:
        if depth > MAX_NESTING_DEPTH:
            raise JarkupNestingDepthError(
                message=f"Block nesting exceeds {MAX_NESTING_DEPTH} levels",
                context={"block_id": parent_id, "depth": depth, "limit": MAX_NESTING_DEPTH},
            )

        components: list[Component] = []
        # The component emitted for the previous sibling, or None when that
        # sibling produced nothing.  Only a List here can absorb a list item.
        last: Component | None = None

        async for raw in self._source.iter_children(parent_id):
            block = Block.from_api(raw)

            style = _LIST_STYLES.get(block.type)
            if style is not None:
                item = ListItem(
                    default=await self._rich_text.convert_raw(block.rich_text),
                    id=block.id,
                )
                if isinstance(last, List) and last.list_style in (None, style):
                    last.append_item(item)
                else:
                    last = List(list_style=style, default=[item])
                    components.append(last)
                self._count(block)
                continue

            last = await self._dispatch(block, depth)
            if last is not None:
                components.append(last)

        return components

    async def _dispatch(self, block: Block, depth: int) -> Component | None:
        if block.type in _GROUP_TYPES or block.type in _DROPPED_TYPES:
            return None

        label = _UNSUPPORTED_TYPES.get(block.type)
        if label is not None:
            self._metrics.increment(
                "notion_jarkup.unsupported_blocks_total",
                tags={"block_type": block.type.value},
            )
            if not self._enable_unsupported_block:
                log.debug(
                    "skipping unsupported block",
                    extra={"extra_fields": {"block_id": block.id, "block_type": block.type.value}},
                )
                return None
            return Unsupported(details=unsupported_details(label), id=block.id)

        handler = _BLOCK_HANDLERS[block.type]
        component = await handler(self, block, depth)
        self._count(block)
        return component

    def _count(self, block: Block) -> None:
        self._metrics.increment(
            "notion_jarkup.blocks_converted_total",
            tags={"block_type": block.type.value},
        )

    async def _children_of(self, block: Block, depth: int) -> list[Component]:
        if not block.has_children:
            return []
        return await self._convert_children(block.id, depth + 1)

    # ------------------------------------------------------------------
    # Block kind handlers
    # ------------------------------------------------------------------

    async def _convert_paragraph(self, block: Block, depth: int) -> Component:
        return Paragraph(
            default=await self._rich_text.convert_raw(block.rich_text),
            id=block.id,
        )

    async def _convert_heading(self, block: Block, depth: int, level: int) -> Component:
        text = await self._rich_text.convert_raw(block.rich_text)
        if block.data.get("is_toggleable", False):
            return Toggle(
                summary=text,
                default=await self._children_of(block, depth),
                id=block.id,
            )
        return Heading(level=level, default=text, id=block.id)

    async def _convert_heading_1(self, block: Block, depth: int) -> Component:
        return await self._convert_heading(block, depth, 1)

    async def _convert_heading_2(self, block: Block, depth: int) -> Component:
        return await self._convert_heading(block, depth, 2)

    async def _convert_heading_3(self, block: Block, depth: int) -> Component:
        return await self._convert_heading(block, depth, 3)

    async def _convert_divider(self, block: Block, depth: int) -> Component:
        return Divider(id=block.id)

    async def _convert_equation(self, block: Block, depth: int) -> Component:
        return Katex(expression=block.data.get("expression", ""), id=block.id)

    async def _convert_image(self, block: Block, depth: int) -> Component:
        caption = plain_text_of(block.data.get("caption"))
        return Image(src=_file_url(block.data), alt=caption or None, id=block.id)

    async def _convert_file(self, block: Block, depth: int) -> Component:
        return File(src=_file_url(block.data), name=block.data.get("name"), id=block.id)

    async def _convert_code(self, block: Block, depth: int) -> Component:
        return CodeBlock(
            code=plain_text_of(block.rich_text),
            language=block.data.get("language") or "plain text",
            default=await self._rich_text.convert_raw(block.data.get("caption")),
            id=block.id,
        )

    async def _convert_bookmark(self, block: Block, depth: int) -> Component:
        url = block.data.get("url", "")
        preview = await self._enricher.fetch_bookmark_preview(url)
        return Bookmark(
            url=url,
            title=preview.title,
            description=preview.description,
            image=preview.image,
            id=block.id,
        )

    async def _leading_paragraph_and_children(
        self, block: Block, depth: int
    ) -> list[Component]:
        """Text of the block as a Paragraph (if any) followed by its children."""
        content: list[Component] = []
        if block.rich_text:
            content.append(Paragraph(default=await self._rich_text.convert_raw(block.rich_text)))
        content.extend(await self._children_of(block, depth))
        return content

    async def _convert_callout(self, block: Block, depth: int) -> Component:
        return Callout(
            type=callout_type(block.data.get("color")),
            default=await self._leading_paragraph_and_children(block, depth),
            id=block.id,
        )

    async def _convert_quote(self, block: Block, depth: int) -> Component:
        return BlockQuote(
            default=await self._leading_paragraph_and_children(block, depth),
            id=block.id,
        )

    async def _convert_toggle(self, block: Block, depth: int) -> Component:
        children = await self._children_of(block, depth)
        return Toggle(
            default=children,
            summary=await self._rich_text.convert_raw(block.rich_text),
            id=block.id,
        )

    async def _convert_table(self, block: Block, depth: int) -> Component:
        children = await self._convert_children(block.id, depth + 1)
        rows = [c for c in children if isinstance(c, TableRow)]

        has_column_header = bool(block.data.get("has_column_header", False))
        header: list[TableRow] | None = None
        if has_column_header and rows:
            header = [rows.pop(0)]

        return Table(
            has_column_header=has_column_header,
            has_row_header=bool(block.data.get("has_row_header", False)),
            header=header,
            body=rows,
            id=block.id,
        )

    async def _convert_table_row(self, block: Block, depth: int) -> Component:
        cells = [
            TableCell(default=await self._rich_text.convert_raw(cell))
            for cell in block.data.get("cells") or []
        ]
        return TableRow(default=cells, id=block.id)


# ------------------------------------------------------------------
# Dispatch table
# ------------------------------------------------------------------

_BlockHandler = Callable[[BlockConverter, Block, int], Awaitable[Component]]

_BLOCK_HANDLERS: dict[BlockType, _BlockHandler] = {
    BlockType.PARAGRAPH: BlockConverter._convert_paragraph,
    BlockType.HEADING_1: BlockConverter._convert_heading_1,
    BlockType.HEADING_2: BlockConverter._convert_heading_2,
    BlockType.HEADING_3: BlockConverter._convert_heading_3,
    BlockType.DIVIDER: BlockConverter._convert_divider,
    BlockType.EQUATION: BlockConverter._convert_equation,
    BlockType.IMAGE: BlockConverter._convert_image,
    BlockType.FILE: BlockConverter._convert_file,
    BlockType.CODE: BlockConverter._convert_code,
    BlockType.BOOKMARK: BlockConverter._convert_bookmark,
    BlockType.CALLOUT: BlockConverter._convert_callout,
    BlockType.QUOTE: BlockConverter._convert_quote,
    BlockType.TOGGLE: BlockConverter._convert_toggle,
    BlockType.TABLE: BlockConverter._convert_table,
    BlockType.TABLE_ROW: BlockConverter._convert_table_row,
}

_unhandled = (
    set(BlockType)
    - _BLOCK_HANDLERS.keys()
    - _UNSUPPORTED_TYPES.keys()
    - _LIST_STYLES.keys()
    - _GROUP_TYPES
    - _DROPPED_TYPES
)
if _unhandled:
    raise RuntimeError(
        "BlockConverter has no rule for block types: "
        + ", ".join(sorted(t.value for t in _unhandled))
    )

"""notion-jarkup -- convert Notion block trees into jarkup components.

Public re-exports
-----------------

* **Client:** :class:`AsyncJarkupClient`
* **Conversion:** :class:`BlockConverter`, :class:`RichTextConverter`
* **Configuration:** :class:`JarkupConfig`
* **Errors:** every :class:`JarkupError` subclass and :class:`ErrorCode`
* **Components:** the jarkup component classes

Usage::

    from notion_jarkup import AsyncJarkupClient

    async with AsyncJarkupClient(token="secret_xxx") as client:
        components = await client.convert_block("<page_id>")
"""

from __future__ import annotations

from notion_jarkup._version import __version__

# ── Client ──────────────────────────────────────────────────────────────
from notion_jarkup.async_client import AsyncJarkupClient

# ── Components ──────────────────────────────────────────────────────────
from notion_jarkup.components import (
    BlockComponent,
    BlockQuote,
    Bookmark,
    Callout,
    CalloutType,
    CodeBlock,
    Component,
    Divider,
    File,
    Heading,
    Icon,
    Image,
    InlineComponent,
    Katex,
    List,
    ListItem,
    ListStyle,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    Text,
    Toggle,
    Unsupported,
)

# ── Configuration ───────────────────────────────────────────────────────
from notion_jarkup.config import JarkupConfig

# ── Conversion ──────────────────────────────────────────────────────────
from notion_jarkup.converter import BlockConverter, RichTextConverter

# ── Errors ──────────────────────────────────────────────────────────────
from notion_jarkup.errors import (
    ErrorCode,
    JarkupAuthError,
    JarkupComponentShapeError,
    JarkupError,
    JarkupFetchError,
    JarkupInvalidResponseError,
    JarkupNestingDepthError,
    JarkupNetworkError,
    JarkupNotFoundError,
    JarkupParseError,
    JarkupPermissionError,
    JarkupRetryExhaustedError,
    JarkupTransportError,
    JarkupValidationError,
)

__all__ = [
    "__version__",
    # Client
    "AsyncJarkupClient",
    # Conversion
    "BlockConverter",
    "RichTextConverter",
    # Configuration
    "JarkupConfig",
    # Errors
    "ErrorCode",
    "JarkupError",
    "JarkupTransportError",
    "JarkupValidationError",
    "JarkupAuthError",
    "JarkupPermissionError",
    "JarkupNotFoundError",
    "JarkupRetryExhaustedError",
    "JarkupInvalidResponseError",
    "JarkupNetworkError",
    "JarkupParseError",
    "JarkupNestingDepthError",
    "JarkupComponentShapeError",
    "JarkupFetchError",
    # Components
    "Component",
    "BlockComponent",
    "InlineComponent",
    "Paragraph",
    "Heading",
    "List",
    "ListItem",
    "ListStyle",
    "Table",
    "TableRow",
    "TableCell",
    "Callout",
    "CalloutType",
    "BlockQuote",
    "Toggle",
    "Divider",
    "CodeBlock",
    "Katex",
    "Image",
    "File",
    "Bookmark",
    "Unsupported",
    "Text",
    "Icon",
]

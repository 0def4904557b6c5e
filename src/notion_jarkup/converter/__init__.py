"""Notion -> jarkup conversion.

- :class:`BlockConverter` -- recursive block tree walker.
- :class:`RichTextConverter` -- inline span conversion.
- :func:`is_keyboard_key` -- keyboard-key heuristic for code spans.
"""

from notion_jarkup.converter.block_converter import (
    MAX_NESTING_DEPTH,
    BlockConverter,
    BlockSource,
)
from notion_jarkup.converter.rich_text import RichTextConverter, is_keyboard_key

__all__ = [
    "MAX_NESTING_DEPTH",
    "BlockConverter",
    "BlockSource",
    "RichTextConverter",
    "is_keyboard_key",
]

"""Typed views of the Notion records the converter consumes.

Raw block and rich-text dicts from the Notion API are parsed once into
frozen dataclasses.  Kinds are closed ``str`` enums: a record whose kind
is not listed raises :class:`~notion_jarkup.errors.JarkupParseError`
instead of being skipped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from notion_jarkup.errors import JarkupParseError

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class BlockType(str, Enum):
    """Every Notion block ``type`` the converter understands."""

    AUDIO = "audio"
    BOOKMARK = "bookmark"
    BREADCRUMB = "breadcrumb"
    BULLETED_LIST_ITEM = "bulleted_list_item"
    CALLOUT = "callout"
    CHILD_DATABASE = "child_database"
    CHILD_PAGE = "child_page"
    CODE = "code"
    COLUMN = "column"
    COLUMN_LIST = "column_list"
    DIVIDER = "divider"
    EMBED = "embed"
    EQUATION = "equation"
    FILE = "file"
    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    IMAGE = "image"
    LINK_PREVIEW = "link_preview"
    LINK_TO_PAGE = "link_to_page"
    NUMBERED_LIST_ITEM = "numbered_list_item"
    PARAGRAPH = "paragraph"
    PDF = "pdf"
    QUOTE = "quote"
    SYNCED_BLOCK = "synced_block"
    TABLE = "table"
    TABLE_OF_CONTENTS = "table_of_contents"
    TABLE_ROW = "table_row"
    TEMPLATE = "template"
    TO_DO = "to_do"
    TOGGLE = "toggle"
    UNSUPPORTED = "unsupported"
    VIDEO = "video"


class MentionType(str, Enum):
    """Every rich-text mention ``type`` the converter understands."""

    USER = "user"
    DATE = "date"
    LINK_PREVIEW = "link_preview"
    LINK_MENTION = "link_mention"
    TEMPLATE_MENTION = "template_mention"
    PAGE = "page"
    DATABASE = "database"
    CUSTOM_EMOJI = "custom_emoji"


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Block:
    """One node of the Notion content tree.

    Attributes
    ----------
    id:
        The block UUID.
    type:
        The block kind.
    has_children:
        Whether the block has child blocks to fetch.
    data:
        The kind-specific payload (``raw[raw["type"]]``).
    """

    id: str
    type: BlockType
    has_children: bool = False
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> Block:
        """Parse a block object as returned by ``GET /blocks/{id}/children``.

        Raises
        ------
        JarkupParseError
            If ``id`` or ``type`` is missing, the type is unknown, or the
            type payload is not an object.
        """
        if not isinstance(raw, dict):
            raise JarkupParseError(
                message=f"Block record must be an object, got {type(raw).__name__}",
                context={"reason": "not_an_object"},
            )

        block_id = raw.get("id")
        raw_type = raw.get("type")
        if not block_id or not raw_type:
            raise JarkupParseError(
                message="Block record is missing 'id' or 'type'",
                context={"block_id": block_id, "block_type": raw_type},
            )

        try:
            block_type = BlockType(raw_type)
        except ValueError as exc:
            raise JarkupParseError(
                message=f"Unknown block type: {raw_type}",
                context={"block_id": block_id, "block_type": raw_type},
                cause=exc,
            ) from exc

        data = raw.get(raw_type, {})
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise JarkupParseError(
                message=f"Payload for block type '{raw_type}' must be an object",
                context={"block_id": block_id, "block_type": raw_type},
            )

        return cls(
            id=block_id,
            type=block_type,
            has_children=bool(raw.get("has_children", False)),
            data=data,
        )

    @property
    def rich_text(self) -> list[dict[str, Any]]:
        """The raw ``rich_text`` array of the payload (empty if absent)."""
        return self.data.get("rich_text") or []


# ---------------------------------------------------------------------------
# Rich text
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Annotations:
    """Styling flags of a rich-text span."""

    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    code: bool = False
    color: str = "default"

    @classmethod
    def from_api(cls, raw: dict[str, Any] | None) -> Annotations:
        if not raw:
            return cls()
        return cls(
            bold=bool(raw.get("bold", False)),
            italic=bool(raw.get("italic", False)),
            underline=bool(raw.get("underline", False)),
            strikethrough=bool(raw.get("strikethrough", False)),
            code=bool(raw.get("code", False)),
            color=raw.get("color") or "default",
        )


@dataclass(frozen=True)
class TextSpan:
    """A run of text, optionally linked."""

    plain_text: str
    link: str | None = None
    annotations: Annotations = field(default_factory=Annotations)


@dataclass(frozen=True)
class MentionSpan:
    """An inline reference (user, page, date, link, emoji, ...).

    ``target`` is the mention's kind-specific payload, e.g.
    ``{"href": ...}`` for a link mention or ``{"name": ..., "url": ...}``
    for a custom emoji.
    """

    mention_type: MentionType
    plain_text: str
    target: dict[str, Any] = field(default_factory=dict)
    annotations: Annotations = field(default_factory=Annotations)


@dataclass(frozen=True)
class EquationSpan:
    """An inline KaTeX expression."""

    expression: str
    annotations: Annotations = field(default_factory=Annotations)


RichTextSpan = Union[TextSpan, MentionSpan, EquationSpan]


def _require_payload(raw: dict[str, Any], key: str) -> dict[str, Any]:
    payload = raw.get(key)
    if not isinstance(payload, dict):
        raise JarkupParseError(
            message=f"Rich text span of type '{key}' is missing its '{key}' object",
            context={"span_type": key},
        )
    return payload


def parse_span(raw: dict[str, Any]) -> RichTextSpan:
    """Parse one Notion rich-text object.

    Raises
    ------
    JarkupParseError
        If the span type or mention type is unknown, or the type payload
        is missing.
    """
    if not isinstance(raw, dict):
        raise JarkupParseError(
            message=f"Rich text span must be an object, got {type(raw).__name__}",
            context={"reason": "not_an_object"},
        )

    span_type = raw.get("type")
    annotations = Annotations.from_api(raw.get("annotations"))

    if span_type == "text":
        text = _require_payload(raw, "text")
        link = text.get("link") or {}
        plain_text = raw.get("plain_text")
        if plain_text is None:
            plain_text = text.get("content", "")
        return TextSpan(
            plain_text=plain_text,
            link=link.get("url") or None,
            annotations=annotations,
        )

    if span_type == "mention":
        mention = _require_payload(raw, "mention")
        raw_kind = mention.get("type")
        try:
            kind = MentionType(raw_kind)
        except ValueError as exc:
            raise JarkupParseError(
                message=f"Unknown mention type: {raw_kind}",
                context={"span_type": "mention", "mention_type": raw_kind},
                cause=exc,
            ) from exc
        target = mention.get(kind.value) or {}
        return MentionSpan(
            mention_type=kind,
            plain_text=raw.get("plain_text", ""),
            target=target if isinstance(target, dict) else {},
            annotations=annotations,
        )

    if span_type == "equation":
        equation = _require_payload(raw, "equation")
        return EquationSpan(
            expression=equation.get("expression", ""),
            annotations=annotations,
        )

    raise JarkupParseError(
        message=f"Unknown rich text span type: {span_type}",
        context={"span_type": span_type},
    )


def parse_rich_text(raw: list[dict[str, Any]] | None) -> list[RichTextSpan]:
    """Parse a Notion ``rich_text`` array, preserving order."""
    return [parse_span(seg) for seg in raw or []]


def plain_text_of(raw: list[dict[str, Any]] | None) -> str:
    """Concatenate the ``plain_text`` of every segment in a rich-text array."""
    parts: list[str] = []
    for seg in raw or []:
        if not isinstance(seg, dict):
            raise JarkupParseError(
                message=f"Rich text span must be an object, got {type(seg).__name__}",
                context={"reason": "not_an_object"},
            )
        text = seg.get("plain_text")
        if text is None:
            text = (seg.get("text") or {}).get("content", "")
        parts.append(text)
    return "".join(parts)
